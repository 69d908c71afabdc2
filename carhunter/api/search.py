import logging
import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from carhunter.api.deps import get_llm_client
from carhunter.api.errors import error_response
from carhunter.schemas.search import RawResults, SearchRequest, SearchResponse
from carhunter.search.direct import run_direct_search
from carhunter.search.llm_client import LlmConfigurationError, LlmSearchError, PerplexityClient
from carhunter.search.parser import normalize_llm_response
from carhunter.search.prompt import build_search_prompt
from carhunter.validators import validate_search_request

router = APIRouter(prefix="/api", tags=["search"])
logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
def llm_search(
    payload: SearchRequest,
    llm: PerplexityClient = Depends(get_llm_client),
) -> SearchResponse | JSONResponse:
    if not payload.makes or not payload.sites:
        return error_response(status.HTTP_400_BAD_REQUEST, "Missing required fields: makes, sites")

    errors = validate_search_request(payload)
    if errors:
        return error_response(status.HTTP_400_BAD_REQUEST, " ".join(errors.values()), errors)

    prompt = build_search_prompt(payload)
    try:
        content = llm.search(prompt)
    except LlmConfigurationError as exc:
        logger.error("LLM search unavailable: %s", exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except LlmSearchError as exc:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    normalized = normalize_llm_response(content, payload.sites)
    if normalized.results is None:
        return SearchResponse(
            ok=True,
            query=payload,
            results=RawResults(raw=normalized.raw or ""),
            timestamp=_now_ms(),
            method="llm_search",
        )

    logger.info(
        "LLM search parsed via %s: %s valid of %s listings",
        normalized.strategy,
        normalized.total_found,
        normalized.raw_total,
    )
    return SearchResponse(
        ok=True,
        query=payload,
        results=normalized.results,
        timestamp=_now_ms(),
        total_found=normalized.total_found,
        raw_total=normalized.raw_total,
        method="llm_search",
    )


@router.post("/direct-search", response_model=SearchResponse, response_model_exclude_none=True)
def direct_search(payload: SearchRequest) -> SearchResponse | JSONResponse:
    logger.info("Starting direct search: mode=%s makes=%s sites=%s", payload.mode, payload.makes, payload.sites)

    if not payload.mode or not payload.makes:
        return error_response(status.HTTP_400_BAD_REQUEST, "Missing required fields: mode, makes")

    outcome = run_direct_search(payload)
    return SearchResponse(
        ok=True,
        query=payload,
        results=outcome.results,
        timestamp=_now_ms(),
        total_found=len(outcome.results),
        method="direct_search",
        debug={
            "sites_searched": outcome.sites_searched,
            "raw_results": outcome.raw_results,
            "unique_results": len(outcome.results),
            "duplicates_removed": outcome.duplicates_removed,
        },
    )
