import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from carhunter.api.deps import get_catalog_service
from carhunter.catalog.providers import CatalogError
from carhunter.catalog.service import CatalogService
from carhunter.schemas.catalog import MakesResponse, ModelsResponse

router = APIRouter(prefix="/api/catalog", tags=["catalog"])
logger = logging.getLogger(__name__)


@router.get("/makes", response_model=MakesResponse, response_model_exclude_none=True)
def list_makes(
    provider: str | None = Query(None, max_length=32),
    catalog: CatalogService = Depends(get_catalog_service),
) -> MakesResponse | JSONResponse:
    try:
        makes = catalog.resolve_makes(provider)
    except CatalogError:
        logger.exception("Makes API error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch makes", "makes": []},
        )
    return MakesResponse(makes=makes)


@router.get("/models", response_model=ModelsResponse, response_model_exclude_none=True)
def list_models(
    make: str | None = Query(None, max_length=120),
    provider: str | None = Query(None, max_length=32),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ModelsResponse | JSONResponse:
    if not make or not make.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Make parameter is required", "models": []},
        )

    try:
        models = catalog.resolve_models(make, provider)
    except CatalogError:
        logger.exception("Models API error for make=%s", make)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch models", "models": []},
        )
    return ModelsResponse(models=models)
