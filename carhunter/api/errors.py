import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from carhunter.schemas.search import SearchResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    payload = SearchResponse(ok=False, error=message, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload, exclude_none=True))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", details)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
