from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vistagram.core.config import settings

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """HTTPException rendered as ``{"error": ..., "details": ...}``."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        super().__init__(status_code=status_code, detail=error)
        self.details = details


def error_body(error: str, details: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": error}
    if details:
        body["details"] = details
    return body


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    details = getattr(exc, "details", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), details),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies are client errors like any other missing field
    logger.warning(f"Invalid request on {request.url.path}: {exc.errors()}")
    messages = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid request", "; ".join(messages)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


def internal_error(error: str, exc: Exception) -> APIError:
    """500 for an unexpected failure; the cause is only exposed in debug mode."""
    return APIError(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error,
        str(exc) if settings.DEBUG else None,
    )
