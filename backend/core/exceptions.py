"""
Application-level exception handlers for consistent API error responses.

Routes normally translate errors themselves; these handlers catch what
escapes so the client still gets a ``{"detail": ...}`` body.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
import logging

from .error_handling import APIError

logger = logging.getLogger(__name__)


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle service errors raised outside ``handle_api_errors``"""
    logger.warning(f"APIError at {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "path": str(request.url.path)},
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Convert ValueError to a 400 response"""
    logger.warning(f"ValueError at {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "path": str(request.url.path)},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error at {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
