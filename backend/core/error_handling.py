# backend/core/error_handling.py

"""
Error handling utilities for API routes.

Services raise the ``APIError`` hierarchy; routes wrapped with
``handle_api_errors`` turn those into ``HTTPException`` responses and hide
anything unexpected behind a generic 500 message.
"""

from typing import Any, Callable, Dict, Optional
from functools import wraps
import inspect
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, OperationalError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(APIError):
    """Resource not found error"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message, status_code=status.HTTP_404_NOT_FOUND, details=details
        )


class ConflictError(APIError):
    """Resource conflict error"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message, status_code=status.HTTP_409_CONFLICT, details=details
        )


class APIValidationError(APIError):
    """Input validation error - named to avoid the Pydantic collision"""

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"validation_errors": errors} if errors else {},
        )


class AuthorizationError(APIError):
    """Authorization error"""

    def __init__(self, message: str = "forbidden"):
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN)


class ServiceUnavailableError(APIError):
    """An external dependency is not configured or reachable"""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def handle_api_errors(
    func: Optional[Callable] = None, *, default_message: str = "Internal server error"
):
    """
    Decorator to map service errors onto HTTP responses.

    Usage:
        @router.get("/balance")
        @handle_api_errors(default_message="Failed to fetch balance")
        async def get_balance(...):
            ...
    """

    def handle_exception(e: Exception, func_name: str) -> None:
        if isinstance(e, HTTPException):
            raise e

        if isinstance(e, APIError):
            logger.warning(
                f"API Error in {func_name}: {e.message}",
                extra={"status_code": e.status_code, "details": e.details},
            )
            raise HTTPException(status_code=e.status_code, detail=e.message)

        if isinstance(e, IntegrityError):
            logger.error(f"Database integrity error in {func_name}: {e.orig}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Resource already exists with the provided unique values",
            )

        if isinstance(e, OperationalError):
            logger.error(f"Database operational error in {func_name}: {e.orig}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database service temporarily unavailable",
            )

        logger.exception(f"Unexpected error in {func_name}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=default_message
        )

    def decorator(fn: Callable) -> Callable:
        if inspect.iscoroutinefunction(fn):

            @wraps(fn)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await fn(*args, **kwargs)
                except Exception as e:
                    handle_exception(e, fn.__name__)

            return async_wrapper

        @wraps(fn)
        def sync_wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                handle_exception(e, fn.__name__)

        return sync_wrapper

    if func is not None:
        return decorator(func)
    return decorator
