"""
Error Handlers
Maps domain exceptions to JSON error responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..cms.errors import (
    ConfigurationError,
    ContentNotFoundError,
    ContentStorageError,
    InvalidContentError,
    StorageBackendError,
)
from ..services.errors import DuplicateStoreError, StoreNotFoundError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidRequestError(APIError):
    """Exception raised for invalid requests."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


def _error_response(status_code: int, message: str, error_type: str, details=None) -> JSONResponse:
    content = {"error": {"message": message, "type": error_type}}
    if details is not None:
        content["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _content_status(exc: ContentStorageError) -> int:
    if isinstance(exc, ContentNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, InvalidContentError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, StorageBackendError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, ConfigurationError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def setup_error_handlers(app: FastAPI) -> None:
    """
    Set up custom error handlers for the FastAPI app.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        logger.error(
            f"API error: {exc.message}",
            extra={"status_code": exc.status_code, "path": request.url.path},
        )
        return _error_response(exc.status_code, exc.message, exc.__class__.__name__, exc.details)

    @app.exception_handler(ContentStorageError)
    async def content_error_handler(request: Request, exc: ContentStorageError):
        """Handle content storage errors."""
        status_code = _content_status(exc)
        if status_code >= 500:
            logger.error(f"Storage error: {exc.message}", extra={"path": request.url.path})
        else:
            logger.warning(f"Content error: {exc.message}", extra={"path": request.url.path})
        return _error_response(status_code, exc.message, exc.__class__.__name__, exc.details)

    @app.exception_handler(StoreNotFoundError)
    async def store_not_found_handler(request: Request, exc: StoreNotFoundError):
        return _error_response(
            status.HTTP_404_NOT_FOUND, str(exc), "StoreNotFoundError", {"store": exc.code}
        )

    @app.exception_handler(DuplicateStoreError)
    async def duplicate_store_handler(request: Request, exc: DuplicateStoreError):
        return _error_response(
            status.HTTP_409_CONFLICT, str(exc), "DuplicateStoreError", {"store": exc.code}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        logger.warning(f"Validation error: {exc}", extra={"path": request.url.path})

        errors = []
        for error in exc.errors():
            errors.append(
                {
                    "loc": list(error.get("loc", [])),
                    "msg": str(error.get("msg", "")),
                    "type": error.get("type", ""),
                }
            )

        return _error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY, "Request validation failed", "ValidationError", errors
        )

    @app.exception_handler(ValidationError)
    async def model_validation_error_handler(request: Request, exc: ValidationError):
        """Handle payloads rejected while building content models."""
        logger.warning(f"Invalid payload: {exc}", extra={"path": request.url.path})
        details = [
            {"loc": list(error.get("loc", [])), "msg": str(error.get("msg", ""))}
            for error in exc.errors()
        ]
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "Invalid content", "InvalidContentError", details
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unexpected error: {exc}", exc_info=True, extra={"path": request.url.path})
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred", "InternalServerError"
        )
