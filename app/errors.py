# app/errors.py
"""
Error taxonomy for the alarm backend + FastAPI handlers.

Services raise these; register_error_handlers() turns them into a single JSON
shape for every failure:

    {"error": "<human readable message>", "code": "<ERROR_CODE>", "details": {...}}

ValidationError → 400, NotFoundError → 404, UploadError → 502, StorageError → 500.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.utils.logger import get_logger

logger = get_logger(__name__)


class AlarmAPIError(Exception):
    """Base class for every error the API reports to clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(AlarmAPIError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else None)


class NotFoundError(AlarmAPIError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, **identifiers: Any):
        super().__init__(f"{resource} not found", {"resource": resource, **identifiers})


class UploadError(AlarmAPIError):
    """Media service rejected the photo, timed out, or is not configured."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "UPLOAD_ERROR"


class StorageError(AlarmAPIError):
    """Database write/read failed, including lost connections."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "STORAGE_ERROR"


def error_response(status_code: int, error_code: str, message: str,
                   details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": message, "code": error_code}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to the app."""

    @app.exception_handler(AlarmAPIError)
    async def handle_alarm_error(request: Request, exc: AlarmAPIError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed [{exc.error_code}]: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected [{exc.error_code}]: {exc.message}")
        return error_response(exc.status_code, exc.error_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Keep the 400 contract for malformed bodies instead of FastAPI's default 422
        fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
        return error_response(status.HTTP_400_BAD_REQUEST, ValidationError.error_code,
                              "Invalid request payload", {"fields": fields})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Internal server error")
