"""Back-office exceptions and the handlers that turn them into responses.

Every error leaves the API in the same envelope::

    {"error": {"code": "DUPLICATE_RECORD", "message": "...", "details": {...}}}

Failure families:

- cloud unreachable    → CloudPersistenceError (never reaches a client while
                         the local store works; the facade absorbs it)
- validation failed    → ValidationFailedError, request validation errors
- duplicate record     → DuplicateRecordError / DuplicateTripError (409 with
                         the record already holding the key)
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ALSException(Exception):
    """Base exception for back-office errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: dict | list | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ValidationFailedError(ALSException):
    """Input rejected by a business rule."""

    def __init__(self, message: str, error_code: str = "VALIDATION_FAILED"):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_code=error_code,
        )


class ResourceNotFoundError(ALSException):
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="RESOURCE_NOT_FOUND",
        )


class DuplicateRecordError(ALSException):
    """A record with the same business key already exists."""

    def __init__(self, collection: str, field: str, value: str, existing: Any = None):
        self.collection = collection
        self.field = field
        self.value = value
        self.existing = existing
        super().__init__(
            message=f"{collection}: a record with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            error_code="DUPLICATE_RECORD",
            details=_existing_details(existing),
        )


class DuplicateTripError(DuplicateRecordError):
    """Another trip already carries this order number (OS)."""

    def __init__(self, existing: Any):
        os_number = getattr(existing, "os", None) or ""
        super().__init__("trips", "os", os_number, existing)


class CloudUnavailableError(ALSException):
    """An operation that needs the cloud database found none configured."""

    def __init__(self, message: str = "Cloud database unavailable"):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="CLOUD_UNAVAILABLE",
        )


class CloudPersistenceError(ALSException):
    """A remote read or write failed."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="CLOUD_PERSISTENCE_FAILED",
        )


def _existing_details(existing: Any) -> dict | None:
    if existing is None:
        return None
    if hasattr(existing, "model_dump"):
        existing = existing.model_dump(by_alias=True, mode="json")
    return {"existing": existing}


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict | list | None = None,
) -> JSONResponse:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


def _where(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


# ── Handlers ────────────────────────────────────────────────────

async def als_exception_handler(request: Request, exc: ALSException) -> JSONResponse:
    logger.warning(
        f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.error_code, **_where(request)},
    )
    return error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {exc.detail}", extra=_where(request))
    return error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError | ValidationError,
) -> JSONResponse:
    """Request bodies (and records rebuilt in services) that fail their schema."""
    errors = [
        {
            # body -> driver -> plateHorse reads as body.driver.plateHorse
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}: {len(errors)} field(s)",
        extra=_where(request),
    )
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Validation error",
        {"errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}", extra=_where(request))
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ALSException, als_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
