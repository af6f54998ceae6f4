"""Global exception handlers.

Every failure leaves the API as the same JSON shape::

    {statusCode, timestamp, path, method, error, message, details?}

``error`` is one of :class:`catalog.core.errors.ErrorCode`. Clients should
branch on ``statusCode`` and ``error``; ``message`` is for humans.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
)
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.core.errors import CatalogError, ErrorCode
from catalog.infra.logging import get_logger
from catalog.schemas.common import ErrorResponse

logger = get_logger(__name__)

# SQLSTATE classes reported by PostgreSQL drivers
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Render the standard error body."""
    body = ErrorResponse(
        status_code=status_code,
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
        method=request.method,
        error=error,
        message=message,
        details=details,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    return None


def classify_integrity_error(exc: IntegrityError) -> tuple[int, str, str]:
    """Map a constraint violation to ``(status, error code, message)``."""
    code = _sqlstate(exc)
    text = str(exc.orig).lower() if exc.orig is not None else str(exc).lower()

    if code == _UNIQUE_VIOLATION or "unique" in text or "duplicate key" in text:
        return status.HTTP_409_CONFLICT, ErrorCode.DUPLICATE_RESOURCE, "Resource already exists"
    if code == _FOREIGN_KEY_VIOLATION or "foreign key" in text:
        return status.HTTP_400_BAD_REQUEST, ErrorCode.FOREIGN_KEY_CONSTRAINT, "Foreign key constraint failed"
    return status.HTTP_400_BAD_REQUEST, ErrorCode.DATABASE_ERROR, "Database operation failed"


def _validation_details(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group validation messages by field (``body.name`` -> ``name``)."""
    details: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        details.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return details


def _code_for_status(status_code: int) -> str:
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.RESOURCE_NOT_FOUND
    if status_code == status.HTTP_409_CONFLICT:
        return ErrorCode.DUPLICATE_RESOURCE
    if status_code in (status.HTTP_400_BAD_REQUEST, status.HTTP_422_UNPROCESSABLE_ENTITY):
        return ErrorCode.VALIDATION_ERROR
    return ErrorCode.INTERNAL_ERROR


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.info(
        "Request rejected",
        method=request.method,
        path=request.url.path,
        error=exc.error_code,
        error_type=type(exc).__name__,
        message=exc.message,
    )
    return error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _validation_details(exc)
    logger.info(
        "Request validation failed",
        method=request.method,
        path=request.url.path,
        fields=sorted(details),
    )
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.VALIDATION_ERROR,
        "Validation failed",
        details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    return error_response(request, exc.status_code, _code_for_status(exc.status_code), message)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    status_code, code, message = classify_integrity_error(exc)
    logger.warning(
        "Database constraint violated",
        method=request.method,
        path=request.url.path,
        error=code,
        detail=str(exc.orig),
    )
    return error_response(request, status_code, code, message)


async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    return error_response(
        request,
        status.HTTP_404_NOT_FOUND,
        ErrorCode.RESOURCE_NOT_FOUND,
        "Resource not found",
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    unavailable = isinstance(exc, (OperationalError, InterfaceError))
    logger.error(
        "Database error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return error_response(
        request,
        status.HTTP_503_SERVICE_UNAVAILABLE if unavailable else status.HTTP_400_BAD_REQUEST,
        ErrorCode.DATABASE_ERROR,
        "Database unavailable" if unavailable else "Database operation failed",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers; Starlette resolves them along the exception MRO."""
    app.add_exception_handler(CatalogError, catalog_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NoResultFound, no_result_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
