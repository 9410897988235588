"""Exception handlers rendering every failure in the uniform error envelope.

Envelope: {timestamp, status, error, message, path, validationErrors?}
"""

import logging
from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(
    request: Request,
    status_code: int,
    message: str,
    validation_errors: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an error envelope response."""
    content: dict = {
        "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        "status": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message,
        "path": request.url.path,
    }
    if validation_errors is not None:
        content["validationErrors"] = validation_errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.status_code} at {request.url.path}: {exc.detail}")
    else:
        logger.debug(f"{exc.status_code} at {request.url.path}: {exc.detail}")
    return error_response(request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors():
        # loc is e.g. ("body", "email") or ("query", "limit")
        field = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
        errors[field] = error["msg"]
    logger.debug(f"400 validation errors at {request.url.path}: {errors}")
    return error_response(request, status.HTTP_400_BAD_REQUEST, "Validation failed", validation_errors=errors)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # A unique index rejected a concurrent insert that passed the service-level check
    logger.warning(f"409 integrity violation at {request.url.path}: {exc.orig}")
    return error_response(request, status.HTTP_409_CONFLICT, "Duplicate key / conflict")


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return error_response(request, status.HTTP_429_TOO_MANY_REQUESTS, "Rate limit exceeded")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"500 unexpected error at {request.url.path}: {exc}", exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope handlers to the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unexpected_error_handler)
