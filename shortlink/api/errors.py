"""Exception handlers for the HTTP API.

Maps the core exception hierarchy onto HTTP status codes. Expected
outcomes (bad input, unknown code, duplicate code) are logged at info
level; storage failures are logged as errors.
"""

import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from shortlink.core.exceptions import (
    InvalidCodeError,
    InvalidTargetUrlError,
    ShortCodeAlreadyExistsError,
    ShortCodeNotUniqueError,
    ShortenerError,
    ShortUrlNotFoundError,
    StorageError,
)

STATUS_CODES = [
    (InvalidCodeError, status.HTTP_400_BAD_REQUEST, "invalid_code"),
    (InvalidTargetUrlError, status.HTTP_400_BAD_REQUEST, "invalid_target_url"),
    (ShortUrlNotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (ShortCodeAlreadyExistsError, status.HTTP_409_CONFLICT, "already_exists"),
    (ShortCodeNotUniqueError, status.HTTP_500_INTERNAL_SERVER_ERROR, "not_unique"),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE, "storage_error"),
]


def error_status(exc: ShortenerError):
    """Return the HTTP status and error name for a core exception."""
    for exc_type, status_code, name in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code, name
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"


async def shortener_exception_handler(request: Request, exc: ShortenerError) -> JSONResponse:
    status_code, name = error_status(exc)
    location = f"{request.method} {request.url.path}"

    if status_code >= 500:
        logger.opt(exception=exc).error(f"{name} in {location}: {exc}")
    else:
        logger.info(f"{name} in {location}: {exc}")

    content = {"detail": str(exc), "error": name}
    if isinstance(exc, InvalidCodeError) and exc.reason is not None:
        content["reason"] = exc.reason.value
    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation errors with detailed information."""
    logger.info(f"Request validation error: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())}
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch and log anything that escaped the handlers above."""
    error_id = f"error-{time.time()}"
    logger.opt(exception=exc).error(
        f"Unhandled exception in {request.method} {request.url.path} ({error_id})"
    )
    app_settings = getattr(request.app.state, "settings", None)
    debug = bool(app_settings and app_settings.DEBUG)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error occurred",
            "error_id": error_id,
            "message": str(exc) if debug else "Internal server error",
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShortenerError, shortener_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
