"""
Exception handlers.

Maps the shared exception hierarchy onto HTTP responses so feature modules
only ever raise domain errors:

- ValidationError / request validation -> 400 with field details
- AuthenticationError -> 401
- AuthorizationError -> 403
- NotFoundError -> 404
- ServerConfigurationError -> 500
- anything else -> 500 INTERNAL_ERROR, with no internals in the body
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    MapsyError,
    NotFoundError,
    ServerConfigurationError,
    ValidationError,
)

from .models.errors import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

STATUS_CODES: list[tuple[type[MapsyError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ServerConfigurationError, 500),
]


def status_for(exc: MapsyError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


def internal_error_response() -> JSONResponse:
    body = ErrorResponse(error="Internal server error", code="INTERNAL_ERROR")
    return JSONResponse(status_code=500, content=body.model_dump())


async def handle_mapsy_error(request: Request, exc: MapsyError) -> JSONResponse:
    status_code = status_for(exc)

    if isinstance(exc, ValidationError):
        detail = exc.details.get("errors") or [{"msg": exc.message, **exc.details}]
        body = ValidationErrorResponse(error=exc.message, detail=jsonable_encoder(detail))
        return JSONResponse(status_code=400, content=body.model_dump())

    if status_code == 500 and not isinstance(exc, ServerConfigurationError):
        logger.exception(f"Unhandled {exc.code} on {request.method} {request.url.path}")
        return internal_error_response()

    if status_code == 500:
        logger.error(f"Server misconfiguration: {exc.message} ({exc.details})")

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    body = ErrorResponse(error=exc.message, code=exc.code, details=jsonable_encoder(exc.details))
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    body = ValidationErrorResponse(detail=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(MapsyError, handle_mapsy_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
