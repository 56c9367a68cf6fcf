"""Exception handlers — every failure leaves the API as ``{"success": false, "error": ...}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from snipshare.application.schemas import ErrorEnvelope
from snipshare.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidInputError,
    InvalidSnippetStateError,
    SnippetExpiredError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_EXCEPTION: dict[type[Exception], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    InvalidSnippetStateError: status.HTTP_400_BAD_REQUEST,
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    SnippetExpiredError: status.HTTP_410_GONE,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=message).model_dump(),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain, validation and catch-all handlers on the app."""

    async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        status_code = next(
            code for exc_class, code in _STATUS_BY_EXCEPTION.items() if isinstance(exc, exc_class)
        )
        logger.debug("%s %s → %d: %s", request.method, request.url.path, status_code, exc)
        return error_response(status_code, str(exc))

    for exc_class in _STATUS_BY_EXCEPTION:
        app.add_exception_handler(exc_class, domain_exception_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
