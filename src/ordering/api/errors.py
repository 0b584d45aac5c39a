"""Uniform error rendering for the Ordering API.

Every failure leaves the service as ``{"success": false, "message": ...}``
with a status code chosen by the kind of error. Field-level detail from
validation errors is kept under ``errors``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from ordering.exceptions import (
    ForbiddenError,
    InsufficientStockError,
    InvalidTransitionError,
    UnauthenticatedError,
)

logger = structlog.get_logger(__name__)


def error_message(exc) -> str:
    """Flatten an exception's messages into one readable line."""
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        parts = []
        for errors in messages.values():
            if isinstance(errors, (list, tuple)):
                parts.extend(str(error) for error in errors)
            else:
                parts.append(str(errors))
        if parts:
            return "; ".join(parts)
    elif messages:
        return str(messages)
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


def error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def _handler(status_code: int):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        message = error_message(exc)
        logger.info(
            "request_rejected",
            path=request.url.path,
            status_code=status_code,
            error=exc.__class__.__name__,
            message=message,
        )
        messages = getattr(exc, "messages", None)
        return error_response(status_code, message, messages if isinstance(messages, dict) else None)

    return handle


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    message = " | ".join(parts) or "Invalid request"
    logger.info("request_rejected", path=request.url.path, status_code=400, message=message)
    return error_response(400, message)


async def _unexpected_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_failed", path=request.url.path, error=exc.__class__.__name__)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses on ``app``."""
    app.add_exception_handler(ObjectNotFoundError, _handler(404))
    app.add_exception_handler(InsufficientStockError, _handler(400))
    app.add_exception_handler(InvalidTransitionError, _handler(400))
    app.add_exception_handler(ValidationError, _handler(400))
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(UnauthenticatedError, _handler(401))
    app.add_exception_handler(ForbiddenError, _handler(403))
    app.add_exception_handler(ExpectedVersionError, _handler(409))
    app.add_exception_handler(Exception, _unexpected_handler)
