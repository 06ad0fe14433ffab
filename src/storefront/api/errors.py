"""Translate domain and request errors into ``{message, error}`` responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


def first_message(messages) -> str:
    """Pick a human-readable message out of a Protean error payload."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, (list, tuple)) and value:
                return str(value[0])
            if value:
                return str(value)
    if isinstance(messages, (list, tuple)) and messages:
        return str(messages[0])
    return str(messages)


def _error(status_code: int, message: str, error) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "error": error})


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, first_message(exc.messages), exc.messages)


def error_payload(exc: Exception):
    """The payload an exception was raised with, whether or not it exposes ``messages``."""
    messages = getattr(exc, "messages", None)
    if messages:
        return messages
    if exc.args and isinstance(exc.args[0], (dict, list, tuple)):
        return exc.args[0]
    return str(exc)


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    messages = error_payload(exc)
    return _error(404, first_message(messages), messages)


async def handle_authentication_error(request: Request, exc: AuthenticationError) -> JSONResponse:
    return _error(401, exc.message, exc.message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), str(exc.detail))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    message = errors[0]["msg"] if errors else "Invalid request"
    return _error(400, message, errors)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return _error(500, "Something went wrong!", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(AuthenticationError, handle_authentication_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
