"""Translation of domain errors into JSON responses.

Business-rule violations carry their message to the client. Anything
unexpected is logged with request context and answered with a generic 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _first_message(messages) -> str:
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
        return ""
    if isinstance(messages, list | tuple):
        return str(messages[0]) if messages else ""
    return str(messages)


def _error_body(messages) -> dict:
    errors = messages if isinstance(messages, dict) else {"_entity": [_first_message(messages)]}
    return {"success": False, "message": _first_message(messages), "errors": errors}


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body(exc.messages))


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    message = exc.args[0] if exc.args else "Not found"
    return JSONResponse(status_code=404, content=_error_body(message))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error while processing request",
        method=request.method,
        path=request.url.path,
        user_id=request.headers.get("x-user-id"),
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"success": False, "message": GENERIC_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the storefront error envelope on top of Protean's defaults."""
    register_protean_handlers(app)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
