"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to JSON responses of the form {"error": <message>, "code": <code>}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from askfreely.core.config import get_settings
from askfreely.domain.exceptions import AskFreelyException, RateLimitedException
from askfreely.middleware.cors import CORS_HEADERS

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "BAD_REQUEST": 400,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,
    "RATE_LIMITED": 429,
    "UPSTREAM_FAILURE": 502,
}

# Path prefix -> message for unexpected failures on that route
_ROUTE_ERROR_MESSAGES: dict[str, str] = {
    "/api/v1/questions": "Failed to submit question. Please try again.",
    "/api/v1/email-queue": "Failed to process email queue",
}
_DEFAULT_ERROR_MESSAGE = "Internal server error"


def route_error_message(path: str) -> str:
    """Return the caller-facing 500 message for a request path."""
    for prefix, message in _ROUTE_ERROR_MESSAGES.items():
        if path.startswith(prefix):
            return message
    return _DEFAULT_ERROR_MESSAGE


def _askfreely_exception_handler(
    request: Request, exc: AskFreelyException
) -> JSONResponse:
    """Return JSON from AskFreelyException.to_dict() with the mapped status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    headers = None
    if isinstance(exc, RateLimitedException):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with the generic malformed-body message."""
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "code": "BAD_REQUEST"},
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (routing 404/405 and the like)."""
    if exc.status_code == 405:
        content = {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}
    else:
        content = {"error": exc.detail, "code": "HTTP_ERROR"}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 with the route's message; include detail only when debug is True.

    Runs outside the app middleware stack, so CORS headers are set here.
    """
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    content = {"error": route_error_message(request.url.path), "code": "INTERNAL_ERROR"}
    if get_settings().debug:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content=content, headers=CORS_HEADERS)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: AskFreelyException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(AskFreelyException, _askfreely_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
