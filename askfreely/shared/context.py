"""Request context management using contextvars.

Holds the id of the request being served so log lines written anywhere
below the HTTP layer (use cases, store and mail clients) can carry it.

Usage:
    token = set_request_id("req-123")
    try:
        ...
    finally:
        reset_request_id(token)
"""

from contextvars import ContextVar, Token

NO_REQUEST_ID = "-"

_current_request_id: ContextVar[str] = ContextVar(
    "current_request_id", default=NO_REQUEST_ID
)


def set_request_id(request_id: str) -> Token:
    """Set the current request id; returns a token for reset_request_id."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _current_request_id.reset(token)


def get_request_id() -> str:
    """Return the current request id, or NO_REQUEST_ID outside a request."""
    return _current_request_id.get()
