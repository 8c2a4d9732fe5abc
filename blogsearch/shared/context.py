"""Request-scoped context using contextvars.

The request id set by RequestIDMiddleware lives here for the duration of an
HTTP request or a whole live-search WebSocket connection. Tasks started
inside that scope (debounced searches, page fetches) copy the context, so
their log lines carry the same id.

Usage:
    token = set_request_id("abc")
    try:
        ...
    finally:
        reset_request_id(token)
"""

import logging
from contextvars import ContextVar, Token

NO_REQUEST_ID = "-"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Bind request_id to the current context; returns the token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()


class RequestIdLogFilter(logging.Filter):
    """Adds record.request_id ("-" outside a request) for the log format."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or NO_REQUEST_ID
        return True
