"""Request context management using contextvars.

Holds the current request ID so log records emitted anywhere during a
request can carry it without threading it through every call.

Usage:
    token = set_request_id("abc123")
    ...
    reset_request_id(token)
"""

import logging
from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> Token[str | None]:
    """Bind request_id to the current task; returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id.reset(token)


class RequestIdLogFilter(logging.Filter):
    """Adds record.request_id ("-" outside a request) for the log format."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True
