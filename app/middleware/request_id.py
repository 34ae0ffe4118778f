"""Request ID middleware.

Generates or forwards X-Request-ID, binds it to the logging context for the
duration of the request and echoes it on the response. Client-provided values
are sanitized (length + character set) to prevent log injection.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

import logging
import re
import time
import uuid
from typing import Callable

from app.shared.context import reset_request_id, set_request_id

logger = logging.getLogger("app.access")

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _sanitize_request_id(raw: str | None) -> str:
    """Return raw if valid and safe; otherwise a new hex UUID."""
    if raw and REQUEST_ID_ALLOWED_PATTERN.match(raw.strip()):
        return raw.strip()
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Tag each request with an ID and log one access line when the response starts. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = _sanitize_request_id(_get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = set_request_id(request_id)
        started = time.perf_counter()

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), request_id.encode()))
                message["headers"] = headers
                logger.info(
                    "%s %s -> %s (%.1f ms)",
                    scope.get("method"),
                    scope.get("path"),
                    message.get("status"),
                    (time.perf_counter() - started) * 1000,
                )
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            reset_request_id(token)

    return asgi_app
