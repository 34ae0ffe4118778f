"""Security headers middleware.

JSON API responses get a locked-down CSP; the interactive docs pages load
their assets from a CDN and get a relaxed policy instead.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

from typing import Callable

API_CSP = "default-src 'none'; frame-ancestors 'none'"
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "img-src 'self' data: https://fastapi.tiangolo.com"
)
DOCS_PATHS = ("/docs", "/redoc", "/")

COMMON_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def SecurityHeadersMiddleware(app: Callable, hsts: bool = False) -> Callable:
    """Set CSP and common security headers on all HTTP responses. Raw ASGI.

    HSTS is only sent when hsts is True (production behind TLS).
    """
    common = [(k.encode(), v.encode()) for k, v in COMMON_HEADERS.items()]
    if hsts:
        common.append((b"Strict-Transport-Security", b"max-age=31536000; includeSubDomains"))

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        path = scope.get("path", "")
        csp = DOCS_CSP if path in DOCS_PATHS else API_CSP

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                for name_b, value_b in [*common, (b"Content-Security-Policy", csp.encode())]:
                    if name_b.lower() not in seen:
                        headers.append((name_b, value_b))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
