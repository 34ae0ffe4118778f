"""HTTP middleware: request ID (with access log) and security headers.

Applied in main app; order matters (first added = outermost).
Import and use from app.main.
"""

from app.middleware.request_id import RequestIDMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
