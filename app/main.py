"""EventHub ASGI application.

``create_app()`` assembles the API: settings, rate limiter, error envelope,
middleware stack and the /api/v1 routers. ``uvicorn app.main:app`` serves the
module-level instance; tests call create_app() themselves after setting env.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from app.pages import render_root_page


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    # add_middleware wraps the current stack, so the last one added runs first:
    # request ID -> security headers -> CORS -> routes.
    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.app_env == "prod")
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Events, registrations, messaging, featured promotions and bulk imports.",
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    # Replaced by the Redis client during startup when caching is enabled.
    app.state.cache = None
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    _install_middleware(app, settings)
    app.include_router(api_router, prefix="/api/v1")

    landing = render_root_page(settings.app_name, settings.app_version)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def root() -> HTMLResponse:
        return HTMLResponse(content=landing)

    return app


app = create_app()
