"""Exception handlers mapping EventHub errors to JSON responses.

Every error body has the same envelope: ``error`` (machine code), ``message``
and, when available, ``details`` and ``request_id``. Domain errors carry their
own code; framework errors are folded into the same shape.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import EventHubException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status; unknown codes are client errors.
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "RECURRENCE_CONFIGURATION_ERROR": 400,
    "IMPORT_ERROR": 400,
    "DUPLICATE_EMAIL": 409,
    "DUPLICATE_SLUG": 409,
    "EVENT_FULL": 409,
    "RESOURCE_IN_USE": 409,
    "TRANSFORMATION_FAILED": 422,
    "SERVICE_UNAVAILABLE": 503,
}


def _status_for(error_code: str) -> int:
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _error_body(request: Request, payload: dict[str, Any]) -> dict[str, Any]:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        payload["request_id"] = request_id
    return payload


def _eventhub_exception_handler(
    request: Request, exc: EventHubException
) -> JSONResponse:
    status = _status_for(exc.error_code)
    log = logger.error if status >= 500 else logger.info
    log("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=_error_body(request, exc.to_dict()))


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with pydantic's error list (ctx values made JSON-safe)."""
    return JSONResponse(
        status_code=422,
        content=_error_body(
            request,
            {
                "error": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        ),
    )


def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # Constraint violations that slipped past service checks (usually at commit).
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content=_error_body(
            request,
            {"error": "CONFLICT", "message": "Request conflicts with existing data"},
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, {"error": "HTTP_ERROR", "message": exc.detail}),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed when debug is on."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=_error_body(request, {"error": "INTERNAL_ERROR", "message": message}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app. Call once from create_app()."""
    app.add_exception_handler(EventHubException, _eventhub_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
