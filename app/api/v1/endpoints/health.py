"""Health check endpoints for liveness and readiness."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    request: Request, db: AsyncSession = Depends(get_db)
) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers a trivial query; 503 otherwise.

    The cache is reported but never fails readiness (it is optional).
    """
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="Database unreachable").model_dump(),
        )
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        cache_state = "disabled"
    else:
        cache_state = "ok" if cache.is_available() else "unavailable"
    return ReadinessResponse(cache=cache_state)
