"""Startup and shutdown for the EventHub API.

Startup configures logging and, when enabled, connects the Redis cache used
for featured-event lists. A Redis that cannot be reached leaves app.state.cache
as None so the public endpoints fall back to the database. Shutdown closes the
cache and disposes the SQL engine if one was created.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.logging import setup_logging

logger = logging.getLogger(__name__)


async def _connect_cache(app: FastAPI) -> None:
    from app.infrastructure.cache.redis_cache import CacheService

    cache = CacheService()
    await cache.connect()
    if cache.is_available():
        app.state.cache = cache
    else:
        logger.warning("Featured-event cache unavailable; serving lists from the database")
        app.state.cache = None


async def _close_resources(app: FastAPI) -> None:
    cache = getattr(app.state, "cache", None)
    if cache is not None:
        await cache.disconnect()
        app.state.cache = None

    from app.infrastructure.persistence import database

    if database.engine is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    setup_logging()

    app.state.cache = None
    if settings.redis_enabled:
        await _connect_cache(app)
    logger.info(
        "%s %s starting (env=%s, cache=%s)",
        settings.app_name,
        settings.app_version,
        settings.app_env,
        "redis" if app.state.cache is not None else "off",
    )
    try:
        yield
    finally:
        await _close_resources(app)
        logger.info("%s stopped", settings.app_name)
