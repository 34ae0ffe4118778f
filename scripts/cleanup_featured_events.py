"""Deactivate featured events whose end date has passed.

Usage:
    uv run python -m scripts.cleanup_featured_events
Meant for a cron job; the same operation is exposed at
POST /api/v1/featured-events/cleanup.
"""

import asyncio
import sys

import app.infrastructure.persistence.database as database
from app.application.services import FeaturedEventService
from app.core.config import get_settings
from app.infrastructure.cache import CacheService
from app.infrastructure.persistence.repositories import (
    EventRepository,
    FeaturedEventRepository,
)
from app.shared.logging import setup_logging


async def main() -> None:
    """Run cleanup in one transaction; drops the cached rotation when Redis is enabled."""
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    cache = CacheService() if settings.redis_enabled else None
    if cache is not None:
        await cache.connect()
    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                service = FeaturedEventService(
                    featured_repo=FeaturedEventRepository(session),
                    event_repo=EventRepository(session),
                    cache=cache,
                    cache_ttl=settings.featured_cache_ttl,
                    rotation_limit=settings.featured_rotation_limit,
                )
                deactivated = await service.cleanup_expired()
        print(f"Deactivated: {deactivated}")
    finally:
        if cache is not None:
            await cache.disconnect()
        await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
