"""Cache: Redis service and cache key utilities.

Used by services for read-heavy lists (featured events). CacheService uses
app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.keys import (
    featured_active_key,
    featured_pattern,
    featured_rotation_key,
)
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "featured_active_key",
    "featured_pattern",
    "featured_rotation_key",
]
