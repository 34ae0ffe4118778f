"""Redis-based cache service for read-heavy lists.

Async Redis caching with TTL. Used for featured-event banner lists, which
are read on every public page and change only when an administrator saves
or cleanup runs. Key format lives in app.infrastructure.cache.keys.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache with TTL and a single reconnect attempt per failure.

    Every operation degrades to a miss (None / False / 0) when Redis is
    disabled or unreachable; callers never see Redis errors. Call connect()
    at startup and disconnect() at shutdown.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI; treated as connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection unless disabled in settings."""
        if not self.settings.redis_enabled:
            logger.info("Redis cache disabled by configuration")
            return
        if self.redis is not None:
            return
        password = (
            self.settings.redis_password.get_secret_value()
            if self.settings.redis_password
            else None
        )
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.close()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        if self.redis is None:
            return False
        try:
            await self.redis.close()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self, op_name: str, key: str, op: Callable[[redis.Redis], Awaitable[T]], default: T
    ) -> T:
        """Run op against Redis, retrying once after a reconnect; default on failure."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await op(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await op(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op_name, key)
                    return default
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op_name, key)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op_name, key)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""

        async def op(client: redis.Redis) -> Any | None:
            value = await client.get(key)
            if value is None:
                logger.debug("Cache MISS: %s", key)
                return None
            logger.debug("Cache HIT: %s", key)
            return json.loads(value)

        return await self._run("get", key, op, None)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store JSON-serializable value with TTL (seconds). Returns True on success."""
        serialized = json.dumps(value)

        async def op(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True

        return await self._run("set", key, op, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command ran."""

        async def op(client: redis.Redis) -> bool:
            await client.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._run("delete", key, op, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK.

        Args:
            pattern: Redis SCAN match pattern (e.g. featured_events:*).

        Returns:
            Number of keys deleted.
        """
        chunk_size = 500

        async def unlink(client: redis.Redis, keys: list[str]) -> int:
            async with client.pipeline(transaction=False) as pipe:
                pipe.unlink(*keys)
                results = await pipe.execute()
            return sum(int(r or 0) for r in results)

        async def op(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += await unlink(client, chunk)
                    chunk = []
            if chunk:
                deleted += await unlink(client, chunk)
            if deleted > 0:
                logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
            return deleted

        return await self._run("delete_pattern", pattern, op, 0)
