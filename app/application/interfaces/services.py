"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Minimal cache protocol for list caching (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""


class IPasswordHasher(Protocol):
    """Hashes credentials for administrators and imported attendees."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...
