"""Base repository: generic CRUD and lifecycle hooks (cache invalidation)."""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, count, create, save, delete and hooks.

    Entities are returned attached to the session; callers mutate them and
    call save() to flush. Subclasses override _on_after_create,
    _on_after_update, _on_before_delete for cache invalidation.
    """

    resource_name: str = "resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def get_or_raise(self, entity_id: Any) -> ModelType:
        """Return a record by primary key; raise ResourceNotFoundException if missing."""
        obj = await self.get_by_id(entity_id)
        if obj is None:
            raise ResourceNotFoundException(self.resource_name, str(entity_id))
        return obj

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records with pagination."""
        result = await self.db.execute(select(self.model).offset(skip).limit(limit))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and run _on_after_create hook."""
        self.db.add(obj)
        await self.db.flush()
        await self._on_after_create(obj)
        return obj

    async def create_unique(
        self, obj: ModelType, conflict: Callable[[], Exception]
    ) -> ModelType:
        """Insert inside a savepoint; a unique violation raises conflict() instead.

        The savepoint keeps the surrounding transaction usable after the failure.
        """
        try:
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
        except IntegrityError as e:
            raise conflict() from e
        await self._on_after_create(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and run _on_after_update hook."""
        self.db.add(obj)
        await self.db.flush()
        await self._on_after_update(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Run _on_before_delete hook then delete the record."""
        await self._on_before_delete(obj)
        await self.db.delete(obj)
        await self.db.flush()

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""

    async def _on_after_update(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""

    async def _on_before_delete(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""
