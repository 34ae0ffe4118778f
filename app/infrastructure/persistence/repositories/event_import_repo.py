"""EventImport repository."""

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from app.infrastructure.persistence.models.event_import import EventImport
from app.infrastructure.persistence.repositories.base import BaseRepository


class EventImportRepository(BaseRepository[EventImport]):
    resource_name = "event_import"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EventImport)

    async def create_import(self, **fields: Any) -> EventImport:
        return await self.create(EventImport(**fields))

    def savepoint(self) -> AsyncSessionTransaction:
        """Nested transaction for one import row; use as `async with repo.savepoint():`."""
        return self.db.begin_nested()

    async def list_recent(self, skip: int = 0, limit: int = 20) -> list[EventImport]:
        result = await self.db.execute(
            select(EventImport)
            .order_by(desc(EventImport.created_at), desc(EventImport.id))
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())
