"""Outbox repository: enqueue notifications and hand them to a delivery worker."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.async_message import AsyncMessage
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import utc_now


class AsyncMessageRepository(BaseRepository[AsyncMessage]):
    resource_name = "async_message"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AsyncMessage)

    async def enqueue(
        self,
        queue_name: str,
        body: str,
        headers: str = "{}",
        available_at: datetime | None = None,
    ) -> AsyncMessage:
        now = utc_now()
        row = AsyncMessage(
            queue_name=queue_name,
            body=body,
            headers=headers,
            created_at=now,
            available_at=available_at or now,
        )
        return await self.create(row)

    async def get_pending(
        self, queue_name: str, limit: int = 50, now: datetime | None = None
    ) -> list[AsyncMessage]:
        """Undelivered rows whose available_at has passed, in insertion order."""
        now = now or utc_now()
        result = await self.db.execute(
            select(AsyncMessage)
            .where(
                AsyncMessage.queue_name == queue_name,
                AsyncMessage.delivered_at.is_(None),
                AsyncMessage.available_at <= now,
            )
            .order_by(AsyncMessage.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def mark_delivered(self, row: AsyncMessage, now: datetime | None = None) -> None:
        row.delivered_at = now or utc_now()
        await self.save(row)
