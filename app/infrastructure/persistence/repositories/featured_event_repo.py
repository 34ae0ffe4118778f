"""FeaturedEvent repository: display-window queries, counters and cleanup."""

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import Float, and_, cast, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.featured_event import FeaturedEventStatistics
from app.domain.enums import DisplayType
from app.infrastructure.persistence.models.featured_event import FeaturedEvent
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import utc_now


def _within_window(now: datetime):
    return and_(
        FeaturedEvent.is_active.is_(True),
        or_(FeaturedEvent.start_date.is_(None), FeaturedEvent.start_date <= now),
        or_(FeaturedEvent.end_date.is_(None), FeaturedEvent.end_date >= now),
    )


class FeaturedEventRepository(BaseRepository[FeaturedEvent]):
    """Featured events ordered by priority (desc) then newest first."""

    resource_name = "featured_event"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, FeaturedEvent)

    async def _on_after_create(self, obj: FeaturedEvent) -> None:
        await self.db.refresh(obj, attribute_names=["related_event"])

    async def _on_after_update(self, obj: FeaturedEvent) -> None:
        await self.db.refresh(obj, attribute_names=["related_event"])

    async def create_featured(self, *, created_by_id: str, **fields: Any) -> FeaturedEvent:
        """Insert a featured event; fields are FeaturedEvent column values."""
        return await self.create(FeaturedEvent(created_by_id=created_by_id, **fields))

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[FeaturedEvent]:
        result = await self.db.execute(
            select(FeaturedEvent)
            .order_by(desc(FeaturedEvent.priority), desc(FeaturedEvent.created_at))
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().unique().all())

    async def get_currently_active(
        self,
        display_type: str | None = None,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> list[FeaturedEvent]:
        """Active items whose display window contains now."""
        q = select(FeaturedEvent).where(_within_window(now or utc_now()))
        if display_type:
            q = q.where(FeaturedEvent.display_type == display_type)
        q = q.order_by(desc(FeaturedEvent.priority), desc(FeaturedEvent.created_at))
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().unique().all())

    async def get_for_rotation(
        self, limit: int = 5, now: datetime | None = None
    ) -> list[FeaturedEvent]:
        return await self.get_currently_active(
            display_type=DisplayType.BANNER.value, limit=limit, now=now
        )

    async def get_expiring_soon(
        self, days: int = 7, now: datetime | None = None
    ) -> list[FeaturedEvent]:
        """Active items whose end date falls within the next `days` days."""
        now = now or utc_now()
        result = await self.db.execute(
            select(FeaturedEvent)
            .where(
                FeaturedEvent.is_active.is_(True),
                FeaturedEvent.end_date.is_not(None),
                FeaturedEvent.end_date.between(now, now + timedelta(days=days)),
            )
            .order_by(FeaturedEvent.end_date)
        )
        return list(result.scalars().unique().all())

    async def get_top_performing(self, limit: int = 10) -> list[FeaturedEvent]:
        """Items with views, best click-through rate first (ties: more views first)."""
        ctr = cast(FeaturedEvent.click_count, Float) / FeaturedEvent.view_count
        result = await self.db.execute(
            select(FeaturedEvent)
            .where(FeaturedEvent.view_count > 0)
            .order_by(ctr.desc(), FeaturedEvent.view_count.desc())
            .limit(limit)
        )
        return list(result.scalars().unique().all())

    async def increment_views(self, featured_id: str) -> None:
        await self.db.execute(
            update(FeaturedEvent)
            .where(FeaturedEvent.id == featured_id)
            .values(view_count=FeaturedEvent.view_count + 1)
        )

    async def increment_clicks(self, featured_id: str) -> None:
        await self.db.execute(
            update(FeaturedEvent)
            .where(FeaturedEvent.id == featured_id)
            .values(click_count=FeaturedEvent.click_count + 1)
        )

    async def deactivate_expired(self, now: datetime | None = None) -> int:
        """Switch off active items whose end date has passed. Returns rows changed."""
        result = await self.db.execute(
            update(FeaturedEvent)
            .where(
                FeaturedEvent.is_active.is_(True),
                FeaturedEvent.end_date.is_not(None),
                FeaturedEvent.end_date < (now or utc_now()),
            )
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    async def get_statistics(self) -> FeaturedEventStatistics:
        """Totals over active items; average CTR is clicks / views as a percentage."""
        total = await self.count()
        result = await self.db.execute(
            select(
                func.count(FeaturedEvent.id),
                func.coalesce(func.sum(FeaturedEvent.view_count), 0),
                func.coalesce(func.sum(FeaturedEvent.click_count), 0),
            ).where(FeaturedEvent.is_active.is_(True))
        )
        active, views, clicks = result.one()
        views, clicks = int(views), int(clicks)
        average_ctr = round((clicks / views) * 100, 2) if views > 0 else 0.0
        return FeaturedEventStatistics(
            total=total,
            active=int(active),
            total_views=views,
            total_clicks=clicks,
            average_ctr=average_ctr,
        )
