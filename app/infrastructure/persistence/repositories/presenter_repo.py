"""Presenter and agenda repositories (programme content of an event)."""

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.agenda_item import AgendaItem
from app.infrastructure.persistence.models.presenter import EventPresenter, Presenter
from app.infrastructure.persistence.repositories.base import BaseRepository


class PresenterRepository(BaseRepository[Presenter]):
    resource_name = "presenter"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Presenter)

    async def get_by_name(self, name: str) -> Presenter | None:
        result = await self.db.execute(
            select(Presenter).where(Presenter.name == name).limit(1)
        )
        return result.scalar_one_or_none()

    async def search(
        self, term: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[Presenter]:
        """Presenters by name; term matches name, email or company (substring)."""
        q = select(Presenter)
        if term:
            pattern = f"%{term}%"
            q = q.where(
                or_(
                    Presenter.name.ilike(pattern),
                    Presenter.email.ilike(pattern),
                    Presenter.company.ilike(pattern),
                )
            )
        result = await self.db.execute(
            q.order_by(Presenter.name, Presenter.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def count_event_assignments(self, presenter_id: str) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(EventPresenter)
            .where(EventPresenter.presenter_id == presenter_id)
        )
        return int(result.scalar_one())

    async def count_agenda_items(self, presenter_id: str) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(AgendaItem)
            .where(AgendaItem.presenter_id == presenter_id)
        )
        return int(result.scalar_one())

    async def create_presenter(self, **fields: Any) -> Presenter:
        return await self.create(Presenter(**fields))

    async def add_to_event(self, **fields: Any) -> EventPresenter:
        """Schedule a presenter into an event (EventPresenter column values)."""
        link = EventPresenter(**fields)
        self.db.add(link)
        await self.db.flush()
        return link


class AgendaItemRepository(BaseRepository[AgendaItem]):
    resource_name = "agenda_item"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AgendaItem)

    async def list_for_event(
        self, event_id: str, *, visible_only: bool = False
    ) -> list[AgendaItem]:
        q = select(AgendaItem).where(AgendaItem.event_id == event_id)
        if visible_only:
            q = q.where(AgendaItem.is_visible.is_(True))
        result = await self.db.execute(
            q.order_by(AgendaItem.sort_order, AgendaItem.start_time)
        )
        return list(result.scalars().all())

    async def next_sort_order(self, event_id: str) -> int:
        """One past the highest sort_order of the event (1 for an empty agenda)."""
        result = await self.db.execute(
            select(func.max(AgendaItem.sort_order)).where(AgendaItem.event_id == event_id)
        )
        return (result.scalar_one() or 0) + 1

    async def create_agenda_item(self, **fields: Any) -> AgendaItem:
        return await self.create(AgendaItem(**fields))
