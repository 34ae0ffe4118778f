"""Event repository: lookups, dependent-aware deletion and recurring series materialization."""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.event import EventOccurrence
from app.domain.exceptions import DuplicateSlugException
from app.infrastructure.persistence.models.agenda_item import AgendaItem
from app.infrastructure.persistence.models.attendee import Attendee
from app.infrastructure.persistence.models.event import Event
from app.infrastructure.persistence.models.event_file import EventFile
from app.infrastructure.persistence.models.featured_event import FeaturedEvent
from app.infrastructure.persistence.models.message import Message
from app.infrastructure.persistence.models.presenter import EventPresenter
from app.infrastructure.persistence.repositories.base import BaseRepository


class EventRepository(BaseRepository[Event]):
    """Event repository. Deleting goes through delete_event so dependents are removed first."""

    resource_name = "event"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Event)

    async def get_by_slug(self, slug: str) -> Event | None:
        result = await self.db.execute(select(Event).where(Event.slug == slug))
        return result.scalar_one_or_none()

    async def get_by_title(self, title: str) -> Event | None:
        result = await self.db.execute(
            select(Event).where(Event.title == title).order_by(Event.start_date).limit(1)
        )
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.db.execute(select(Event.id).where(Event.slug == slug))
        return result.first() is not None

    async def available_slug(self, slug: str) -> str:
        """slug itself when free, else the first free slug-2, slug-3, ..."""
        candidate, n = slug, 1
        while await self.slug_exists(candidate):
            n += 1
            candidate = f"{slug}-{n}"
        return candidate

    async def create_event(self, **fields: Any) -> Event:
        """Insert an event built from column values (see add_event)."""
        return await self.add_event(Event(**fields))

    async def add_event(self, event: Event) -> Event:
        """Insert; a clash on the unique slug raises DuplicateSlugException."""
        if not event.administrators:
            event.administrators = []
        return await self.create_unique(event, lambda: DuplicateSlugException(event.slug))

    async def list_events(
        self,
        *,
        active_only: bool = False,
        include_instances: bool = True,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Event]:
        """Return events ordered by start date (soonest first)."""
        q = select(Event)
        if active_only:
            q = q.where(Event.is_active.is_(True))
        if not include_instances:
            q = q.where(Event.parent_event_id.is_(None))
        q = q.order_by(Event.start_date, Event.id).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def list_active(self, *, starting_from: datetime | None = None) -> list[Event]:
        """Active events (instances included) by start date; optionally only those not started yet."""
        q = select(Event).where(Event.is_active.is_(True))
        if starting_from is not None:
            q = q.where(Event.start_date >= starting_from)
        result = await self.db.execute(q.order_by(Event.start_date, Event.id))
        return list(result.scalars().all())

    async def get_instances(self, parent_id: str) -> list[Event]:
        """Return the generated instances of a recurring parent, in date order."""
        result = await self.db.execute(
            select(Event)
            .where(Event.parent_event_id == parent_id)
            .order_by(Event.start_date)
        )
        return list(result.scalars().all())

    async def count_attendees(self, event_id: str) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Attendee).where(Attendee.event_id == event_id)
        )
        return int(result.scalar_one())

    async def delete_event(self, event: Event) -> None:
        """Delete an event and the rows that reference it without a DB cascade.

        Order: messages, attendees, agenda items, event presenters, files;
        featured events are detached. The administrator association cascades
        and recurring instances get parent_event_id = NULL in the database.
        """
        event_id = event.id
        # Replies point at messages of the same event, so one statement removes the set.
        await self.db.execute(delete(Message).where(Message.event_id == event_id))
        await self.db.execute(delete(Attendee).where(Attendee.event_id == event_id))
        await self.db.execute(delete(AgendaItem).where(AgendaItem.event_id == event_id))
        await self.db.execute(
            delete(EventPresenter).where(EventPresenter.event_id == event_id)
        )
        await self.db.execute(delete(EventFile).where(EventFile.event_id == event_id))
        await self.db.execute(
            update(FeaturedEvent)
            .where(FeaturedEvent.related_event_id == event_id)
            .values(related_event_id=None)
        )
        await self.delete(event)

    async def replace_series(
        self, parent: Event, occurrences: list[EventOccurrence]
    ) -> tuple[list[Event], int]:
        """Drop existing instances of parent and create one per occurrence.

        Returns (created instances, number of instances removed).
        """
        existing = await self.get_instances(parent.id)
        for child in existing:
            await self.delete_event(child)

        agenda = await self._agenda_for(parent.id)
        presenters = await self._presenters_for(parent.id)

        created: list[Event] = []
        for occ in occurrences:
            instance = Event(
                title=parent.title,
                description=parent.description,
                start_date=occ.start_date,
                end_date=occ.end_date,
                location=parent.location,
                slug=await self.available_slug(occ.slug),
                is_active=parent.is_active,
                max_attendees=parent.max_attendees,
                banner_image=parent.banner_image,
                parent_event_id=parent.id,
                is_recurring=False,
            )
            instance.administrators = list(parent.administrators)
            await self.add_event(instance)

            for item in agenda:
                self.db.add(
                    AgendaItem(
                        event_id=instance.id,
                        presenter_id=item.presenter_id,
                        title=item.title,
                        description=item.description,
                        start_time=item.start_time + occ.offset,
                        end_time=item.end_time + occ.offset if item.end_time else None,
                        item_type=item.item_type,
                        speaker=item.speaker,
                        location=item.location,
                        sort_order=item.sort_order,
                        is_visible=item.is_visible,
                    )
                )
            for ep in presenters:
                self.db.add(
                    EventPresenter(
                        event_id=instance.id,
                        presenter_id=ep.presenter_id,
                        presentation_title=ep.presentation_title,
                        presentation_description=ep.presentation_description,
                        start_time=ep.start_time,
                        end_time=ep.end_time,
                        sort_order=ep.sort_order,
                        is_visible=ep.is_visible,
                    )
                )
            created.append(instance)

        await self.db.flush()
        return created, len(existing)

    async def _agenda_for(self, event_id: str) -> list[AgendaItem]:
        result = await self.db.execute(
            select(AgendaItem)
            .where(AgendaItem.event_id == event_id)
            .order_by(AgendaItem.sort_order, AgendaItem.start_time)
        )
        return list(result.scalars().all())

    async def _presenters_for(self, event_id: str) -> list[EventPresenter]:
        result = await self.db.execute(
            select(EventPresenter)
            .where(EventPresenter.event_id == event_id)
            .order_by(EventPresenter.sort_order)
        )
        return list(result.scalars().all())
