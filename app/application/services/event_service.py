"""Event creation, editing, cloning, listing, deletion and recurring-series regeneration."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from dateutil.relativedelta import relativedelta

from app.application.dtos.event import SeriesResult
from app.application.interfaces.repositories import (
    IAgendaItemRepository,
    IEventRepository,
)
from app.application.services.recurrence_service import RecurrenceService
from app.domain.exceptions import (
    DuplicateSlugException,
    RecurrenceConfigurationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.sanitization import copy_title, slugify

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import AgendaItem, Event

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "start_date",
        "end_date",
        "location",
        "slug",
        "is_active",
        "max_attendees",
        "banner_image",
        "is_recurring",
        "recurrence_pattern",
        "recurrence_interval",
        "recurrence_end_date",
        "recurrence_count",
    }
)


class EventService:
    """Read and maintain events; series instances are rebuilt from the parent's rule."""

    def __init__(
        self,
        event_repo: IEventRepository,
        recurrence: RecurrenceService | None = None,
        agenda_repo: IAgendaItemRepository | None = None,
    ) -> None:
        self.event_repo = event_repo
        self.recurrence = recurrence or RecurrenceService()
        self.agenda_repo = agenda_repo

    async def list_events(
        self,
        *,
        active_only: bool = False,
        include_instances: bool = True,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Event]:
        return await self.event_repo.list_events(
            active_only=active_only,
            include_instances=include_instances,
            skip=skip,
            limit=limit,
        )

    async def create(self, values: dict[str, Any]) -> Event:
        """Create an event; slug defaults to the title slug, suffixed until unique.

        A recurring event must carry a usable rule; an unusable one raises
        RecurrenceConfigurationException and the transaction rolls the insert back.
        """
        fields = dict(values)
        if not fields.get("slug"):
            fields["slug"] = await self._unique_slug(fields["title"])
        event = await self.event_repo.create_event(**fields)
        if event.is_recurring:
            self.recurrence.plan_occurrences(event)
        logger.info("Created event %s (%s)", event.id, event.slug)
        return event

    async def _unique_slug(self, title: str) -> str:
        base = slugify(title) or "event"
        slug, n = base, 1
        while await self.event_repo.slug_exists(slug):
            n += 1
            slug = f"{base}-{n}"
        return slug

    async def update(self, event_id: str, values: dict[str, Any]) -> Event:
        """Apply the given fields; the rest stay as they are.

        Existing series instances are not touched; regenerate_series rebuilds
        them from the edited rule.

        Raises:
            ResourceNotFoundException: unknown event.
            DuplicateSlugException: slug taken by another event.
            ValidationException: end_date before start_date.
            RecurrenceConfigurationException: an instance made recurring, or
                a recurring event left without a usable rule.
        """
        event = await self.event_repo.get_or_raise(event_id)
        changes = {k: v for k, v in values.items() if k in _EDITABLE_FIELDS}

        new_slug = changes.get("slug")
        if new_slug and new_slug != event.slug and await self.event_repo.slug_exists(new_slug):
            raise DuplicateSlugException(new_slug)
        start = ensure_utc(changes.get("start_date", event.start_date))
        end = ensure_utc(changes.get("end_date", event.end_date))
        if end is not None and end < start:
            raise ValidationException("end_date must not be before start_date", field="end_date")
        if changes.get("is_recurring") and event.parent_event_id is not None:
            raise RecurrenceConfigurationException(
                "Instances of a series cannot become recurring", event_id=event.id
            )

        for key, value in changes.items():
            setattr(event, key, value)
        if event.is_recurring:
            self.recurrence.plan_occurrences(event)
        event = await self.event_repo.save(event)
        logger.info("Updated event %s (%s): %s", event.id, event.slug, sorted(changes))
        return event

    async def toggle_status(self, event_id: str) -> Event:
        """Flip is_active (open or close the event)."""
        event = await self.event_repo.get_or_raise(event_id)
        event.is_active = not event.is_active
        event = await self.event_repo.save(event)
        logger.info("Event %s is now %s", event.id, "active" if event.is_active else "inactive")
        return event

    async def clone(self, event_id: str, now: datetime | None = None) -> Event:
        """Copy an event as an inactive draft starting one month from now.

        The copy keeps description, location, capacity, duration and
        administrators; it gets a "(Copy)" title and its own slug. Attendees,
        agenda and recurrence rule are not copied.
        """
        source = await self.event_repo.get_or_raise(event_id)
        start = (now or utc_now()).replace(microsecond=0) + relativedelta(months=1)
        end = None
        if source.end_date is not None:
            end = start + (ensure_utc(source.end_date) - ensure_utc(source.start_date))
        title = copy_title(source.title)
        clone = await self.event_repo.create_event(
            title=title,
            slug=await self._unique_slug(title),
            description=source.description,
            location=source.location,
            max_attendees=source.max_attendees,
            start_date=start,
            end_date=end,
            is_active=False,
            administrators=list(source.administrators),
        )
        logger.info("Cloned event %s as %s (%s)", source.id, clone.id, clone.slug)
        return clone

    async def get_by_slug(self, slug: str) -> Event:
        event = await self.event_repo.get_by_slug(slug)
        if event is None:
            raise ResourceNotFoundException("event", slug)
        return event

    async def get_instances(self, event_id: str) -> list[Event]:
        await self.event_repo.get_or_raise(event_id)
        return await self.event_repo.get_instances(event_id)

    async def get_agenda(
        self, event_id: str, *, include_hidden: bool = False
    ) -> list[AgendaItem]:
        """Agenda items of an event in programme order; hidden ones only on request."""
        await self.event_repo.get_or_raise(event_id)
        if self.agenda_repo is None:
            return []
        return await self.agenda_repo.list_for_event(
            event_id, visible_only=not include_hidden
        )

    async def delete(self, event_id: str) -> None:
        """Delete an event with its attendees, messages, agenda, presenters and files."""
        event = await self.event_repo.get_or_raise(event_id)
        await self.event_repo.delete_event(event)
        logger.info("Deleted event %s (%s)", event_id, event.slug)

    async def regenerate_series(self, event_id: str) -> SeriesResult:
        """Replace the instances of a recurring event with a freshly planned set.

        Raises:
            ResourceNotFoundException: unknown event.
            RecurrenceConfigurationException: event is not a recurring parent or
                its rule is incomplete.
        """
        parent = await self.event_repo.get_or_raise(event_id)
        if not parent.is_recurring:
            raise RecurrenceConfigurationException(
                "Event is not recurring", event_id=parent.id
            )
        if parent.parent_event_id is not None:
            raise RecurrenceConfigurationException(
                "Instances of a series cannot generate their own series",
                event_id=parent.id,
            )
        occurrences = self.recurrence.plan_occurrences(parent)
        created, removed = await self.event_repo.replace_series(parent, occurrences)
        logger.info(
            "Regenerated series for event %s: created=%s removed=%s",
            parent.id,
            len(created),
            removed,
        )
        return SeriesResult(
            parent_id=parent.id,
            instance_ids=[e.id for e in created],
            removed_count=removed,
        )
