"""Agenda management: programme slots of an event."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.application.interfaces.repositories import (
    IAgendaItemRepository,
    IEventRepository,
    IPresenterRepository,
)
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.sanitization import copy_title

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import AgendaItem

logger = logging.getLogger(__name__)

# A duplicated slot is placed this long after the original.
DUPLICATE_OFFSET = timedelta(minutes=30)

_EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "start_time",
        "end_time",
        "item_type",
        "speaker",
        "location",
        "presenter_id",
        "is_visible",
    }
)


def _check_times(start: datetime, end: datetime | None) -> None:
    if end is not None and ensure_utc(end) < ensure_utc(start):
        raise ValidationException("end_time must not be before start_time", field="end_time")


class AgendaService:
    """Create, edit, order and duplicate agenda items."""

    def __init__(
        self,
        agenda_repo: IAgendaItemRepository,
        event_repo: IEventRepository,
        presenter_repo: IPresenterRepository,
    ) -> None:
        self.agenda_repo = agenda_repo
        self.event_repo = event_repo
        self.presenter_repo = presenter_repo

    async def get(self, item_id: str) -> AgendaItem:
        return await self.agenda_repo.get_or_raise(item_id)

    async def create(self, event_id: str, values: dict[str, Any]) -> AgendaItem:
        """Append an item to the event's agenda (visible, last in order).

        Raises:
            ResourceNotFoundException: unknown event or presenter.
            ValidationException: end_time before start_time.
        """
        await self.event_repo.get_or_raise(event_id)
        fields = {k: v for k, v in values.items() if k in _EDITABLE_FIELDS}
        _check_times(fields["start_time"], fields.get("end_time"))
        if fields.get("presenter_id"):
            await self.presenter_repo.get_or_raise(fields["presenter_id"])
        fields.setdefault("is_visible", True)
        item = await self.agenda_repo.create_agenda_item(
            event_id=event_id,
            sort_order=await self.agenda_repo.next_sort_order(event_id),
            **fields,
        )
        logger.info("Added agenda item %s to event %s", item.id, event_id)
        return item

    async def update(self, item_id: str, values: dict[str, Any]) -> AgendaItem:
        """Apply the given fields; the rest stay as they are."""
        item = await self.agenda_repo.get_or_raise(item_id)
        changes = {k: v for k, v in values.items() if k in _EDITABLE_FIELDS}
        _check_times(
            changes.get("start_time", item.start_time),
            changes.get("end_time", item.end_time),
        )
        if changes.get("presenter_id"):
            await self.presenter_repo.get_or_raise(changes["presenter_id"])
        for key, value in changes.items():
            setattr(item, key, value)
        return await self.agenda_repo.save(item)

    async def delete(self, item_id: str) -> None:
        item = await self.agenda_repo.get_or_raise(item_id)
        await self.agenda_repo.delete(item)
        logger.info("Deleted agenda item %s of event %s", item_id, item.event_id)

    async def toggle_visibility(self, item_id: str) -> AgendaItem:
        item = await self.agenda_repo.get_or_raise(item_id)
        item.is_visible = not item.is_visible
        return await self.agenda_repo.save(item)

    async def reorder(self, event_id: str, item_ids: list[str]) -> list[AgendaItem]:
        """Set sort_order to each id's position in item_ids.

        Ids that are unknown or belong to another event are ignored; items
        not listed keep their sort_order. Returns the full agenda in its new order.
        """
        await self.event_repo.get_or_raise(event_id)
        items = {i.id: i for i in await self.agenda_repo.list_for_event(event_id)}
        moved = 0
        for position, item_id in enumerate(item_ids):
            item = items.get(item_id)
            if item is None:
                continue
            item.sort_order = position
            await self.agenda_repo.save(item)
            moved += 1
        logger.info("Reordered %s agenda items of event %s", moved, event_id)
        return await self.agenda_repo.list_for_event(event_id)

    async def duplicate(self, item_id: str) -> AgendaItem:
        """Copy an item half an hour later, visible and last in order."""
        original = await self.agenda_repo.get_or_raise(item_id)
        copy = await self.agenda_repo.create_agenda_item(
            event_id=original.event_id,
            presenter_id=original.presenter_id,
            title=copy_title(original.title),
            description=original.description,
            start_time=original.start_time + DUPLICATE_OFFSET,
            end_time=original.end_time + DUPLICATE_OFFSET if original.end_time else None,
            item_type=original.item_type,
            speaker=original.speaker,
            location=original.location,
            is_visible=True,
            sort_order=await self.agenda_repo.next_sort_order(original.event_id),
        )
        logger.info("Duplicated agenda item %s as %s", original.id, copy.id)
        return copy
