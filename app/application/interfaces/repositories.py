"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Entities are the ORM models; they are referenced for typing only, and new rows
are built by the repositories' create_* factories.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.event import EventOccurrence
    from app.application.dtos.featured_event import FeaturedEventStatistics
    from app.infrastructure.persistence.models import (
        Administrator,
        AgendaItem,
        AsyncMessage,
        Attendee,
        Event,
        EventImport,
        EventPresenter,
        FeaturedEvent,
        Message,
        Presenter,
    )


class IEventRepository(Protocol):
    """Protocol for event repository (DIP)."""

    async def get_by_id(self, entity_id: Any) -> Event | None: ...

    async def get_or_raise(self, entity_id: Any) -> Event: ...

    async def get_by_slug(self, slug: str) -> Event | None: ...

    async def get_by_title(self, title: str) -> Event | None: ...

    async def slug_exists(self, slug: str) -> bool: ...

    async def list_events(
        self,
        *,
        active_only: bool = False,
        include_instances: bool = True,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Event]: ...

    async def list_active(self, *, starting_from: datetime | None = None) -> list[Event]: ...

    async def get_instances(self, parent_id: str) -> list[Event]: ...

    async def count_attendees(self, event_id: str) -> int: ...

    async def create_event(self, **fields: Any) -> Event: ...

    async def save(self, obj: Event) -> Event: ...

    async def delete_event(self, event: Event) -> None:
        """Delete event after removing dependents that have no DB cascade."""

    async def replace_series(
        self, parent: Event, occurrences: list[EventOccurrence]
    ) -> tuple[list[Event], int]:
        """Replace the generated instances of parent; return (created, removed count)."""


class IAttendeeRepository(Protocol):
    async def get_by_id(self, entity_id: Any) -> Attendee | None: ...

    async def get_or_raise(self, entity_id: Any) -> Attendee: ...

    async def get_by_email(self, email: str) -> Attendee | None: ...

    async def get_by_verification_token(self, token: str) -> Attendee | None: ...

    async def list_for_event(
        self, event_id: str, skip: int = 0, limit: int = 100
    ) -> list[Attendee]: ...

    async def create_attendee(
        self,
        *,
        event_id: str,
        name: str,
        email: str,
        phone: str | None = None,
        organization: str | None = None,
        job_title: str | None = None,
        notes: str | None = None,
        password: str | None = None,
    ) -> Attendee: ...

    async def list_for_export(
        self, event_id: str | None = None
    ) -> list[tuple[Attendee, str]]: ...

    async def save(self, obj: Attendee) -> Attendee: ...

    async def delete_attendee(self, attendee: Attendee) -> None:
        """Delete the attendee with the messages they sent."""


class IAdministratorRepository(Protocol):
    async def get_by_id(self, entity_id: Any) -> Administrator | None: ...

    async def get_by_email(self, email: str) -> Administrator | None: ...


class IMessageRepository(Protocol):
    async def get_by_id(self, entity_id: Any) -> Message | None: ...

    async def get_or_raise(self, entity_id: Any) -> Message: ...

    async def list_for_recipient(
        self,
        recipient_id: str,
        *,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Message]: ...

    async def count_unread(self, recipient_id: str) -> int: ...

    async def get_thread(self, message_id: str) -> list[Message]: ...

    async def create_message(
        self,
        *,
        sender_id: str,
        recipient_id: str,
        event_id: str,
        subject: str,
        content: str,
        priority: str,
        reply_to_id: str | None = None,
    ) -> Message: ...

    async def save(self, obj: Message) -> Message: ...


class IAsyncMessageRepository(Protocol):
    async def enqueue(
        self,
        queue_name: str,
        body: str,
        headers: str = "{}",
        available_at: datetime | None = None,
    ) -> AsyncMessage: ...


class IFeaturedEventRepository(Protocol):
    async def get_by_id(self, entity_id: Any) -> FeaturedEvent | None: ...

    async def get_or_raise(self, entity_id: Any) -> FeaturedEvent: ...

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[FeaturedEvent]: ...

    async def get_currently_active(
        self,
        display_type: str | None = None,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> list[FeaturedEvent]: ...

    async def get_for_rotation(
        self, limit: int = 5, now: datetime | None = None
    ) -> list[FeaturedEvent]: ...

    async def get_expiring_soon(
        self, days: int = 7, now: datetime | None = None
    ) -> list[FeaturedEvent]: ...

    async def get_top_performing(self, limit: int = 10) -> list[FeaturedEvent]: ...

    async def increment_views(self, featured_id: str) -> None: ...

    async def increment_clicks(self, featured_id: str) -> None: ...

    async def deactivate_expired(self, now: datetime | None = None) -> int: ...

    async def get_statistics(self) -> FeaturedEventStatistics: ...

    async def create_featured(self, *, created_by_id: str, **fields: Any) -> FeaturedEvent: ...

    async def save(self, obj: FeaturedEvent) -> FeaturedEvent: ...

    async def delete(self, obj: FeaturedEvent) -> None: ...


class IEventImportRepository(Protocol):
    async def get_or_raise(self, entity_id: Any) -> EventImport: ...

    async def create_import(self, **fields: Any) -> EventImport: ...

    async def list_recent(self, skip: int = 0, limit: int = 20) -> list[EventImport]: ...

    async def save(self, obj: EventImport) -> EventImport: ...

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Nested transaction; rolled back on exception, committed otherwise."""


class IPresenterRepository(Protocol):
    async def get_or_raise(self, entity_id: Any) -> Presenter: ...

    async def get_by_name(self, name: str) -> Presenter | None: ...

    async def search(
        self, term: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[Presenter]: ...

    async def count_event_assignments(self, presenter_id: str) -> int: ...

    async def count_agenda_items(self, presenter_id: str) -> int: ...

    async def create_presenter(self, **fields: Any) -> Presenter: ...

    async def add_to_event(self, **fields: Any) -> EventPresenter: ...

    async def save(self, obj: Presenter) -> Presenter: ...

    async def delete(self, obj: Presenter) -> None: ...


class IAgendaItemRepository(Protocol):
    async def get_or_raise(self, entity_id: Any) -> AgendaItem: ...

    async def list_for_event(
        self, event_id: str, *, visible_only: bool = False
    ) -> list[AgendaItem]: ...

    async def next_sort_order(self, event_id: str) -> int: ...

    async def create_agenda_item(self, **fields: Any) -> AgendaItem: ...

    async def save(self, obj: AgendaItem) -> AgendaItem: ...

    async def delete(self, obj: AgendaItem) -> None: ...
