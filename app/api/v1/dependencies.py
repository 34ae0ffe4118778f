"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions and application services.
All services are built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.

Read endpoints get a plain session (get_db); write endpoints get a
transactional one (get_db_transactional) that commits on success.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.services import ICacheService
from app.application.services import (
    AgendaService,
    CalendarService,
    EventImportService,
    EventService,
    FeaturedEventService,
    MessageService,
    PresenterService,
    RecurrenceService,
    RegistrationService,
)
from app.core.config import get_settings
from app.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from app.infrastructure.persistence.repositories import (
    AdministratorRepository,
    AgendaItemRepository,
    AsyncMessageRepository,
    AttendeeRepository,
    EventImportRepository,
    EventRepository,
    FeaturedEventRepository,
    MessageRepository,
    PresenterRepository,
)
from app.infrastructure.security import BcryptPasswordHasher


def get_cache(request: Request) -> ICacheService | None:
    """Redis cache from app state; None when disabled (services then skip caching)."""
    return getattr(request.app.state, "cache", None)


def _event_service(db: AsyncSession) -> EventService:
    settings = get_settings()
    return EventService(
        event_repo=EventRepository(db),
        recurrence=RecurrenceService(max_instances=settings.recurrence_max_instances),
        agenda_repo=AgendaItemRepository(db),
    )


def _agenda_service(db: AsyncSession) -> AgendaService:
    return AgendaService(
        agenda_repo=AgendaItemRepository(db),
        event_repo=EventRepository(db),
        presenter_repo=PresenterRepository(db),
    )


def _presenter_service(db: AsyncSession) -> PresenterService:
    return PresenterService(presenter_repo=PresenterRepository(db))


def _registration_service(db: AsyncSession) -> RegistrationService:
    return RegistrationService(
        event_repo=EventRepository(db),
        attendee_repo=AttendeeRepository(db),
    )


def _message_service(db: AsyncSession) -> MessageService:
    return MessageService(
        message_repo=MessageRepository(db),
        attendee_repo=AttendeeRepository(db),
        administrator_repo=AdministratorRepository(db),
        outbox_repo=AsyncMessageRepository(db),
    )


def _featured_event_service(
    db: AsyncSession, cache: ICacheService | None
) -> FeaturedEventService:
    settings = get_settings()
    return FeaturedEventService(
        featured_repo=FeaturedEventRepository(db),
        event_repo=EventRepository(db),
        cache=cache,
        cache_ttl=settings.featured_cache_ttl,
        rotation_limit=settings.featured_rotation_limit,
    )


# ---- Read-only services (get_db) ----


async def get_event_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EventService:
    """Event service for list / get endpoints."""
    return _event_service(db)


async def get_agenda_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AgendaService:
    return _agenda_service(db)


async def get_presenter_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PresenterService:
    """Presenter directory and autocomplete search."""
    return _presenter_service(db)


async def get_calendar_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CalendarService:
    """ICS feed, subscription and single-event downloads."""
    settings = get_settings()
    return CalendarService(
        EventRepository(db),
        calendar_name=settings.calendar_name,
        base_url=settings.public_base_url,
        organizer_email=settings.calendar_organizer_email,
    )


async def get_featured_event_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> FeaturedEventService:
    """Featured event service for public (cached) and admin read endpoints."""
    return _featured_event_service(db, cache)


async def get_import_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EventImportService:
    """Import service for templates, previews and job status."""
    return _import_service(db)


async def get_registration_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RegistrationService:
    """Registration service for attendee lists and CSV export."""
    return _registration_service(db)


async def get_message_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageService:
    """Message service for inbox and thread views."""
    return _message_service(db)


# ---- Transactional services (get_db_transactional) ----


async def get_event_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> EventService:
    """Event service for create, update, clone, delete and series regeneration."""
    return _event_service(db)


async def get_agenda_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AgendaService:
    """Agenda edits, reordering and duplication."""
    return _agenda_service(db)


async def get_presenter_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PresenterService:
    return _presenter_service(db)


async def get_registration_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RegistrationService:
    """Registration, e-mail verification, check-in and removal."""
    return _registration_service(db)


async def get_message_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> MessageService:
    """Messaging; notifications go to the outbox in the same transaction."""
    return _message_service(db)


async def get_featured_event_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> FeaturedEventService:
    """Featured event service for admin saves, cleanup and view/click counters."""
    return _featured_event_service(db, cache)


async def get_import_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> EventImportService:
    """Import service for creating and processing jobs."""
    return _import_service(db)


def _import_service(db: AsyncSession) -> EventImportService:
    settings = get_settings()
    return EventImportService(
        import_repo=EventImportRepository(db),
        event_repo=EventRepository(db),
        attendee_repo=AttendeeRepository(db),
        presenter_repo=PresenterRepository(db),
        agenda_repo=AgendaItemRepository(db),
        password_hasher=BcryptPasswordHasher(),
        preview_rows=settings.import_preview_rows,
        batch_size=settings.import_batch_size,
    )
