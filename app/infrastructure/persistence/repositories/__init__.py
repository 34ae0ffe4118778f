"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.administrator_repo import (
    AdministratorRepository,
)
from app.infrastructure.persistence.repositories.async_message_repo import (
    AsyncMessageRepository,
)
from app.infrastructure.persistence.repositories.attendee_repo import AttendeeRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.event_import_repo import (
    EventImportRepository,
)
from app.infrastructure.persistence.repositories.event_repo import EventRepository
from app.infrastructure.persistence.repositories.featured_event_repo import (
    FeaturedEventRepository,
)
from app.infrastructure.persistence.repositories.message_repo import MessageRepository
from app.infrastructure.persistence.repositories.presenter_repo import (
    AgendaItemRepository,
    PresenterRepository,
)

__all__ = [
    "AdministratorRepository",
    "AgendaItemRepository",
    "AsyncMessageRepository",
    "AttendeeRepository",
    "BaseRepository",
    "EventImportRepository",
    "EventRepository",
    "FeaturedEventRepository",
    "MessageRepository",
    "PresenterRepository",
]
