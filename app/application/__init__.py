"""Application layer: interfaces, services, DTOs and form helpers.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, cache, hashing).
"""

from app.application.interfaces import (
    IAdministratorRepository,
    IAgendaItemRepository,
    IAsyncMessageRepository,
    IAttendeeRepository,
    ICacheService,
    IEventImportRepository,
    IEventRepository,
    IFeaturedEventRepository,
    IMessageRepository,
    IPasswordHasher,
    IPresenterRepository,
)
from app.application.services import (
    EventImportService,
    EventService,
    FeaturedEventService,
    MessageService,
    RecurrenceService,
    RegistrationService,
)

__all__ = [
    "EventImportService",
    "EventService",
    "FeaturedEventService",
    "IAdministratorRepository",
    "IAgendaItemRepository",
    "IAsyncMessageRepository",
    "IAttendeeRepository",
    "ICacheService",
    "IEventImportRepository",
    "IEventRepository",
    "IFeaturedEventRepository",
    "IMessageRepository",
    "IPasswordHasher",
    "IPresenterRepository",
    "MessageService",
    "RecurrenceService",
    "RegistrationService",
]
