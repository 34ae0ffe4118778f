"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    IAdministratorRepository,
    IAgendaItemRepository,
    IAsyncMessageRepository,
    IAttendeeRepository,
    IEventImportRepository,
    IEventRepository,
    IFeaturedEventRepository,
    IMessageRepository,
    IPresenterRepository,
)
from app.application.interfaces.services import ICacheService, IPasswordHasher

__all__ = [
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
]
