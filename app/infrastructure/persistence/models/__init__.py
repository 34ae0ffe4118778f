"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata (used by
Alembic autogenerate and by tests that call create_all).
"""

from app.infrastructure.persistence.models.administrator import Administrator
from app.infrastructure.persistence.models.agenda_item import AgendaItem
from app.infrastructure.persistence.models.async_message import AsyncMessage
from app.infrastructure.persistence.models.attendee import Attendee
from app.infrastructure.persistence.models.event import Event, event_administrators
from app.infrastructure.persistence.models.event_file import EventFile
from app.infrastructure.persistence.models.event_import import EventImport
from app.infrastructure.persistence.models.featured_event import FeaturedEvent
from app.infrastructure.persistence.models.message import Message
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.presenter import EventPresenter, Presenter

__all__ = [
    "Administrator",
    "AgendaItem",
    "AsyncMessage",
    "Attendee",
    "Event",
    "EventFile",
    "EventImport",
    "EventPresenter",
    "FeaturedEvent",
    "Message",
    "Presenter",
    "event_administrators",
    "CuidMixin",
    "CreatedAtMixin",
    "TimestampMixin",
]
