"""Domain enumerations for the eventhub application.

Enums represent fixed sets of domain values stored as plain strings
(e.g. message status, import type).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class RecurrencePattern(_ValuesMixin, str, Enum):
    """Unit of repetition for a recurring event series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class MessageStatus(_ValuesMixin, str, Enum):
    """Lifecycle of an attendee → administrator message."""

    SENT = "sent"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class MessagePriority(_ValuesMixin, str, Enum):
    """Message priority tag."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class ImportStatus(_ValuesMixin, str, Enum):
    """Status of a bulk import job."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ImportType(_ValuesMixin, str, Enum):
    """What a bulk import file contains."""

    EVENTS_ONLY = "events_only"
    ATTENDEES_ONLY = "attendees_only"
    AGENDA_ONLY = "agenda_only"
    PRESENTERS_ONLY = "presenters_only"


class DisplayType(_ValuesMixin, str, Enum):
    """Where a featured event banner is rendered."""

    BANNER = "banner"
    CARD = "card"
    POPUP = "popup"
    SIDEBAR = "sidebar"


class AgendaItemType(_ValuesMixin, str, Enum):
    """Kind of agenda slot."""

    SESSION = "session"
    KEYNOTE = "keynote"
    WORKSHOP = "workshop"
    PANEL = "panel"
    BREAK = "break"
    NETWORKING = "networking"
    OTHER = "other"
