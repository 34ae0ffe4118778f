"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    AgendaItemType,
    DisplayType,
    ImportStatus,
    ImportType,
    MessagePriority,
    MessageStatus,
    RecurrencePattern,
)
from app.domain.exceptions import (
    DuplicateEmailException,
    DuplicateSlugException,
    EventCapacityExceededException,
    EventHubException,
    ImportProcessingException,
    RecurrenceConfigurationException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TransformationFailedException,
    ValidationException,
)

__all__ = [
    "AgendaItemType",
    "DisplayType",
    "DuplicateEmailException",
    "DuplicateSlugException",
    "EventCapacityExceededException",
    "EventHubException",
    "ImportProcessingException",
    "ImportStatus",
    "ImportType",
    "MessagePriority",
    "MessageStatus",
    "RecurrenceConfigurationException",
    "RecurrencePattern",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "TransformationFailedException",
    "ValidationException",
]
