"""Domain exceptions for the eventhub application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class EventHubException(Exception):
    """Base exception for all eventhub application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EventHubException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class TransformationFailedException(EventHubException):
    """Raised when form text cannot be converted back into a structured value.

    Field-scoped: the form layer reports it against the offending field
    instead of failing the whole request.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "TRANSFORMATION_FAILED", details)


class ResourceNotFoundException(EventHubException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'event', 'attendee').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateEmailException(EventHubException):
    """Raised when an attendee or administrator email is already registered."""

    def __init__(self, email: str, resource_type: str = "attendee") -> None:
        super().__init__(
            f"Email is already registered for another {resource_type}",
            "DUPLICATE_EMAIL",
            {"email": email, "resource_type": resource_type},
        )


class DuplicateSlugException(EventHubException):
    """Raised when an event slug is already taken."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            f"Event with slug '{slug}' already exists",
            "DUPLICATE_SLUG",
            {"slug": slug},
        )


class EventCapacityExceededException(EventHubException):
    """Raised when registering for an event that has reached max_attendees."""

    def __init__(self, event_id: str, max_attendees: int) -> None:
        super().__init__(
            f"Event {event_id} is full ({max_attendees} attendees)",
            "EVENT_FULL",
            {"event_id": event_id, "max_attendees": max_attendees},
        )


class RecurrenceConfigurationException(EventHubException):
    """Raised when a recurring event lacks a usable pattern, end date or count."""

    def __init__(self, message: str, event_id: str | None = None) -> None:
        details = {"event_id": event_id} if event_id else {}
        super().__init__(message, "RECURRENCE_CONFIGURATION_ERROR", details)


class ImportProcessingException(EventHubException):
    """Raised when a bulk import cannot be parsed or started."""

    def __init__(self, message: str, import_id: str | None = None) -> None:
        details = {"import_id": import_id} if import_id else {}
        super().__init__(message, "IMPORT_ERROR", details)


class ResourceInUseException(EventHubException):
    """Raised when deleting a resource that other records still reference."""

    def __init__(self, resource_type: str, resource_id: str, reason: str) -> None:
        super().__init__(
            f"{resource_type} {resource_id} cannot be deleted: {reason}",
            "RESOURCE_IN_USE",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(EventHubException):
    """Raised when an operation requires a SQL database that is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
