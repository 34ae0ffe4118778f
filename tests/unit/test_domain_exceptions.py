"""Tests for domain exceptions (error_code, message, details)."""

import pytest

from app.domain.exceptions import (
    DuplicateEmailException,
    DuplicateSlugException,
    EventCapacityExceededException,
    EventHubException,
    ImportProcessingException,
    RecurrenceConfigurationException,
    ResourceInUseException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TransformationFailedException,
    ValidationException,
)


def test_eventhub_exception_default_error_code() -> None:
    """Base EventHubException uses class name as error_code when not provided."""
    exc = EventHubException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "EventHubException"
    assert exc.details == {}


def test_eventhub_exception_custom_error_code_and_details() -> None:
    exc = EventHubException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.message == "Invalid format"
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.details == {}


def test_transformation_failed_exception() -> None:
    exc = TransformationFailedException("Invalid JSON: Expecting value", field="display_settings")
    assert exc.error_code == "TRANSFORMATION_FAILED"
    assert exc.details == {"field": "display_settings"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("event", "ev-456")
    assert "event" in exc.message and "ev-456" in exc.message
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "event", "resource_id": "ev-456"}


def test_resource_in_use_exception() -> None:
    exc = ResourceInUseException("presenter", "p-1", "scheduled in 2 events")
    assert exc.message == "presenter p-1 cannot be deleted: scheduled in 2 events"
    assert exc.error_code == "RESOURCE_IN_USE"
    assert exc.details == {"resource_type": "presenter", "resource_id": "p-1"}


def test_duplicate_email_exception() -> None:
    exc = DuplicateEmailException("jane@example.com")
    assert "already registered" in exc.message
    assert exc.error_code == "DUPLICATE_EMAIL"
    assert exc.details == {"email": "jane@example.com", "resource_type": "attendee"}


def test_duplicate_slug_exception() -> None:
    exc = DuplicateSlugException("annual-conference")
    assert "annual-conference" in exc.message
    assert exc.error_code == "DUPLICATE_SLUG"


def test_event_capacity_exceeded_exception() -> None:
    exc = EventCapacityExceededException("ev-1", 50)
    assert "50" in exc.message
    assert exc.error_code == "EVENT_FULL"
    assert exc.details == {"event_id": "ev-1", "max_attendees": 50}


def test_recurrence_configuration_exception() -> None:
    exc = RecurrenceConfigurationException("Invalid recurrence pattern: hourly", event_id="ev-1")
    assert exc.error_code == "RECURRENCE_CONFIGURATION_ERROR"
    assert exc.details == {"event_id": "ev-1"}


def test_import_processing_exception() -> None:
    exc = ImportProcessingException("Import has no data to process", import_id="imp-1")
    assert exc.error_code == "IMPORT_ERROR"
    assert exc.details == {"import_id": "imp-1"}


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert "SQL" in exc.message
    assert exc.error_code == "SERVICE_UNAVAILABLE"


def test_exception_is_raiseable() -> None:
    """All exceptions can be raised and caught as EventHubException."""
    with pytest.raises(EventHubException) as exc_info:
        raise ValidationException("Bad input", field="x")
    assert exc_info.value.error_code == "VALIDATION_ERROR"
