"""Request schema behaviour: JSON text fields, UTC datetimes, date windows."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from app.schemas.event import EventCreateRequest
from app.schemas.featured_event import (
    FeaturedEventCreateRequest,
    FeaturedEventUpdateRequest,
)
from app.schemas.fields import JsonTextField, UtcDatetime

json_text = TypeAdapter(JsonTextField)
utc_datetime = TypeAdapter(UtcDatetime)


def test_json_text_field_decodes_text() -> None:
    assert json_text.validate_python('{"autoRotate": false}') == {"autoRotate": False}


def test_json_text_field_blank_is_none() -> None:
    assert json_text.validate_python("  ") is None


def test_json_text_field_accepts_structured_value() -> None:
    assert json_text.validate_python({"autoRotate": True}) == {"autoRotate": True}


def test_json_text_field_reports_invalid_json() -> None:
    with pytest.raises(ValidationError) as exc_info:
        json_text.validate_python("{not json")
    error = exc_info.value.errors()[0]
    assert error["type"] == "invalid_json"
    assert "Invalid JSON" in error["msg"]


def test_utc_datetime_treats_naive_as_utc() -> None:
    value = utc_datetime.validate_python("2030-06-15T09:00:00")
    assert value == datetime(2030, 6, 15, 9, 0, tzinfo=UTC)


def test_utc_datetime_converts_offsets() -> None:
    value = utc_datetime.validate_python("2030-06-15T11:00:00+02:00")
    assert value.utcoffset() == timedelta(0)
    assert value.hour == 9


def test_featured_create_decodes_display_settings_text() -> None:
    body = FeaturedEventCreateRequest(
        created_by_id="admin-1",
        title="Summer Summit",
        display_settings='{"rotationInterval": 8000}',
    )
    assert body.display_settings == {"rotationInterval": 8000}
    assert body.display_type == "banner"


def test_featured_create_rejects_unknown_display_type() -> None:
    with pytest.raises(ValidationError):
        FeaturedEventCreateRequest(created_by_id="admin-1", title="X", display_type="hero")


def test_featured_window_must_not_end_before_start() -> None:
    start = datetime(2030, 1, 10, tzinfo=timezone.utc)
    with pytest.raises(ValidationError):
        FeaturedEventUpdateRequest(start_date=start, end_date=start - timedelta(days=1))


def test_featured_update_keeps_only_sent_fields() -> None:
    body = FeaturedEventUpdateRequest(priority=7)
    assert body.model_dump(exclude_unset=True) == {"priority": 7}


def test_event_create_rejects_end_before_start() -> None:
    with pytest.raises(ValidationError):
        EventCreateRequest(
            title="Launch",
            start_date="2030-06-15T09:00:00Z",
            end_date="2030-06-15T08:00:00Z",
        )


def test_event_create_rejects_malformed_slug() -> None:
    with pytest.raises(ValidationError):
        EventCreateRequest(title="Launch", start_date="2030-06-15T09:00:00Z", slug="Not A Slug")
