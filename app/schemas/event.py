"""Event API schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.fields import UtcDatetime, reject_nulls

RecurrencePatternLiteral = Literal["daily", "weekly", "monthly", "yearly"]
AgendaItemTypeLiteral = Literal[
    "session", "keynote", "workshop", "panel", "break", "networking", "other"
]
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class EventCreateRequest(BaseModel):
    """Payload for creating an event. slug defaults to a unique slug of the title."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_date: UtcDatetime
    end_date: UtcDatetime | None = None
    location: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255, pattern=SLUG_PATTERN)
    is_active: bool = True
    max_attendees: int | None = Field(default=None, ge=1)
    banner_image: str | None = Field(default=None, max_length=255)
    is_recurring: bool = False
    recurrence_pattern: RecurrencePatternLiteral | None = None
    recurrence_interval: int | None = Field(default=None, ge=1)
    recurrence_end_date: UtcDatetime | None = None
    recurrence_count: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def check_dates(self) -> "EventCreateRequest":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdateRequest(BaseModel):
    """Partial event update: omitted fields keep their value."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    location: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255, pattern=SLUG_PATTERN)
    is_active: bool | None = None
    max_attendees: int | None = Field(default=None, ge=1)
    banner_image: str | None = Field(default=None, max_length=255)
    is_recurring: bool | None = None
    recurrence_pattern: RecurrencePatternLiteral | None = None
    recurrence_interval: int | None = Field(default=None, ge=1)
    recurrence_end_date: UtcDatetime | None = None
    recurrence_count: int | None = Field(default=None, ge=1)

    @model_validator(mode="before")
    @classmethod
    def reject_explicit_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, ("title", "start_date", "slug", "is_active", "is_recurring"))


class EventResponse(BaseModel):
    """Event detail and list item."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    description: str | None = None
    start_date: UtcDatetime
    end_date: UtcDatetime | None = None
    location: str | None = None
    is_active: bool
    max_attendees: int | None = None
    banner_image: str | None = None
    parent_event_id: str | None = None
    is_recurring: bool
    recurrence_pattern: str | None = None
    recurrence_interval: int | None = None
    recurrence_end_date: UtcDatetime | None = None
    recurrence_count: int | None = None
    created_at: UtcDatetime


class SeriesResponse(BaseModel):
    """Result of POST /events/{event_id}/recurrences."""

    model_config = ConfigDict(from_attributes=True)

    parent_id: str
    instance_ids: list[str]
    removed_count: int


class AgendaItemResponse(BaseModel):
    """One slot of an event's programme."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    presenter_id: str | None = None
    title: str
    description: str | None = None
    start_time: UtcDatetime
    end_time: UtcDatetime | None = None
    item_type: str
    speaker: str | None = None
    location: str | None = None
    sort_order: int
    is_visible: bool


class AgendaItemCreateRequest(BaseModel):
    """New agenda slot; it is appended after the event's last item."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_time: UtcDatetime
    end_time: UtcDatetime | None = None
    item_type: AgendaItemTypeLiteral = "session"
    speaker: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    presenter_id: str | None = None
    is_visible: bool = True


class AgendaItemUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    start_time: UtcDatetime | None = None
    end_time: UtcDatetime | None = None
    item_type: AgendaItemTypeLiteral | None = None
    speaker: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    presenter_id: str | None = None
    is_visible: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_explicit_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, ("title", "start_time", "item_type", "is_visible"))


class AgendaReorderRequest(BaseModel):
    """Agenda item ids in their new order; position i gets sort_order i."""

    item_ids: list[str] = Field(..., min_length=1)
