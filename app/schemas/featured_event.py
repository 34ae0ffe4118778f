"""Featured event API schemas.

display_settings is edited as JSON text in the admin form: requests accept
either text (decoded via JsonTextField) or a JSON object, and the form view
renders the stored value back to text.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.application.forms.json_text import json_text_codec
from app.schemas.fields import JsonTextField, UtcDatetime, reject_nulls

DisplayTypeLiteral = Literal["banner", "card", "popup", "sidebar"]
_REQUIRED_ON_UPDATE = ("title", "priority", "is_active", "display_type")


class _FeaturedEventFields(BaseModel):
    related_event_id: str | None = None
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=500)
    link_url: str | None = Field(default=None, max_length=500)
    link_text: str | None = Field(default=None, max_length=100)
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    display_settings: JsonTextField = None

    @model_validator(mode="after")
    def check_window(self) -> Any:
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class FeaturedEventCreateRequest(_FeaturedEventFields):
    """Payload for creating a featured event."""

    created_by_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    priority: int = Field(default=0, ge=0, le=100)
    is_active: bool = True
    display_type: DisplayTypeLiteral = "banner"


class FeaturedEventUpdateRequest(_FeaturedEventFields):
    """Partial update; only fields present in the body are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    priority: int | None = Field(default=None, ge=0, le=100)
    is_active: bool | None = None
    display_type: DisplayTypeLiteral | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_explicit_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, _REQUIRED_ON_UPDATE)


class FeaturedEventResponse(BaseModel):
    """Featured event as seen by administrators and public pages.

    Built from the ORM row or from a cached card; link_url / link_text are the
    effective values (fallbacks applied).
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    image_url: str | None = None
    link_url: str | None = None
    link_text: str
    priority: int
    display_type: str
    display_settings: Any = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    view_count: int
    click_count: int
    click_through_rate: float
    related_event_id: str | None = None


class FeaturedEventFormResponse(BaseModel):
    """Values for the admin edit form; display_settings as JSON text."""

    id: str
    title: str
    related_event_id: str | None = None
    description: str | None = None
    image_url: str | None = None
    link_url: str | None = None
    link_text: str | None = None
    priority: int
    is_active: bool
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    display_type: str
    display_settings: str

    @classmethod
    def from_model(cls, fe: Any) -> "FeaturedEventFormResponse":
        return cls(
            id=fe.id,
            title=fe.title,
            related_event_id=fe.related_event_id,
            description=fe.description,
            image_url=fe.image_url,
            link_url=fe.link_url,
            link_text=fe.link_text,
            priority=fe.priority,
            is_active=fe.is_active,
            start_date=fe.start_date,
            end_date=fe.end_date,
            display_type=fe.display_type,
            display_settings=json_text_codec.encode(fe.display_settings),
        )


class RotationResponse(BaseModel):
    """Homepage carousel: items plus the effective rotation settings."""

    items: list[FeaturedEventResponse]
    settings: dict[str, Any]


class FeaturedEventStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    active: int
    total_views: int
    total_clicks: int
    average_ctr: float


class CounterResponse(BaseModel):
    """Result of a view/click beacon; recorded is False for inactive or unknown items."""

    recorded: bool
