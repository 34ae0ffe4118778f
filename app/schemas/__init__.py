"""Pydantic request/response schemas for the API."""

from app.schemas.attendee import AttendeeRegisterRequest, AttendeeResponse
from app.schemas.event import (
    AgendaItemCreateRequest,
    AgendaItemResponse,
    AgendaItemUpdateRequest,
    AgendaReorderRequest,
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    SeriesResponse,
)
from app.schemas.event_import import (
    ImportCreateRequest,
    ImportPreviewRequest,
    ImportPreviewResponse,
    ImportResponse,
)
from app.schemas.featured_event import (
    FeaturedEventCreateRequest,
    FeaturedEventFormResponse,
    FeaturedEventResponse,
    FeaturedEventUpdateRequest,
    RotationResponse,
)
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.message import MessageCreateRequest, MessageReplyRequest, MessageResponse
from app.schemas.presenter import (
    PresenterCreateRequest,
    PresenterResponse,
    PresenterSearchResult,
    PresenterUpdateRequest,
)

__all__ = [
    "AgendaItemCreateRequest",
    "AgendaItemResponse",
    "AgendaItemUpdateRequest",
    "AgendaReorderRequest",
    "AttendeeRegisterRequest",
    "AttendeeResponse",
    "EventCreateRequest",
    "EventResponse",
    "EventUpdateRequest",
    "FeaturedEventCreateRequest",
    "FeaturedEventFormResponse",
    "FeaturedEventResponse",
    "FeaturedEventUpdateRequest",
    "HealthResponse",
    "ImportCreateRequest",
    "ImportPreviewRequest",
    "ImportPreviewResponse",
    "ImportResponse",
    "MessageCreateRequest",
    "MessageReplyRequest",
    "MessageResponse",
    "PresenterCreateRequest",
    "PresenterResponse",
    "PresenterSearchResult",
    "PresenterUpdateRequest",
    "ReadinessResponse",
    "RotationResponse",
    "SeriesResponse",
]
