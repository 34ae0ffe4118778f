"""DTOs for featured-event use cases."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FeaturedEventCard:
    """Render-ready featured event (cacheable: dates are ISO-8601 strings)."""

    id: str
    title: str
    description: str | None
    image_url: str | None
    link_url: str | None
    link_text: str
    priority: int
    display_type: str
    display_settings: Any
    start_date: str | None
    end_date: str | None
    view_count: int
    click_count: int
    click_through_rate: float
    related_event_id: str | None = None


@dataclass(frozen=True)
class FeaturedEventStatistics:
    """Counters over active featured events, plus the overall total."""

    total: int
    active: int
    total_views: int
    total_clicks: int
    average_ctr: float
