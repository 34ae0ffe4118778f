"""Application DTOs (no ORM dependency)."""

from app.application.dtos.event import EventOccurrence, SeriesResult
from app.application.dtos.event_import import ColumnMappingSuggestion, CsvPreview
from app.application.dtos.featured_event import (
    FeaturedEventCard,
    FeaturedEventStatistics,
)

__all__ = [
    "ColumnMappingSuggestion",
    "CsvPreview",
    "EventOccurrence",
    "FeaturedEventCard",
    "FeaturedEventStatistics",
    "SeriesResult",
]
