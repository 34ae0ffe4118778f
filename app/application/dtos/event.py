"""DTOs for event and recurrence use cases (no dependency on ORM or presentation schemas)."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class EventOccurrence:
    """One planned instance of a recurring series.

    offset is the distance from the parent's start; agenda items of the
    parent are shifted by it when the instance is materialized.
    """

    sequence: int
    start_date: datetime
    end_date: datetime | None
    slug: str
    offset: timedelta


@dataclass(frozen=True)
class SeriesResult:
    """Outcome of regenerating a recurring series."""

    parent_id: str
    instance_ids: list[str]
    removed_count: int
