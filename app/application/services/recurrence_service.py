"""Recurring event planning: expand a parent event's recurrence rule into dated occurrences."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from dateutil.relativedelta import relativedelta

from app.application.dtos.event import EventOccurrence
from app.domain.enums import RecurrencePattern
from app.domain.exceptions import RecurrenceConfigurationException
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.sanitization import slugify

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import Event

DEFAULT_MAX_INSTANCES = 100


def _step(pattern: RecurrencePattern, units: int) -> relativedelta:
    match pattern:
        case RecurrencePattern.DAILY:
            return relativedelta(days=units)
        case RecurrencePattern.WEEKLY:
            return relativedelta(weeks=units)
        case RecurrencePattern.MONTHLY:
            return relativedelta(months=units)
        case RecurrencePattern.YEARLY:
            return relativedelta(years=units)


class RecurrenceService:
    """Plans the instances of a recurring series without touching the database.

    The k-th occurrence starts at parent start + k * interval units, always
    computed from the parent start so that month-end dates clamp per month
    (Jan 31 -> Feb 28 -> Mar 31) instead of drifting.
    """

    def __init__(self, max_instances: int = DEFAULT_MAX_INSTANCES) -> None:
        self.max_instances = max_instances

    def plan_occurrences(self, event: Event) -> list[EventOccurrence]:
        """Return the occurrences after the parent (the parent itself is not included).

        Raises:
            RecurrenceConfigurationException: pattern missing or unknown, interval < 1,
                or neither an end date nor a count bounds the series.
        """
        if not event.is_recurring:
            return []

        pattern_value = event.recurrence_pattern
        end_limit = ensure_utc(event.recurrence_end_date)
        count = event.recurrence_count
        if not pattern_value or (end_limit is None and not count):
            raise RecurrenceConfigurationException(
                "Recurrence pattern and either end date or count must be specified",
                event_id=event.id,
            )
        try:
            pattern = RecurrencePattern(pattern_value)
        except ValueError as e:
            raise RecurrenceConfigurationException(
                f"Invalid recurrence pattern: {pattern_value}", event_id=event.id
            ) from e
        interval = event.recurrence_interval or 1
        if interval < 1:
            raise RecurrenceConfigurationException(
                "Recurrence interval must be at least 1", event_id=event.id
            )

        start = ensure_utc(event.start_date)
        if start is None:
            raise RecurrenceConfigurationException(
                "Recurring event needs a start date", event_id=event.id
            )
        end = ensure_utc(event.end_date)
        duration = end - start if end is not None else None
        limit = min(count, self.max_instances) if count else self.max_instances
        base_slug = slugify(event.title)

        occurrences: list[EventOccurrence] = []
        for k in range(1, limit + 1):
            occ_start: datetime = start + _step(pattern, k * interval)
            if end_limit is not None and occ_start > end_limit:
                break
            occurrences.append(
                EventOccurrence(
                    sequence=k,
                    start_date=occ_start,
                    end_date=occ_start + duration if duration is not None else None,
                    slug=f"{base_slug}-{occ_start:%Y-%m-%d}-{k}",
                    offset=occ_start - start,
                )
            )
        return occurrences
