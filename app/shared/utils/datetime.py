"""UTC helpers.

Event times, counters and outbox schedules are stored timezone-aware in UTC.
SQLite returns naive values for those columns, so anything read back from a
session passes through ensure_utc before it is compared or serialized.
"""

from datetime import UTC, datetime

RESULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values, convert aware ones to UTC; None passes through."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_timestamp(dt: datetime) -> str:
    # Import job results and messages show wall-clock UTC without an offset.
    return ensure_utc(dt).strftime(RESULT_TIMESTAMP_FORMAT)
