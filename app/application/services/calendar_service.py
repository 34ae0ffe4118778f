"""iCalendar (RFC 5545) export of events.

Three documents are produced: a feed of every active event (calendar apps
poll it hourly), a subscription snapshot of upcoming active events, and a
single-event file with a one-hour reminder. Times are written in UTC.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from app.application.interfaces.repositories import IEventRepository
from app.domain.exceptions import ResourceNotFoundException
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import Event

logger = logging.getLogger(__name__)

ICS_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
# Events without an end date are exported as one-hour slots.
DEFAULT_DURATION = timedelta(hours=1)
MAX_TEXT_LENGTH = 1000
MAX_LINE_OCTETS = 75
FEED_REFRESH = "PT1H"

_WHITESPACE = re.compile(r"\s+")
_FILENAME_UNSAFE = re.compile(r"[^a-zA-Z0-9\s\-_]")


def escape_text(value: str) -> str:
    """TEXT value: backslash, comma, semicolon and line breaks escaped, whitespace collapsed."""
    if len(value) > MAX_TEXT_LENGTH:
        value = value[: MAX_TEXT_LENGTH - 3] + "..."
    value = value.replace("\\", "\\\\").replace(",", "\\,").replace(";", "\\;")
    value = value.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "")
    return _WHITESPACE.sub(" ", value).strip()


def fold_line(line: str) -> str:
    """Split a content line into 75-octet chunks; continuation lines start with a space."""
    chunks: list[str] = []
    current, size, limit = "", 0, MAX_LINE_OCTETS
    for ch in line:
        width = len(ch.encode("utf-8"))
        if size + width > limit:
            chunks.append(current)
            # The leading space of a continuation line counts towards its 75 octets.
            current, size, limit = "", 0, MAX_LINE_OCTETS - 1
        current += ch
        size += width
    chunks.append(current)
    return "\r\n ".join(chunks)


def format_ics_datetime(dt: datetime) -> str:
    return ensure_utc(dt).strftime(ICS_TIMESTAMP_FORMAT)


def calendar_filename(title: str) -> str:
    """Download name for an event file: unsafe characters dropped, spaces to underscores."""
    cleaned = _WHITESPACE.sub("_", _FILENAME_UNSAFE.sub("", title).strip())[:50]
    return f"{cleaned or 'event'}.ics"


class CalendarService:
    """Renders events as iCalendar documents."""

    def __init__(
        self,
        event_repo: IEventRepository,
        *,
        calendar_name: str,
        base_url: str,
        organizer_email: str | None = None,
    ) -> None:
        self.event_repo = event_repo
        self.calendar_name = calendar_name
        self.base_url = base_url.rstrip("/")
        self.host = urlsplit(self.base_url).hostname or "localhost"
        self.organizer_email = organizer_email

    async def feed(self, now: datetime | None = None) -> str:
        """All active events, past and future, by start date."""
        events = await self.event_repo.list_active()
        return self._render(events, now or utc_now(), feed=True)

    async def subscription(self, now: datetime | None = None) -> str:
        """Active events that have not started yet."""
        now = now or utc_now()
        events = await self.event_repo.list_active(starting_from=now)
        return self._render(events, now)

    async def event_calendar(self, slug: str, now: datetime | None = None) -> tuple[str, str]:
        """(ICS document, download filename) for one event, with a reminder an hour before."""
        event = await self.event_repo.get_by_slug(slug)
        if event is None:
            raise ResourceNotFoundException("event", slug)
        lines = self._header(listing=False)
        lines += self._vevent(event, now or utc_now(), reminder=True)
        lines.append("END:VCALENDAR")
        return self._serialize(lines), calendar_filename(event.title)

    def _render(self, events: list[Event], now: datetime, *, feed: bool = False) -> str:
        lines = self._header(listing=True)
        if feed:
            lines += [f"X-WR-CALREFRESH:{FEED_REFRESH}", f"X-PUBLISHED-TTL:{FEED_REFRESH}"]
        for event in events:
            lines += self._vevent(event, now)
        lines.append("END:VCALENDAR")
        logger.debug("Rendered calendar with %s events", len(events))
        return self._serialize(lines)

    def _header(self, *, listing: bool) -> list[str]:
        name = escape_text(self.calendar_name)
        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:-//{name}//EventHub//EN",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
        ]
        if listing:
            lines += [
                f"X-WR-CALNAME:{name} Events",
                f"X-WR-CALDESC:Events from {name}",
                "X-WR-TIMEZONE:UTC",
            ]
        return lines

    def _vevent(self, event: Event, now: datetime, *, reminder: bool = False) -> list[str]:
        start = ensure_utc(event.start_date)
        end = ensure_utc(event.end_date) if event.end_date else start + DEFAULT_DURATION
        lines = [
            "BEGIN:VEVENT",
            f"UID:event-{event.id}@{self.host}",
            f"SUMMARY:{escape_text(event.title)}",
            f"DTSTART:{format_ics_datetime(start)}",
            f"DTEND:{format_ics_datetime(end)}",
        ]
        if event.location:
            lines.append(f"LOCATION:{escape_text(event.location)}")
        if event.description:
            lines.append(f"DESCRIPTION:{escape_text(event.description)}")
        lines += [
            f"URL:{self.base_url}/event/{event.slug}",
            f"DTSTAMP:{format_ics_datetime(now)}",
            f"CREATED:{format_ics_datetime(event.created_at)}",
            f"LAST-MODIFIED:{format_ics_datetime(event.updated_at or event.created_at)}",
            "STATUS:CONFIRMED",
            "CATEGORIES:EVENT",
        ]
        if self.organizer_email:
            lines.append(
                f"ORGANIZER;CN={escape_text(self.calendar_name)}:mailto:{self.organizer_email}"
            )
        if reminder:
            lines += [
                "BEGIN:VALARM",
                "TRIGGER:-PT1H",
                "ACTION:DISPLAY",
                f"DESCRIPTION:Reminder: {escape_text(event.title)} starts in 1 hour",
                "END:VALARM",
            ]
        lines.append("END:VEVENT")
        return lines

    @staticmethod
    def _serialize(lines: list[str]) -> str:
        return "".join(fold_line(line) + "\r\n" for line in lines)
