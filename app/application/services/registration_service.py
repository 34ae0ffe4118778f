"""Attendee registration, e-mail verification, check-in, removal and CSV export."""

from __future__ import annotations

import csv
import io
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.interfaces.repositories import (
    IAttendeeRepository,
    IEventRepository,
)
from app.domain.exceptions import (
    DuplicateEmailException,
    EventCapacityExceededException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.datetime import format_timestamp, utc_now

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import Attendee

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Event",
    "Name",
    "Email",
    "Phone",
    "Organization",
    "Job Title",
    "Verified",
    "Checked In",
    "Registered At",
    "Verified At",
    "Checked In At",
]


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _timestamp_or_blank(dt: datetime | None) -> str:
    return format_timestamp(dt) if dt else ""


class RegistrationService:
    """Registers attendees against an event and tracks their verification / presence."""

    def __init__(
        self,
        event_repo: IEventRepository,
        attendee_repo: IAttendeeRepository,
    ) -> None:
        self.event_repo = event_repo
        self.attendee_repo = attendee_repo

    async def register(
        self,
        event_id: str,
        *,
        name: str,
        email: str,
        phone: str | None = None,
        organization: str | None = None,
        job_title: str | None = None,
        notes: str | None = None,
    ) -> Attendee:
        """Register an attendee for an active event with free capacity.

        Raises:
            ResourceNotFoundException: unknown event.
            ValidationException: event is not accepting registrations.
            EventCapacityExceededException: max_attendees reached.
            DuplicateEmailException: email already registered.
        """
        event = await self.event_repo.get_or_raise(event_id)
        if not event.is_active:
            raise ValidationException("Event is not open for registration", field="event_id")
        if event.max_attendees is not None:
            registered = await self.event_repo.count_attendees(event.id)
            if registered >= event.max_attendees:
                raise EventCapacityExceededException(event.id, event.max_attendees)

        normalized = email.strip().lower()
        if await self.attendee_repo.get_by_email(normalized):
            raise DuplicateEmailException(normalized)

        created = await self.attendee_repo.create_attendee(
            event_id=event.id,
            name=name.strip(),
            email=normalized,
            phone=phone,
            organization=organization,
            job_title=job_title,
            notes=notes,
        )
        logger.info("Attendee %s registered for event %s", created.id, event.id)
        return created

    async def verify_email(self, token: str) -> Attendee:
        """Mark the attendee holding token as verified and consume the token."""
        attendee = await self.attendee_repo.get_by_verification_token(token)
        if attendee is None:
            raise ResourceNotFoundException("verification_token", token)
        attendee.is_verified = True
        attendee.email_verified_at = utc_now()
        attendee.email_verification_token = None
        return await self.attendee_repo.save(attendee)

    async def check_in(self, attendee_id: str) -> Attendee:
        """Record arrival; a second check-in keeps the first timestamp."""
        attendee = await self.attendee_repo.get_or_raise(attendee_id)
        if attendee.is_checked_in:
            return attendee
        attendee.is_checked_in = True
        attendee.checked_in_at = utc_now()
        logger.info("Attendee %s checked in", attendee.id)
        return await self.attendee_repo.save(attendee)

    async def list_attendees(
        self, event_id: str, skip: int = 0, limit: int = 100
    ) -> list[Attendee]:
        await self.event_repo.get_or_raise(event_id)
        return await self.attendee_repo.list_for_event(event_id, skip=skip, limit=limit)

    async def delete_attendee(self, attendee_id: str) -> None:
        """Remove an attendee together with the messages they sent."""
        attendee = await self.attendee_repo.get_or_raise(attendee_id)
        await self.attendee_repo.delete_attendee(attendee)
        logger.info("Attendee %s removed from event %s", attendee_id, attendee.event_id)

    async def export_csv(self, event_id: str | None = None) -> str:
        """Attendees (of one event, or all) as CSV, ordered by event title then name."""
        if event_id is not None:
            await self.event_repo.get_or_raise(event_id)
        rows = await self.attendee_repo.list_for_export(event_id)

        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(EXPORT_COLUMNS)
        for attendee, event_title in rows:
            writer.writerow(
                [
                    event_title,
                    attendee.name,
                    attendee.email,
                    attendee.phone or "",
                    attendee.organization or "",
                    attendee.job_title or "",
                    _yes_no(attendee.is_verified),
                    _yes_no(attendee.is_checked_in),
                    format_timestamp(attendee.registered_at),
                    _timestamp_or_blank(attendee.email_verified_at),
                    _timestamp_or_blank(attendee.checked_in_at),
                ]
            )
        logger.info("Exported %s attendees (event=%s)", len(rows), event_id or "all")
        return output.getvalue()
