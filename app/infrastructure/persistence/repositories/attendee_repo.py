"""Attendee repository."""

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import DuplicateEmailException
from app.infrastructure.persistence.models.attendee import Attendee
from app.infrastructure.persistence.models.event import Event
from app.infrastructure.persistence.models.message import Message
from app.infrastructure.persistence.repositories.base import BaseRepository


class AttendeeRepository(BaseRepository[Attendee]):
    resource_name = "attendee"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Attendee)

    async def get_by_email(self, email: str) -> Attendee | None:
        result = await self.db.execute(select(Attendee).where(Attendee.email == email))
        return result.scalar_one_or_none()

    async def get_by_verification_token(self, token: str) -> Attendee | None:
        result = await self.db.execute(
            select(Attendee).where(Attendee.email_verification_token == token)
        )
        return result.scalar_one_or_none()

    async def list_for_event(
        self, event_id: str, skip: int = 0, limit: int = 100
    ) -> list[Attendee]:
        result = await self.db.execute(
            select(Attendee)
            .where(Attendee.event_id == event_id)
            .order_by(Attendee.registered_at, Attendee.id)
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def create_attendee(
        self,
        *,
        event_id: str,
        name: str,
        email: str,
        phone: str | None = None,
        organization: str | None = None,
        job_title: str | None = None,
        notes: str | None = None,
        password: str | None = None,
    ) -> Attendee:
        """Insert with a fresh verification token; a clash on the unique email
        raises DuplicateEmailException.
        """
        attendee = Attendee(
            event_id=event_id,
            name=name,
            email=email,
            phone=phone,
            organization=organization,
            job_title=job_title,
            notes=notes,
            password=password,
        )
        attendee.generate_email_verification_token()
        return await self.create_unique(
            attendee, lambda: DuplicateEmailException(attendee.email)
        )

    async def list_for_export(self, event_id: str | None = None) -> list[tuple[Attendee, str]]:
        """(attendee, event title) pairs ordered by event title, then attendee name."""
        q = select(Attendee, Event.title).join(Event, Attendee.event_id == Event.id)
        if event_id is not None:
            q = q.where(Attendee.event_id == event_id)
        result = await self.db.execute(q.order_by(Event.title, Attendee.name, Attendee.id))
        return [(attendee, title) for attendee, title in result.all()]

    async def delete_attendee(self, attendee: Attendee) -> None:
        """Delete an attendee and the messages they sent.

        Replies to those messages are kept and detached from the thread.
        """
        sent = select(Message.id).where(Message.sender_id == attendee.id)
        await self.db.execute(
            update(Message).where(Message.reply_to_id.in_(sent)).values(reply_to_id=None)
        )
        await self.db.execute(delete(Message).where(Message.sender_id == attendee.id))
        await self.delete(attendee)
