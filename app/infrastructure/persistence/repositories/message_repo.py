"""Message repository."""

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.message import Message
from app.infrastructure.persistence.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    resource_name = "message"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Message)

    async def list_for_recipient(
        self,
        recipient_id: str,
        *,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Message]:
        """Return a recipient's messages, newest first."""
        q = select(Message).where(Message.recipient_id == recipient_id)
        if unread_only:
            q = q.where(Message.is_read.is_(False))
        q = q.order_by(desc(Message.sent_at), desc(Message.id)).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def count_unread(self, recipient_id: str) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Message)
            .where(Message.recipient_id == recipient_id, Message.is_read.is_(False))
        )
        return int(result.scalar_one())

    async def get_thread(self, message_id: str) -> list[Message]:
        """Return the replies to a message, oldest first."""
        result = await self.db.execute(
            select(Message)
            .where(Message.reply_to_id == message_id)
            .order_by(Message.sent_at)
        )
        return list(result.scalars().all())

    async def create_message(
        self,
        *,
        sender_id: str,
        recipient_id: str,
        event_id: str,
        subject: str,
        content: str,
        priority: str,
        reply_to_id: str | None = None,
    ) -> Message:
        message = Message(
            sender_id=sender_id,
            recipient_id=recipient_id,
            event_id=event_id,
            subject=subject,
            content=content,
            priority=priority,
            reply_to_id=reply_to_id,
        )
        return await self.create(message)
