"""Message ORM model: attendee → administrator, scoped to an event."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import MessagePriority, MessageStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin
from app.shared.utils.datetime import utc_now


class Message(CuidMixin, Base):
    """Message. Table: messages. reply_to_id references another message."""

    __tablename__ = "messages"

    sender_id: Mapped[str] = mapped_column(
        String, ForeignKey("attendees.id"), nullable=False, index=True
    )
    recipient_id: Mapped[str] = mapped_column(
        String, ForeignKey("administrators.id"), nullable=False, index=True
    )
    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id"), nullable=False, index=True
    )
    reply_to_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("messages.id"), nullable=True, index=True
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    read_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MessageStatus.SENT.value
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MessagePriority.NORMAL.value
    )

    __table_args__ = (Index("ix_messages_recipient_read", "recipient_id", "is_read"),)

    def mark_as_read(self, now: datetime | None = None) -> None:
        """Flag as read; read_at keeps the first read time."""
        if self.is_read:
            return
        self.is_read = True
        self.read_at = now or utc_now()
        if self.status == MessageStatus.SENT.value:
            self.status = MessageStatus.READ.value
