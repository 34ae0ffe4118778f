"""Attendee message API schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.fields import UtcDatetime


class MessageCreateRequest(BaseModel):
    """Payload for an attendee sending a message to an administrator."""

    sender_id: str = Field(..., min_length=1)
    recipient_id: str = Field(..., min_length=1)
    event_id: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    priority: Literal["low", "normal", "high", "urgent"] = "normal"
    reply_to_id: str | None = None


class MessageReplyRequest(BaseModel):
    content: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender_id: str
    recipient_id: str
    event_id: str
    reply_to_id: str | None = None
    subject: str
    content: str
    is_read: bool
    status: str
    priority: str
    sent_at: UtcDatetime
    read_at: UtcDatetime | None = None


class MessageInboxResponse(BaseModel):
    """An administrator's messages plus how many are still unread."""

    items: list[MessageResponse]
    unread_count: int
