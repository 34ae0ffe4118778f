"""Attendee → administrator messaging with an outbox notification per message."""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from app.application.interfaces.repositories import (
    IAdministratorRepository,
    IAsyncMessageRepository,
    IAttendeeRepository,
    IMessageRepository,
)
from app.core.constants import MESSAGE_NOTIFICATION_QUEUE
from app.domain.enums import MessagePriority, MessageStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.datetime import format_timestamp
from app.shared.utils.sanitization import sanitize_input

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import Message

logger = logging.getLogger(__name__)

NOTIFICATION_HEADERS = json.dumps(
    {"content-type": "application/json", "type": "message_notification"}
)

# messages.subject is VARCHAR(255); the limit applies to the stored (escaped) text.
SUBJECT_MAX_LENGTH = 255
REPLY_PREFIX = "Re: "
_TRAILING_ENTITY = re.compile(r"&[#a-zA-Z0-9]*$")


def _fit_subject(subject: str) -> str:
    """Cut to SUBJECT_MAX_LENGTH without leaving half an HTML entity at the end."""
    if len(subject) <= SUBJECT_MAX_LENGTH:
        return subject
    return _TRAILING_ENTITY.sub("", subject[:SUBJECT_MAX_LENGTH]).rstrip()


class MessageService:
    """Send, reply to, read and archive messages."""

    def __init__(
        self,
        message_repo: IMessageRepository,
        attendee_repo: IAttendeeRepository,
        administrator_repo: IAdministratorRepository,
        outbox_repo: IAsyncMessageRepository,
    ) -> None:
        self.message_repo = message_repo
        self.attendee_repo = attendee_repo
        self.administrator_repo = administrator_repo
        self.outbox_repo = outbox_repo

    async def send_message(
        self,
        *,
        sender_id: str,
        recipient_id: str,
        event_id: str,
        subject: str,
        content: str,
        priority: str = MessagePriority.NORMAL.value,
        reply_to_id: str | None = None,
        truncate_subject: bool = False,
    ) -> Message:
        """Store a message from an attendee of event_id and queue its notification.

        Subject and content are stripped of HTML. A stored subject longer than
        SUBJECT_MAX_LENGTH is rejected, or cut when truncate_subject is set.
        A reply marks its parent replied.
        """
        if priority not in MessagePriority.values():
            raise ValidationException(
                f"priority must be one of {', '.join(MessagePriority.values())}",
                field="priority",
            )
        sender = await self.attendee_repo.get_by_id(sender_id)
        if sender is None:
            raise ResourceNotFoundException("attendee", sender_id)
        if sender.event_id != event_id:
            raise ValidationException(
                "Sender is not registered for this event", field="event_id"
            )
        recipient = await self.administrator_repo.get_by_id(recipient_id)
        if recipient is None or not recipient.is_active:
            raise ResourceNotFoundException("administrator", recipient_id)

        parent: Message | None = None
        if reply_to_id is not None:
            parent = await self.message_repo.get_or_raise(reply_to_id)
            if parent.event_id != event_id:
                raise ValidationException(
                    "Replies must stay within the same event", field="reply_to_id"
                )

        clean_subject = sanitize_input(subject).strip()
        clean_content = sanitize_input(content).strip()
        if truncate_subject:
            clean_subject = _fit_subject(clean_subject)
        elif len(clean_subject) > SUBJECT_MAX_LENGTH:
            raise ValidationException(
                f"Subject must be at most {SUBJECT_MAX_LENGTH} characters once escaped",
                field="subject",
            )
        if not clean_subject:
            raise ValidationException("Subject cannot be empty", field="subject")
        if not clean_content:
            raise ValidationException("Content cannot be empty", field="content")

        message = await self.message_repo.create_message(
            sender_id=sender.id,
            recipient_id=recipient.id,
            event_id=event_id,
            subject=clean_subject,
            content=clean_content,
            priority=priority,
            reply_to_id=reply_to_id,
        )
        if parent is not None:
            parent.status = MessageStatus.REPLIED.value
            await self.message_repo.save(parent)

        await self.outbox_repo.enqueue(
            MESSAGE_NOTIFICATION_QUEUE,
            json.dumps(
                {
                    "type": "message_sent",
                    "message_id": message.id,
                    "event_id": event_id,
                    "sender_id": sender.id,
                    "recipient_id": recipient.id,
                    "subject": clean_subject,
                    "priority": priority,
                    "sent_at": format_timestamp(message.sent_at),
                }
            ),
            NOTIFICATION_HEADERS,
        )
        logger.info(
            "Message %s sent from attendee %s to administrator %s",
            message.id,
            sender.id,
            recipient.id,
        )
        return message

    async def reply(self, message_id: str, content: str) -> Message:
        """Reply in the thread of message_id.

        The subject gets a single "Re: " prefix and is cut to fit the column.
        """
        original = await self.message_repo.get_or_raise(message_id)
        subject = original.subject
        if not subject.startswith(REPLY_PREFIX):
            subject = REPLY_PREFIX + subject
        return await self.send_message(
            sender_id=original.sender_id,
            recipient_id=original.recipient_id,
            event_id=original.event_id,
            subject=subject,
            content=content,
            priority=original.priority,
            reply_to_id=original.id,
            truncate_subject=True,
        )

    async def mark_read(self, message_id: str) -> Message:
        message = await self.message_repo.get_or_raise(message_id)
        if message.is_read:
            return message
        message.mark_as_read()
        return await self.message_repo.save(message)

    async def archive(self, message_id: str) -> Message:
        message = await self.message_repo.get_or_raise(message_id)
        message.status = MessageStatus.ARCHIVED.value
        return await self.message_repo.save(message)

    async def inbox(
        self,
        recipient_id: str,
        *,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[list[Message], int]:
        """An administrator's messages (newest first) and their unread count."""
        if await self.administrator_repo.get_by_id(recipient_id) is None:
            raise ResourceNotFoundException("administrator", recipient_id)
        messages = await self.message_repo.list_for_recipient(
            recipient_id, unread_only=unread_only, skip=skip, limit=limit
        )
        return messages, await self.message_repo.count_unread(recipient_id)

    async def thread(self, message_id: str) -> list[Message]:
        """The message followed by its direct replies, oldest first."""
        original = await self.message_repo.get_or_raise(message_id)
        return [original, *await self.message_repo.get_thread(original.id)]
