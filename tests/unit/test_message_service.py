"""MessageService: sanitizing, thread rules and outbox notifications."""

import json
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from app.application.services import MessageService
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.persistence.models import Message

SENT_AT = datetime(2030, 6, 15, 12, 30, tzinfo=UTC)


def _message(**fields) -> Message:
    values = {"id": "msg-new", "sent_at": SENT_AT, "status": "sent", "is_read": False}
    values.update(fields)
    return Message(**values)


@pytest.fixture
def repos():
    message_repo = AsyncMock()
    message_repo.create_message = AsyncMock(side_effect=lambda **fields: _message(**fields))
    message_repo.save = AsyncMock(side_effect=lambda obj: obj)
    attendee_repo = AsyncMock()
    attendee_repo.get_by_id = AsyncMock(return_value=SimpleNamespace(id="att-1", event_id="ev-1"))
    administrator_repo = AsyncMock()
    administrator_repo.get_by_id = AsyncMock(
        return_value=SimpleNamespace(id="adm-1", is_active=True)
    )
    outbox_repo = AsyncMock()
    return message_repo, attendee_repo, administrator_repo, outbox_repo


def _send_kwargs(**overrides):
    values = {
        "sender_id": "att-1",
        "recipient_id": "adm-1",
        "event_id": "ev-1",
        "subject": "Parking",
        "content": "Is there parking at the venue?",
    }
    values.update(overrides)
    return values


async def test_send_message_strips_html_and_queues_notification(repos) -> None:
    message_repo, attendee_repo, administrator_repo, outbox_repo = repos
    svc = MessageService(message_repo, attendee_repo, administrator_repo, outbox_repo)

    message = await svc.send_message(
        **_send_kwargs(subject="<b>Parking</b>", content="<script>x()</script>Any spaces left?")
    )

    assert message.subject == "Parking"
    assert message.content == "Any spaces left?"
    queue_name, body, headers = outbox_repo.enqueue.await_args.args
    assert queue_name == "messages"
    payload = json.loads(body)
    assert payload["type"] == "message_sent"
    assert payload["message_id"] == "msg-new"
    assert payload["sent_at"] == "2030-06-15 12:30:00"
    assert json.loads(headers)["type"] == "message_notification"


async def test_send_message_rejects_unknown_priority(repos) -> None:
    svc = MessageService(*repos)
    with pytest.raises(ValidationException):
        await svc.send_message(**_send_kwargs(priority="critical"))


async def test_sender_must_belong_to_event(repos) -> None:
    svc = MessageService(*repos)
    with pytest.raises(ValidationException):
        await svc.send_message(**_send_kwargs(event_id="ev-2"))


async def test_inactive_recipient_is_not_found(repos) -> None:
    _, _, administrator_repo, outbox_repo = repos
    administrator_repo.get_by_id = AsyncMock(
        return_value=SimpleNamespace(id="adm-1", is_active=False)
    )
    with pytest.raises(ResourceNotFoundException):
        await MessageService(*repos).send_message(**_send_kwargs())
    outbox_repo.enqueue.assert_not_awaited()


async def test_content_that_is_only_markup_is_rejected(repos) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await MessageService(*repos).send_message(
            **_send_kwargs(content="<script>alert(1)</script>")
        )
    assert exc_info.value.details == {"field": "content"}


async def test_reply_marks_original_replied(repos) -> None:
    message_repo = repos[0]
    original = _message(
        id="msg-1",
        sender_id="att-1",
        recipient_id="adm-1",
        event_id="ev-1",
        subject="Parking",
        content="Question",
        priority="high",
    )
    message_repo.get_or_raise = AsyncMock(return_value=original)

    reply = await MessageService(*repos).reply("msg-1", "Yes, level 2.")

    assert reply.subject == "Re: Parking"
    assert reply.reply_to_id == "msg-1"
    assert reply.priority == "high"
    assert original.status == "replied"


async def test_subject_longer_than_column_once_escaped_is_rejected(repos) -> None:
    message_repo = repos[0]
    subject = "Q&A " + "&" * 251

    with pytest.raises(ValidationException) as exc_info:
        await MessageService(*repos).send_message(**_send_kwargs(subject=subject))

    assert exc_info.value.details["field"] == "subject"
    message_repo.create_message.assert_not_awaited()


def _original(subject: str) -> Message:
    return _message(
        id="msg-1",
        sender_id="att-1",
        recipient_id="adm-1",
        event_id="ev-1",
        subject=subject,
        content="Question",
        priority="normal",
    )


async def test_reply_subject_is_cut_to_column_length(repos) -> None:
    repos[0].get_or_raise = AsyncMock(return_value=_original("x" * 255))

    reply = await MessageService(*repos).reply("msg-1", "Answer")

    assert len(reply.subject) == 255
    assert reply.subject.startswith("Re: xxx")


async def test_reply_does_not_cut_through_an_entity(repos) -> None:
    repos[0].get_or_raise = AsyncMock(return_value=_original("x" * 248 + "&amp;"))

    reply = await MessageService(*repos).reply("msg-1", "Answer")

    assert reply.subject == "Re: " + "x" * 248


async def test_reply_to_reply_keeps_single_prefix(repos) -> None:
    repos[0].get_or_raise = AsyncMock(return_value=_original("Re: Parking"))

    reply = await MessageService(*repos).reply("msg-1", "Answer")

    assert reply.subject == "Re: Parking"


async def test_mark_read_sets_status_once(repos) -> None:
    message_repo = repos[0]
    message = _message(id="msg-1")
    message_repo.get_or_raise = AsyncMock(return_value=message)
    svc = MessageService(*repos)

    first = await svc.mark_read("msg-1")
    read_at = first.read_at
    await svc.mark_read("msg-1")

    assert first.is_read is True
    assert first.status == "read"
    assert message.read_at == read_at
    message_repo.save.assert_awaited_once()


async def test_archive(repos) -> None:
    message_repo = repos[0]
    message_repo.get_or_raise = AsyncMock(return_value=_message(id="msg-1"))
    archived = await MessageService(*repos).archive("msg-1")
    assert archived.status == "archived"


async def test_inbox_returns_messages_and_unread_count(repos) -> None:
    message_repo, attendee_repo, administrator_repo, outbox_repo = repos
    listed = [_message(id="m2"), _message(id="m1")]
    message_repo.list_for_recipient = AsyncMock(return_value=listed)
    message_repo.count_unread = AsyncMock(return_value=2)
    svc = MessageService(message_repo, attendee_repo, administrator_repo, outbox_repo)

    messages, unread = await svc.inbox("adm-1", unread_only=True)

    assert messages == listed
    assert unread == 2
    message_repo.list_for_recipient.assert_awaited_once_with(
        "adm-1", unread_only=True, skip=0, limit=50
    )


async def test_inbox_unknown_administrator(repos) -> None:
    message_repo, attendee_repo, administrator_repo, outbox_repo = repos
    administrator_repo.get_by_id = AsyncMock(return_value=None)
    svc = MessageService(message_repo, attendee_repo, administrator_repo, outbox_repo)

    with pytest.raises(ResourceNotFoundException):
        await svc.inbox("adm-x")


async def test_thread_starts_with_original(repos) -> None:
    message_repo, attendee_repo, administrator_repo, outbox_repo = repos
    original = _message(id="m1")
    reply = _message(id="m2", reply_to_id="m1")
    message_repo.get_or_raise = AsyncMock(return_value=original)
    message_repo.get_thread = AsyncMock(return_value=[reply])
    svc = MessageService(message_repo, attendee_repo, administrator_repo, outbox_repo)

    assert await svc.thread("m1") == [original, reply]
