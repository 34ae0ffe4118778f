"""Message endpoints: send, reply, read, archive; notifications land in the outbox."""

import json

import pytest
from sqlalchemy import select

from app.infrastructure.persistence.models import AsyncMessage


@pytest.fixture
async def attendee_id(client, event_id) -> str:
    response = await client.post(
        f"/api/v1/events/{event_id}/attendees",
        json={"name": "Jane Doe", "email": "jane@example.com"},
    )
    return response.json()["id"]


async def _send(client, attendee_id, admin_id, event_id, **overrides):
    payload = {
        "sender_id": attendee_id,
        "recipient_id": admin_id,
        "event_id": event_id,
        "subject": "<b>Parking</b>",
        "content": "Is there parking <script>alert(1)</script>nearby?",
        **overrides,
    }
    return await client.post("/api/v1/messages", json=payload)


async def test_send_message_sanitizes_and_queues_notification(
    client, attendee_id, admin_id, event_id, session_factory
) -> None:
    response = await _send(client, attendee_id, admin_id, event_id, priority="high")

    assert response.status_code == 201
    body = response.json()
    assert body["subject"] == "Parking"
    assert body["content"] == "Is there parking nearby?"
    assert body["status"] == "sent"
    assert body["is_read"] is False

    async with session_factory() as session:
        rows = (await session.execute(select(AsyncMessage))).scalars().all()
    assert len(rows) == 1
    payload = json.loads(rows[0].body)
    assert payload["type"] == "message_sent"
    assert payload["message_id"] == body["id"]
    assert payload["priority"] == "high"


async def test_sender_must_attend_the_event(client, attendee_id, admin_id) -> None:
    other = await client.post(
        "/api/v1/events", json={"title": "Other", "start_date": "2030-07-01T10:00:00Z"}
    )
    response = await _send(client, attendee_id, admin_id, other.json()["id"])
    assert response.status_code == 400


async def test_unknown_recipient_is_not_found(client, attendee_id, event_id) -> None:
    response = await _send(client, attendee_id, "missing-admin", event_id)
    assert response.status_code == 404


async def test_reply_read_and_archive(client, attendee_id, admin_id, event_id) -> None:
    original = (await _send(client, attendee_id, admin_id, event_id)).json()

    reply = await client.post(
        f"/api/v1/messages/{original['id']}/reply", json={"content": "Thanks!"}
    )
    assert reply.status_code == 201
    assert reply.json()["subject"] == "Re: Parking"
    assert reply.json()["reply_to_id"] == original["id"]

    read = await client.post(f"/api/v1/messages/{original['id']}/read")
    assert read.status_code == 200
    assert read.json()["is_read"] is True

    archived = await client.post(f"/api/v1/messages/{original['id']}/archive")
    assert archived.json()["status"] == "archived"


async def test_reply_to_unknown_message(client) -> None:
    response = await client.post("/api/v1/messages/nope/reply", json={"content": "Hi"})
    assert response.status_code == 404


async def test_inbox_and_thread(client, attendee_id, admin_id, event_id) -> None:
    first = (await _send(client, attendee_id, admin_id, event_id, subject="One")).json()
    await _send(client, attendee_id, admin_id, event_id, subject="Two")
    await client.post(f"/api/v1/messages/{first['id']}/read")
    await client.post(f"/api/v1/messages/{first['id']}/reply", json={"content": "More"})

    inbox = await client.get("/api/v1/messages", params={"recipient_id": admin_id})
    assert inbox.status_code == 200
    assert len(inbox.json()["items"]) == 3
    assert inbox.json()["unread_count"] == 2

    unread = await client.get(
        "/api/v1/messages", params={"recipient_id": admin_id, "unread_only": "true"}
    )
    assert {m["subject"] for m in unread.json()["items"]} == {"Two", "Re: One"}

    thread = await client.get(f"/api/v1/messages/{first['id']}/thread")
    assert [m["subject"] for m in thread.json()] == ["One", "Re: One"]


async def test_inbox_of_unknown_administrator(client) -> None:
    response = await client.get("/api/v1/messages", params={"recipient_id": "nobody"})
    assert response.status_code == 404


async def test_subject_that_grows_when_escaped_is_rejected(
    client, attendee_id, admin_id, event_id
) -> None:
    response = await _send(
        client, attendee_id, admin_id, event_id, subject="Q&A " + "&" * 251
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert response.json()["details"] == {"field": "subject"}


async def test_reply_to_long_subject_fits_column(client, attendee_id, admin_id, event_id) -> None:
    original = await _send(client, attendee_id, admin_id, event_id, subject="s" * 255)
    reply = await client.post(
        f"/api/v1/messages/{original.json()['id']}/reply", json={"content": "Noted"}
    )
    assert reply.status_code == 201
    assert len(reply.json()["subject"]) == 255
    assert reply.json()["subject"].startswith("Re: s")
