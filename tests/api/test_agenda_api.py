"""Agenda API: add, edit, hide, reorder, duplicate and delete items."""

import pytest

KEYNOTE = {
    "title": "Keynote",
    "start_time": "2030-06-15T09:00:00Z",
    "end_time": "2030-06-15T10:00:00Z",
    "item_type": "keynote",
}


async def _add(client, event_id: str, **overrides) -> dict:
    response = await client.post(
        f"/api/v1/events/{event_id}/agenda", json={**KEYNOTE, **overrides}
    )
    assert response.status_code == 201
    return response.json()


async def test_create_appends_visible_item(client, event_id) -> None:
    first = await _add(client, event_id)
    second = await _add(client, event_id, title="Lunch", item_type="break")

    assert first["sort_order"] == 1
    assert second["sort_order"] == 2
    assert first["is_visible"] is True
    agenda = await client.get(f"/api/v1/events/{event_id}/agenda")
    assert [i["title"] for i in agenda.json()] == ["Keynote", "Lunch"]


async def test_create_for_unknown_event(client) -> None:
    response = await client.post("/api/v1/events/missing/agenda", json=KEYNOTE)
    assert response.status_code == 404


async def test_create_with_unknown_presenter(client, event_id) -> None:
    response = await client.post(
        f"/api/v1/events/{event_id}/agenda", json={**KEYNOTE, "presenter_id": "nobody"}
    )
    assert response.status_code == 404


async def test_create_end_before_start(client, event_id) -> None:
    response = await client.post(
        f"/api/v1/events/{event_id}/agenda",
        json={**KEYNOTE, "end_time": "2030-06-15T08:00:00Z"},
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "end_time"}


async def test_hidden_items_need_include_hidden(client, event_id) -> None:
    await _add(client, event_id)
    hidden = await _add(client, event_id, title="Speaker prep", is_visible=False)

    public = await client.get(f"/api/v1/events/{event_id}/agenda")
    assert [i["title"] for i in public.json()] == ["Keynote"]
    full = await client.get(
        f"/api/v1/events/{event_id}/agenda", params={"include_hidden": "true"}
    )
    assert [i["id"] for i in full.json()][-1] == hidden["id"]


async def test_get_and_update_item(client, event_id) -> None:
    item = await _add(client, event_id)

    response = await client.put(
        f"/api/v1/agenda/{item['id']}", json={"location": "Room 1", "speaker": "Grace"}
    )
    assert response.status_code == 200
    fetched = await client.get(f"/api/v1/agenda/{item['id']}")
    body = fetched.json()
    assert body["location"] == "Room 1"
    assert body["speaker"] == "Grace"
    assert body["title"] == "Keynote"


@pytest.mark.parametrize("field", ["title", "start_time", "item_type", "is_visible"])
async def test_update_rejects_null_for_required_field(client, event_id, field) -> None:
    item = await _add(client, event_id)
    response = await client.put(f"/api/v1/agenda/{item['id']}", json={field: None})
    assert response.status_code == 422


async def test_toggle_visibility(client, event_id) -> None:
    item = await _add(client, event_id)

    response = await client.post(f"/api/v1/agenda/{item['id']}/toggle-visibility")
    assert response.json()["is_visible"] is False
    public = await client.get(f"/api/v1/events/{event_id}/agenda")
    assert public.json() == []


async def test_reorder_ignores_foreign_ids(client, event_id) -> None:
    other = await client.post(
        "/api/v1/events", json={"title": "Other", "start_date": "2030-05-01T18:00:00Z"}
    )
    foreign = await _add(client, other.json()["id"], title="Elsewhere")
    a = await _add(client, event_id, title="A")
    b = await _add(client, event_id, title="B")
    c = await _add(client, event_id, title="C")

    response = await client.post(
        f"/api/v1/events/{event_id}/agenda/reorder",
        json={"item_ids": [c["id"], foreign["id"], a["id"], b["id"]]},
    )
    assert response.status_code == 200
    assert [i["title"] for i in response.json()] == ["C", "A", "B"]
    untouched = await client.get(f"/api/v1/agenda/{foreign['id']}")
    assert untouched.json()["sort_order"] == 1


async def test_reorder_needs_ids(client, event_id) -> None:
    response = await client.post(
        f"/api/v1/events/{event_id}/agenda/reorder", json={"item_ids": []}
    )
    assert response.status_code == 422


async def test_duplicate_item(client, event_id) -> None:
    item = await _add(client, event_id, is_visible=False)

    response = await client.post(f"/api/v1/agenda/{item['id']}/duplicate")
    assert response.status_code == 201
    copy = response.json()
    assert copy["title"] == "Keynote (Copy)"
    assert copy["start_time"].startswith("2030-06-15T09:30:00")
    assert copy["end_time"].startswith("2030-06-15T10:30:00")
    assert copy["is_visible"] is True
    assert copy["sort_order"] == 2


async def test_delete_item(client, event_id) -> None:
    item = await _add(client, event_id)

    response = await client.delete(f"/api/v1/agenda/{item['id']}")
    assert response.status_code == 204
    assert (await client.get(f"/api/v1/agenda/{item['id']}")).status_code == 404
    assert (await client.delete(f"/api/v1/agenda/{item['id']}")).status_code == 404
