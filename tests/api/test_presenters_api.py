"""Presenter API: directory CRUD, search and guarded deletion."""


async def _create(client, **fields) -> dict:
    response = await client.post("/api/v1/presenters", json=fields)
    assert response.status_code == 201
    return response.json()


async def test_create_get_update(client) -> None:
    grace = await _create(client, name="Grace Hopper", email="grace@navy.example")

    fetched = await client.get(f"/api/v1/presenters/{grace['id']}")
    assert fetched.json()["email"] == "grace@navy.example"

    response = await client.put(
        f"/api/v1/presenters/{grace['id']}", json={"company": "US Navy", "title": None}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["company"] == "US Navy"
    assert body["name"] == "Grace Hopper"


async def test_create_rejects_bad_email(client) -> None:
    response = await client.post(
        "/api/v1/presenters", json={"name": "Grace", "email": "not-an-email"}
    )
    assert response.status_code == 422


async def test_update_rejects_null_name(client) -> None:
    grace = await _create(client, name="Grace Hopper")
    response = await client.put(f"/api/v1/presenters/{grace['id']}", json={"name": None})
    assert response.status_code == 422


async def test_list_with_search(client) -> None:
    await _create(client, name="Grace Hopper", company="US Navy")
    await _create(client, name="Ada Lovelace")

    everyone = await client.get("/api/v1/presenters")
    assert [p["name"] for p in everyone.json()] == ["Ada Lovelace", "Grace Hopper"]
    navy = await client.get("/api/v1/presenters", params={"search": "navy"})
    assert [p["name"] for p in navy.json()] == ["Grace Hopper"]


async def test_quick_search(client) -> None:
    await _create(client, name="Grace Hopper", title="Rear Admiral", company="US Navy")

    short = await client.get("/api/v1/presenters/search", params={"term": "g"})
    assert short.json() == []
    response = await client.get("/api/v1/presenters/search", params={"term": "gra"})
    assert response.status_code == 200
    [hit] = response.json()
    assert hit["full_name"] == "Grace Hopper - Rear Admiral at US Navy"


async def test_unknown_presenter(client) -> None:
    response = await client.get("/api/v1/presenters/missing")
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_delete_refused_while_on_agenda(client, event_id) -> None:
    grace = await _create(client, name="Grace Hopper")
    item = await client.post(
        f"/api/v1/events/{event_id}/agenda",
        json={
            "title": "Keynote",
            "start_time": "2030-06-15T09:00:00Z",
            "presenter_id": grace["id"],
        },
    )
    assert item.status_code == 201

    response = await client.delete(f"/api/v1/presenters/{grace['id']}")
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "RESOURCE_IN_USE"
    assert body["details"] == {"resource_type": "presenter", "resource_id": grace["id"]}

    await client.delete(f"/api/v1/agenda/{item.json()['id']}")
    assert (await client.delete(f"/api/v1/presenters/{grace['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/presenters/{grace['id']}")).status_code == 404
