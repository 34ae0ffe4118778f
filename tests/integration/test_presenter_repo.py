"""Presenter and agenda repositories on SQLite."""

from datetime import UTC, datetime

from app.infrastructure.persistence.repositories import (
    AgendaItemRepository,
    PresenterRepository,
)

OPENING = datetime(2030, 6, 15, 9, 0, tzinfo=UTC)


async def test_search_matches_name_email_or_company(db_session) -> None:
    repo = PresenterRepository(db_session)
    await repo.create_presenter(name="Grace Hopper", company="US Navy")
    await repo.create_presenter(name="Ada Lovelace", email="ada@analytical.example")
    await repo.create_presenter(name="Alan Turing", company="Bletchley Park")

    assert [p.name for p in await repo.search()] == [
        "Ada Lovelace",
        "Alan Turing",
        "Grace Hopper",
    ]
    assert [p.name for p in await repo.search("navy")] == ["Grace Hopper"]
    assert [p.name for p in await repo.search("analytical")] == ["Ada Lovelace"]
    assert [p.name for p in await repo.search("a", limit=1)] == ["Ada Lovelace"]


async def test_assignment_counts(event_id, db_session) -> None:
    presenters = PresenterRepository(db_session)
    agenda = AgendaItemRepository(db_session)
    grace = await presenters.create_presenter(name="Grace Hopper")

    assert await presenters.count_event_assignments(grace.id) == 0
    await presenters.add_to_event(event_id=event_id, presenter_id=grace.id)
    await agenda.create_agenda_item(
        event_id=event_id, presenter_id=grace.id, title="Keynote", start_time=OPENING
    )

    assert await presenters.count_event_assignments(grace.id) == 1
    assert await presenters.count_agenda_items(grace.id) == 1


async def test_next_sort_order(event_id, db_session) -> None:
    repo = AgendaItemRepository(db_session)
    assert await repo.next_sort_order(event_id) == 1

    await repo.create_agenda_item(
        event_id=event_id, title="Welcome", start_time=OPENING, sort_order=5
    )
    assert await repo.next_sort_order(event_id) == 6
