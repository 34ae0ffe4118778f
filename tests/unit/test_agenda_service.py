"""AgendaService unit tests with mocked repositories."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.services import AgendaService
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.persistence.models import AgendaItem, Event

OPENING = datetime(2030, 6, 15, 9, 0, tzinfo=UTC)


def _item(**overrides) -> AgendaItem:
    values = {
        "id": "item-1",
        "event_id": "ev-1",
        "title": "Opening Keynote",
        "start_time": OPENING,
        "end_time": OPENING + timedelta(hours=1),
        "item_type": "keynote",
        "sort_order": 1,
        "is_visible": True,
    }
    values.update(overrides)
    return AgendaItem(**values)


@pytest.fixture
def repos():
    agenda_repo = AsyncMock()
    agenda_repo.next_sort_order = AsyncMock(return_value=4)
    agenda_repo.create_agenda_item = AsyncMock(
        side_effect=lambda **fields: AgendaItem(id="new", **fields)
    )
    agenda_repo.save = AsyncMock(side_effect=lambda obj: obj)
    event_repo = AsyncMock()
    event_repo.get_or_raise = AsyncMock(return_value=Event(id="ev-1", title="Conf"))
    presenter_repo = AsyncMock()
    return agenda_repo, event_repo, presenter_repo


@pytest.fixture
def svc(repos) -> AgendaService:
    return AgendaService(*repos)


async def test_create_appends_visible_item(svc, repos) -> None:
    agenda_repo, _, _ = repos
    item = await svc.create(
        "ev-1", {"title": "Lunch", "start_time": OPENING, "item_type": "break"}
    )
    assert item.sort_order == 4
    assert item.is_visible is True
    agenda_repo.next_sort_order.assert_awaited_once_with("ev-1")


async def test_create_checks_presenter_exists(svc, repos) -> None:
    _, _, presenter_repo = repos
    presenter_repo.get_or_raise = AsyncMock(
        side_effect=ResourceNotFoundException("presenter", "p-x")
    )
    with pytest.raises(ResourceNotFoundException):
        await svc.create("ev-1", {"title": "Talk", "start_time": OPENING, "presenter_id": "p-x"})


async def test_create_rejects_end_before_start(svc) -> None:
    with pytest.raises(ValidationException) as exc:
        await svc.create(
            "ev-1",
            {"title": "Talk", "start_time": OPENING, "end_time": OPENING - timedelta(minutes=5)},
        )
    assert exc.value.details == {"field": "end_time"}


async def test_update_checks_times_against_stored_values(svc, repos) -> None:
    agenda_repo, _, _ = repos
    agenda_repo.get_or_raise = AsyncMock(return_value=_item())

    with pytest.raises(ValidationException):
        await svc.update("item-1", {"start_time": OPENING + timedelta(hours=2)})

    updated = await svc.update("item-1", {"title": "Welcome Keynote"})
    assert updated.title == "Welcome Keynote"
    assert updated.start_time == OPENING


async def test_toggle_visibility(svc, repos) -> None:
    agenda_repo, _, _ = repos
    agenda_repo.get_or_raise = AsyncMock(return_value=_item(is_visible=True))
    assert (await svc.toggle_visibility("item-1")).is_visible is False


async def test_reorder_ignores_ids_of_other_events(svc, repos) -> None:
    agenda_repo, _, _ = repos
    a, b = _item(id="a", sort_order=1), _item(id="b", sort_order=2)
    agenda_repo.list_for_event = AsyncMock(return_value=[a, b])

    await svc.reorder("ev-1", ["b", "elsewhere", "a"])

    assert b.sort_order == 0
    assert a.sort_order == 2
    assert agenda_repo.save.await_count == 2


async def test_duplicate_shifts_by_half_hour(svc, repos) -> None:
    agenda_repo, _, _ = repos
    agenda_repo.get_or_raise = AsyncMock(return_value=_item(is_visible=False, speaker="Ada"))

    copy = await svc.duplicate("item-1")

    assert copy.title == "Opening Keynote (Copy)"
    assert copy.start_time == OPENING + timedelta(minutes=30)
    assert copy.end_time == OPENING + timedelta(minutes=90)
    assert copy.is_visible is True
    assert copy.speaker == "Ada"
    assert copy.sort_order == 4


async def test_duplicate_without_end_time(svc, repos) -> None:
    agenda_repo, _, _ = repos
    agenda_repo.get_or_raise = AsyncMock(return_value=_item(end_time=None))
    assert (await svc.duplicate("item-1")).end_time is None
