"""PresenterService: search rules, display name and guarded deletion."""

from unittest.mock import AsyncMock

import pytest

from app.application.services import PresenterService
from app.application.services.presenter_service import display_name
from app.domain.exceptions import ResourceInUseException
from app.infrastructure.persistence.models import Presenter


@pytest.fixture
def presenter_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_or_raise = AsyncMock(return_value=Presenter(id="p-1", name="Grace Hopper"))
    repo.count_event_assignments = AsyncMock(return_value=0)
    repo.count_agenda_items = AsyncMock(return_value=0)
    return repo


@pytest.mark.parametrize(
    ("title", "company", "expected"),
    [
        ("Rear Admiral", "US Navy", "Grace Hopper - Rear Admiral at US Navy"),
        ("Rear Admiral", None, "Grace Hopper - Rear Admiral"),
        (None, "US Navy", "Grace Hopper - US Navy"),
        (None, None, "Grace Hopper"),
    ],
)
def test_display_name(title, company, expected) -> None:
    presenter = Presenter(name="Grace Hopper", title=title, company=company)
    assert display_name(presenter) == expected


async def test_quick_search_needs_two_characters(presenter_repo) -> None:
    svc = PresenterService(presenter_repo)
    assert await svc.quick_search(" g ") == []
    presenter_repo.search.assert_not_awaited()

    await svc.quick_search("gr")
    presenter_repo.search.assert_awaited_once_with("gr", limit=20)


async def test_delete_refused_while_assigned_to_event(presenter_repo) -> None:
    presenter_repo.count_event_assignments = AsyncMock(return_value=2)

    with pytest.raises(ResourceInUseException) as exc:
        await PresenterService(presenter_repo).delete("p-1")
    assert "2 event" in exc.value.message
    presenter_repo.delete.assert_not_awaited()


async def test_delete_refused_while_on_agenda(presenter_repo) -> None:
    presenter_repo.count_agenda_items = AsyncMock(return_value=1)

    with pytest.raises(ResourceInUseException):
        await PresenterService(presenter_repo).delete("p-1")
    presenter_repo.delete.assert_not_awaited()


async def test_delete_unassigned_presenter(presenter_repo) -> None:
    await PresenterService(presenter_repo).delete("p-1")
    presenter_repo.delete.assert_awaited_once()


async def test_update_ignores_unknown_fields(presenter_repo) -> None:
    presenter_repo.save = AsyncMock(side_effect=lambda obj: obj)
    updated = await PresenterService(presenter_repo).update(
        "p-1", {"company": "US Navy", "id": "other"}
    )
    assert updated.company == "US Navy"
    assert updated.id == "p-1"
