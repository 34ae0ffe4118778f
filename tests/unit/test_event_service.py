"""EventService unit tests with a mocked event repository."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.dtos import SeriesResult
from app.application.services import EventService, RecurrenceService
from app.domain.exceptions import (
    DuplicateSlugException,
    RecurrenceConfigurationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.persistence.models import Event

START = datetime(2030, 3, 1, 18, 0, tzinfo=UTC)


def _event(**overrides) -> Event:
    values = {
        "id": "ev-1",
        "title": "Team Offsite",
        "slug": "team-offsite",
        "start_date": START,
        "is_recurring": False,
    }
    values.update(overrides)
    return Event(**values)


@pytest.fixture
def event_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.slug_exists = AsyncMock(return_value=False)
    repo.create_event = AsyncMock(side_effect=lambda **fields: _event(**fields))
    repo.save = AsyncMock(side_effect=lambda obj: obj)
    return repo


async def test_create_generates_slug_from_title(event_repo) -> None:
    svc = EventService(event_repo)
    created = await svc.create({"title": "Team Offsite", "start_date": START, "slug": None})
    assert created.slug == "team-offsite"
    assert event_repo.create_event.await_args.kwargs["slug"] == "team-offsite"


async def test_create_suffixes_taken_slug(event_repo) -> None:
    event_repo.slug_exists = AsyncMock(side_effect=[True, True, False])
    svc = EventService(event_repo)
    created = await svc.create({"title": "Team Offsite", "start_date": START})
    assert created.slug == "team-offsite-3"


async def test_create_keeps_explicit_slug(event_repo) -> None:
    svc = EventService(event_repo)
    created = await svc.create({"title": "Team Offsite", "start_date": START, "slug": "offsite"})
    assert created.slug == "offsite"
    event_repo.slug_exists.assert_not_awaited()


async def test_create_recurring_requires_usable_rule(event_repo) -> None:
    svc = EventService(event_repo)
    with pytest.raises(RecurrenceConfigurationException):
        await svc.create(
            {
                "title": "Weekly Standup",
                "start_date": START,
                "is_recurring": True,
                "recurrence_pattern": "weekly",
            }
        )


async def test_get_by_slug_not_found(event_repo) -> None:
    event_repo.get_by_slug = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await EventService(event_repo).get_by_slug("missing")


async def test_delete_goes_through_delete_event(event_repo) -> None:
    event = _event()
    event_repo.get_or_raise = AsyncMock(return_value=event)
    await EventService(event_repo).delete("ev-1")
    event_repo.delete_event.assert_awaited_once_with(event)


async def test_regenerate_series_rejects_non_recurring(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event())
    with pytest.raises(RecurrenceConfigurationException):
        await EventService(event_repo).regenerate_series("ev-1")
    event_repo.replace_series.assert_not_awaited()


async def test_regenerate_series_rejects_instances(event_repo) -> None:
    instance = _event(
        is_recurring=True,
        recurrence_pattern="daily",
        recurrence_count=2,
        parent_event_id="parent-1",
    )
    event_repo.get_or_raise = AsyncMock(return_value=instance)
    with pytest.raises(RecurrenceConfigurationException):
        await EventService(event_repo).regenerate_series("ev-1")


async def test_regenerate_series_replaces_instances(event_repo) -> None:
    parent = _event(is_recurring=True, recurrence_pattern="weekly", recurrence_count=3)
    event_repo.get_or_raise = AsyncMock(return_value=parent)
    event_repo.replace_series = AsyncMock(
        return_value=([_event(id="i1"), _event(id="i2"), _event(id="i3")], 2)
    )
    svc = EventService(event_repo, recurrence=RecurrenceService(max_instances=10))

    result = await svc.regenerate_series("ev-1")

    assert result == SeriesResult(parent_id="ev-1", instance_ids=["i1", "i2", "i3"], removed_count=2)
    passed_parent, occurrences = event_repo.replace_series.await_args.args
    assert passed_parent is parent
    assert [o.sequence for o in occurrences] == [1, 2, 3]


async def test_get_agenda_lists_visible_items(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event())
    agenda_repo = AsyncMock()
    agenda_repo.list_for_event = AsyncMock(return_value=["keynote"])
    svc = EventService(event_repo, agenda_repo=agenda_repo)

    assert await svc.get_agenda("ev-1") == ["keynote"]
    agenda_repo.list_for_event.assert_awaited_once_with("ev-1", visible_only=True)


async def test_get_agenda_unknown_event(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(side_effect=ResourceNotFoundException("event", "x"))
    svc = EventService(event_repo, agenda_repo=AsyncMock())

    with pytest.raises(ResourceNotFoundException):
        await svc.get_agenda("x")


async def test_get_agenda_can_include_hidden_items(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event())
    agenda_repo = AsyncMock()
    svc = EventService(event_repo, agenda_repo=agenda_repo)

    await svc.get_agenda("ev-1", include_hidden=True)
    agenda_repo.list_for_event.assert_awaited_once_with("ev-1", visible_only=False)


async def test_update_applies_only_given_fields(event_repo) -> None:
    event = _event(location="Hall A", description="Old")
    event_repo.get_or_raise = AsyncMock(return_value=event)

    updated = await EventService(event_repo).update("ev-1", {"location": "Hall B"})

    assert updated.location == "Hall B"
    assert updated.description == "Old"
    event_repo.save.assert_awaited_once_with(event)


async def test_update_rejects_taken_slug(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event())
    event_repo.slug_exists = AsyncMock(return_value=True)

    with pytest.raises(DuplicateSlugException):
        await EventService(event_repo).update("ev-1", {"slug": "taken"})
    event_repo.save.assert_not_awaited()


async def test_update_keeps_own_slug_without_lookup(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event())
    await EventService(event_repo).update("ev-1", {"slug": "team-offsite"})
    event_repo.slug_exists.assert_not_awaited()


async def test_update_checks_end_against_stored_start(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event())

    with pytest.raises(ValidationException) as exc:
        await EventService(event_repo).update("ev-1", {"end_date": START - timedelta(hours=1)})
    assert exc.value.details == {"field": "end_date"}


async def test_update_accepts_naive_stored_dates(event_repo) -> None:
    # SQLite hands back naive datetimes.
    event = _event(start_date=START.replace(tzinfo=None), end_date=None)
    event_repo.get_or_raise = AsyncMock(return_value=event)

    updated = await EventService(event_repo).update("ev-1", {"end_date": START + timedelta(hours=2)})
    assert updated.end_date == START + timedelta(hours=2)


async def test_update_making_event_recurring_needs_rule(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event())

    with pytest.raises(RecurrenceConfigurationException):
        await EventService(event_repo).update(
            "ev-1", {"is_recurring": True, "recurrence_pattern": "weekly"}
        )
    event_repo.save.assert_not_awaited()


async def test_update_instance_cannot_become_recurring(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event(parent_event_id="parent-1"))

    with pytest.raises(RecurrenceConfigurationException):
        await EventService(event_repo).update(
            "ev-1", {"is_recurring": True, "recurrence_pattern": "daily", "recurrence_count": 2}
        )


async def test_toggle_status_flips_active_flag(event_repo) -> None:
    event = _event(is_active=True)
    event_repo.get_or_raise = AsyncMock(return_value=event)
    svc = EventService(event_repo)

    assert (await svc.toggle_status("ev-1")).is_active is False
    assert (await svc.toggle_status("ev-1")).is_active is True


async def test_clone_is_inactive_copy_a_month_out(event_repo) -> None:
    source = _event(
        title="Team Offsite",
        end_date=START + timedelta(hours=3),
        location="Lakeside Lodge",
        max_attendees=40,
        is_recurring=True,
        recurrence_pattern="weekly",
        recurrence_count=4,
    )
    event_repo.get_or_raise = AsyncMock(return_value=source)
    event_repo.slug_exists = AsyncMock(side_effect=[True, False])
    now = datetime(2030, 1, 31, 12, 0, 30, 500, tzinfo=UTC)

    clone = await EventService(event_repo).clone("ev-1", now=now)

    assert clone.title == "Team Offsite (Copy)"
    assert clone.slug == "team-offsite-copy-2"
    assert clone.is_active is False
    assert clone.start_date == datetime(2030, 2, 28, 12, 0, 30, tzinfo=UTC)
    assert clone.end_date - clone.start_date == timedelta(hours=3)
    assert clone.location == "Lakeside Lodge"
    assert clone.max_attendees == 40
    assert "recurrence_pattern" not in event_repo.create_event.await_args.kwargs


async def test_clone_title_fits_column(event_repo) -> None:
    event_repo.get_or_raise = AsyncMock(return_value=_event(title="x" * 255))

    clone = await EventService(event_repo).clone("ev-1", now=START)

    assert len(clone.title) == 255
    assert clone.title.endswith(" (Copy)")
