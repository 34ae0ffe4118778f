"""FeaturedEventService: caching, counters, validation and card rendering."""

from dataclasses import asdict
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.services import FeaturedEventService
from app.application.services.featured_event_service import rotation_settings, to_card
from app.core.constants import DEFAULT_DISPLAY_SETTINGS, DISABLED_ROTATION_SETTINGS
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.persistence.models import Event, FeaturedEvent
from app.shared.utils.datetime import utc_now


def _featured(**overrides) -> FeaturedEvent:
    values = {
        "id": "fe-1",
        "created_by_id": "admin-1",
        "title": "Summer Summit",
        "priority": 5,
        "is_active": True,
        "display_type": "banner",
        "display_settings": {"autoRotate": False},
        "view_count": 0,
        "click_count": 0,
    }
    values.update(overrides)
    return FeaturedEvent(**values)


def _cache(hit=None) -> MagicMock:
    cache = MagicMock()
    cache.is_available = MagicMock(return_value=True)
    cache.get = AsyncMock(return_value=hit)
    cache.set = AsyncMock(return_value=True)
    cache.delete_pattern = AsyncMock(return_value=1)
    return cache


def test_to_card_uses_related_event_link() -> None:
    fe = _featured(related_event_id="ev-1", view_count=200, click_count=5)
    fe.related_event = Event(id="ev-1", slug="summer-summit")
    card = to_card(fe)
    assert card.link_url == "/event/summer-summit"
    assert card.link_text == "View Event"
    assert card.click_through_rate == 2.5


def test_to_card_prefers_custom_link_and_renders_iso_dates() -> None:
    now = utc_now()
    fe = _featured(link_url="https://tickets.example.com", start_date=now)
    card = to_card(fe)
    assert card.link_url == "https://tickets.example.com"
    assert card.link_text == "Learn More"
    assert card.start_date == now.isoformat()
    assert card.click_through_rate == 0.0


def test_rotation_settings_disabled_when_empty() -> None:
    assert rotation_settings([]) == DISABLED_ROTATION_SETTINGS


def test_rotation_settings_overlay_first_item() -> None:
    settings = rotation_settings([to_card(_featured(display_settings={"rotationInterval": 9000}))])
    assert settings == {**DEFAULT_DISPLAY_SETTINGS, "rotationInterval": 9000}


async def test_get_active_served_from_cache() -> None:
    repo = AsyncMock()
    cached = [asdict(to_card(_featured()))]
    svc = FeaturedEventService(repo, cache=_cache(hit=cached))
    cards = await svc.get_active()
    assert [c.id for c in cards] == ["fe-1"]
    repo.get_currently_active.assert_not_awaited()


async def test_get_active_miss_loads_and_stores() -> None:
    repo = AsyncMock()
    repo.get_currently_active = AsyncMock(return_value=[_featured()])
    cache = _cache()
    svc = FeaturedEventService(repo, cache=cache, cache_ttl=120)
    cards = await svc.get_active("banner")
    assert cards[0].title == "Summer Summit"
    key, stored = cache.set.await_args.args
    assert key == "featured_events:active:banner"
    assert stored[0]["id"] == "fe-1"
    assert cache.set.await_args.kwargs == {"ttl": 120}


async def test_get_active_without_cache_hits_repo() -> None:
    repo = AsyncMock()
    repo.get_currently_active = AsyncMock(return_value=[])
    svc = FeaturedEventService(repo)
    assert await svc.get_active() == []
    assert await svc.get_active() == []
    assert repo.get_currently_active.await_count == 2


async def test_get_active_rejects_unknown_display_type() -> None:
    with pytest.raises(ValidationException):
        await FeaturedEventService(AsyncMock()).get_active("hero")


async def test_record_view_counts_active_items() -> None:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=_featured())
    assert await FeaturedEventService(repo).record_view("fe-1") is True
    repo.increment_views.assert_awaited_once_with("fe-1")


async def test_record_click_ignores_items_outside_window() -> None:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(
        return_value=_featured(end_date=utc_now() - timedelta(days=1))
    )
    assert await FeaturedEventService(repo).record_click("fe-1") is False
    repo.increment_clicks.assert_not_awaited()


async def test_record_view_unknown_item() -> None:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=None)
    assert await FeaturedEventService(repo).record_view("missing") is False


async def test_record_view_errors_are_logged_not_raised(caplog) -> None:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=_featured())
    repo.increment_views = AsyncMock(side_effect=RuntimeError("db down"))
    assert await FeaturedEventService(repo).record_view("fe-1") is False
    assert "Failed to record view" in caplog.text


async def test_create_applies_default_display_settings_and_clears_cache() -> None:
    repo = AsyncMock()
    repo.create_featured = AsyncMock(
        side_effect=lambda created_by_id, **fields: _featured(created_by_id=created_by_id, **fields)
    )
    cache = _cache()
    svc = FeaturedEventService(repo, cache=cache)
    created = await svc.create(
        "admin-1", {"title": "Winter Gala", "display_settings": None, "unknown": "x"}
    )
    assert created.display_settings == DEFAULT_DISPLAY_SETTINGS
    assert "unknown" not in repo.create_featured.await_args.kwargs
    cache.delete_pattern.assert_awaited_once_with("featured_events:*")


async def test_create_rejects_window_ending_before_start() -> None:
    now = utc_now()
    svc = FeaturedEventService(AsyncMock())
    with pytest.raises(ValidationException):
        await svc.create(
            "admin-1",
            {"title": "X", "start_date": now, "end_date": now - timedelta(hours=1)},
        )


async def test_create_rejects_unknown_related_event() -> None:
    event_repo = AsyncMock()
    event_repo.get_by_id = AsyncMock(return_value=None)
    svc = FeaturedEventService(AsyncMock(), event_repo=event_repo)
    with pytest.raises(ResourceNotFoundException):
        await svc.create("admin-1", {"title": "X", "related_event_id": "nope"})


async def test_update_changes_only_given_fields() -> None:
    fe = _featured()
    repo = AsyncMock()
    repo.get_or_raise = AsyncMock(return_value=fe)
    repo.save = AsyncMock(side_effect=lambda obj: obj)
    updated = await FeaturedEventService(repo).update("fe-1", {"priority": 9})
    assert updated.priority == 9
    assert updated.title == "Summer Summit"


async def test_cleanup_clears_cache_only_when_something_changed() -> None:
    repo = AsyncMock()
    repo.deactivate_expired = AsyncMock(return_value=0)
    cache = _cache()
    svc = FeaturedEventService(repo, cache=cache)
    assert await svc.cleanup_expired() == 0
    cache.delete_pattern.assert_not_awaited()

    repo.deactivate_expired = AsyncMock(return_value=2)
    assert await svc.cleanup_expired() == 2
    cache.delete_pattern.assert_awaited_once()
