"""Featured event banners: cached public lists, counters, admin saves and cleanup."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from app.application.dtos.featured_event import (
    FeaturedEventCard,
    FeaturedEventStatistics,
)
from app.application.interfaces.repositories import (
    IEventRepository,
    IFeaturedEventRepository,
)
from app.application.interfaces.services import ICacheService
from app.core.constants import DEFAULT_DISPLAY_SETTINGS, DISABLED_ROTATION_SETTINGS
from app.domain.enums import DisplayType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.cache.keys import (
    featured_active_key,
    featured_pattern,
    featured_rotation_key,
)
from app.shared.utils.datetime import ensure_utc

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import FeaturedEvent

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = (
    "related_event_id",
    "title",
    "description",
    "image_url",
    "link_url",
    "link_text",
    "priority",
    "is_active",
    "start_date",
    "end_date",
    "display_type",
    "display_settings",
)


def to_card(fe: FeaturedEvent) -> FeaturedEventCard:
    """Snapshot an ORM featured event into a cacheable card."""
    start = ensure_utc(fe.start_date)
    end = ensure_utc(fe.end_date)
    return FeaturedEventCard(
        id=fe.id,
        title=fe.title,
        description=fe.description,
        image_url=fe.image_url,
        link_url=fe.effective_link_url,
        link_text=fe.effective_link_text,
        priority=fe.priority,
        display_type=fe.display_type,
        display_settings=fe.display_settings,
        start_date=start.isoformat() if start else None,
        end_date=end.isoformat() if end else None,
        view_count=fe.view_count,
        click_count=fe.click_count,
        click_through_rate=fe.click_through_rate,
        related_event_id=fe.related_event_id,
    )


def rotation_settings(cards: list[FeaturedEventCard]) -> dict[str, Any]:
    """Carousel settings: disabled when empty, else defaults overlaid with the first item's."""
    if not cards:
        return dict(DISABLED_ROTATION_SETTINGS)
    settings = dict(DEFAULT_DISPLAY_SETTINGS)
    first = cards[0].display_settings
    if isinstance(first, dict):
        settings.update(first)
    return settings


class FeaturedEventService:
    """Featured events for public pages (cached) and for administrators.

    Public lists are cached for cache_ttl seconds; every admin write and
    cleanup clears all featured-event keys.
    """

    def __init__(
        self,
        featured_repo: IFeaturedEventRepository,
        event_repo: IEventRepository | None = None,
        cache: ICacheService | None = None,
        cache_ttl: int = 300,
        rotation_limit: int = 5,
    ) -> None:
        self.featured_repo = featured_repo
        self.event_repo = event_repo
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.rotation_limit = rotation_limit

    async def _cached_cards(
        self, key: str, load: Any
    ) -> list[FeaturedEventCard]:
        if self.cache is not None and self.cache.is_available():
            hit = await self.cache.get(key)
            if hit is not None:
                return [FeaturedEventCard(**item) for item in hit]
        cards = [to_card(fe) for fe in await load()]
        if self.cache is not None and self.cache.is_available():
            await self.cache.set(key, [asdict(c) for c in cards], ttl=self.cache_ttl)
        return cards

    async def get_active(self, display_type: str | None = None) -> list[FeaturedEventCard]:
        """Currently active items (optionally of one display type), highest priority first."""
        if display_type is not None and display_type not in DisplayType.values():
            raise ValidationException(
                f"display_type must be one of {', '.join(DisplayType.values())}",
                field="display_type",
            )
        return await self._cached_cards(
            featured_active_key(display_type),
            lambda: self.featured_repo.get_currently_active(display_type=display_type),
        )

    async def get_for_rotation(self, limit: int | None = None) -> list[FeaturedEventCard]:
        """Banner items for the homepage carousel."""
        limit = limit or self.rotation_limit
        cards = await self._cached_cards(
            featured_rotation_key(limit),
            lambda: self.featured_repo.get_for_rotation(limit),
        )
        logger.info("Fetched featured events for rotation: count=%s limit=%s", len(cards), limit)
        return cards

    async def record_view(self, featured_id: str) -> bool:
        """Count a view when the item is currently active. Errors are logged, not raised."""
        try:
            fe = await self.featured_repo.get_by_id(featured_id)
            if fe is None or not fe.is_currently_active():
                return False
            await self.featured_repo.increment_views(fe.id)
            logger.info("Recorded view for featured event %s", featured_id)
            return True
        except Exception:
            logger.exception("Failed to record view for featured event %s", featured_id)
            return False

    async def record_click(self, featured_id: str) -> bool:
        """Count a click when the item is currently active. Errors are logged, not raised."""
        try:
            fe = await self.featured_repo.get_by_id(featured_id)
            if fe is None or not fe.is_currently_active():
                return False
            await self.featured_repo.increment_clicks(fe.id)
            logger.info("Recorded click for featured event %s", featured_id)
            return True
        except Exception:
            logger.exception("Failed to record click for featured event %s", featured_id)
            return False

    async def get(self, featured_id: str) -> FeaturedEvent:
        return await self.featured_repo.get_or_raise(featured_id)

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[FeaturedEvent]:
        return await self.featured_repo.list_all(skip=skip, limit=limit)

    async def _validate(self, values: dict[str, Any]) -> None:
        display_type = values.get("display_type")
        if display_type is not None and display_type not in DisplayType.values():
            raise ValidationException(
                f"display_type must be one of {', '.join(DisplayType.values())}",
                field="display_type",
            )
        start, end = ensure_utc(values.get("start_date")), ensure_utc(values.get("end_date"))
        if start is not None and end is not None and end < start:
            raise ValidationException("end_date must not be before start_date", field="end_date")
        related_id = values.get("related_event_id")
        if related_id and self.event_repo is not None:
            if await self.event_repo.get_by_id(related_id) is None:
                raise ResourceNotFoundException("event", related_id)

    async def create(self, created_by_id: str, values: dict[str, Any]) -> FeaturedEvent:
        """Create an item; display_settings default to the carousel defaults."""
        fields = {k: v for k, v in values.items() if k in _EDITABLE_FIELDS}
        await self._validate(fields)
        if fields.get("display_settings") is None:
            fields["display_settings"] = dict(DEFAULT_DISPLAY_SETTINGS)
        fe = await self.featured_repo.create_featured(created_by_id=created_by_id, **fields)
        await self.clear_cache()
        logger.info("Saved featured event %s (%s), active=%s", fe.id, fe.title, fe.is_active)
        return fe

    async def update(self, featured_id: str, values: dict[str, Any]) -> FeaturedEvent:
        """Apply the given fields (others untouched) and clear the cache."""
        fe = await self.featured_repo.get_or_raise(featured_id)
        changes = {k: v for k, v in values.items() if k in _EDITABLE_FIELDS}
        merged = {
            "display_type": changes.get("display_type", fe.display_type),
            "start_date": changes.get("start_date", fe.start_date),
            "end_date": changes.get("end_date", fe.end_date),
            "related_event_id": changes.get("related_event_id"),
        }
        await self._validate(merged)
        for key, value in changes.items():
            setattr(fe, key, value)
        fe = await self.featured_repo.save(fe)
        await self.clear_cache()
        logger.info("Saved featured event %s (%s), active=%s", fe.id, fe.title, fe.is_active)
        return fe

    async def delete(self, featured_id: str) -> None:
        fe = await self.featured_repo.get_or_raise(featured_id)
        await self.featured_repo.delete(fe)
        await self.clear_cache()
        logger.info("Deleted featured event %s", featured_id)

    async def cleanup_expired(self) -> int:
        """Deactivate items whose display window has ended; returns how many."""
        count = await self.featured_repo.deactivate_expired()
        if count > 0:
            await self.clear_cache()
            logger.info("Deactivated %s expired featured events", count)
        return count

    async def get_statistics(self) -> FeaturedEventStatistics:
        return await self.featured_repo.get_statistics()

    async def get_top_performing(self, limit: int = 10) -> list[FeaturedEvent]:
        return await self.featured_repo.get_top_performing(limit)

    async def get_expiring_soon(self, days: int = 7) -> list[FeaturedEvent]:
        return await self.featured_repo.get_expiring_soon(days)

    async def clear_cache(self) -> None:
        if self.cache is None:
            return
        await self.cache.delete_pattern(featured_pattern())
