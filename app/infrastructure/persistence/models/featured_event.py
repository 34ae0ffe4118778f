"""FeaturedEvent ORM model: promotional banner with display window and counters."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import DEFAULT_DISPLAY_SETTINGS
from app.domain.enums import DisplayType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.event import Event


class FeaturedEvent(CuidMixin, TimestampMixin, Base):
    """Featured event banner. Table: featured_events."""

    __tablename__ = "featured_events"

    related_event_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("event.id"), nullable=True, index=True
    )
    created_by_id: Mapped[str] = mapped_column(
        String, ForeignKey("administrators.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    link_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    link_text: Mapped[str | None] = mapped_column(String(100), nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    display_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DisplayType.BANNER.value
    )
    display_settings: Mapped[Any] = mapped_column(
        JSON, nullable=True, default=lambda: dict(DEFAULT_DISPLAY_SETTINGS)
    )
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    click_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    related_event: Mapped[Event | None] = relationship(lazy="joined")

    __table_args__ = (
        Index("ix_featured_events_active_priority", "is_active", "priority"),
    )

    def is_currently_active(self, now: datetime | None = None) -> bool:
        """True when flagged active and now falls inside the optional display window."""
        if not self.is_active:
            return False
        now = now or utc_now()
        start = ensure_utc(self.start_date)
        end = ensure_utc(self.end_date)
        if start is not None and now < start:
            return False
        if end is not None and now > end:
            return False
        return True

    @property
    def effective_link_url(self) -> str | None:
        """Custom link, else the related event's public page."""
        if self.link_url:
            return self.link_url
        if self.related_event is not None:
            return f"/event/{self.related_event.slug}"
        return None

    @property
    def effective_link_text(self) -> str:
        if self.link_text:
            return self.link_text
        if self.related_event_id is not None:
            return "View Event"
        return "Learn More"

    @property
    def click_through_rate(self) -> float:
        """Clicks per view as a percentage, rounded to 2 places."""
        if not self.view_count:
            return 0.0
        return round((self.click_count / self.view_count) * 100, 2)
