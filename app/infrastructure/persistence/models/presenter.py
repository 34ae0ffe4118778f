"""Presenter and EventPresenter ORM models.

A presenter exists once; EventPresenter carries the per-event presentation
details (title, time slot, visibility, ordering).
"""

from datetime import time

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)


class Presenter(CuidMixin, TimestampMixin, Base):
    """Speaker profile. Table: presenter."""

    __tablename__ = "presenter"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    linkedin: Mapped[str | None] = mapped_column(String(255), nullable=True)
    twitter: Mapped[str | None] = mapped_column(String(255), nullable=True)
    photo: Mapped[str | None] = mapped_column(String(255), nullable=True)


class EventPresenter(CuidMixin, CreatedAtMixin, Base):
    """Presenter scheduled into an event. Table: event_presenter."""

    __tablename__ = "event_presenter"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id"), nullable=False, index=True
    )
    presenter_id: Mapped[str] = mapped_column(
        String, ForeignKey("presenter.id"), nullable=False, index=True
    )
    presentation_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    presentation_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    end_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
