"""Event ORM model and the event ↔ administrator association table.

Recurring series are a forest: instances point at their parent through
parent_event_id, which is set to NULL when the parent is deleted.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.administrator import Administrator

event_administrators = Table(
    "event_administrators",
    Base.metadata,
    Column(
        "event_id",
        String,
        ForeignKey("event.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
    Column(
        "administrator_id",
        String,
        ForeignKey("administrators.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Event(CuidMixin, TimestampMixin, Base):
    """Event entity. Table: event. Unique slug; optional parent for recurring instances."""

    __tablename__ = "event"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    max_attendees: Mapped[int | None] = mapped_column(Integer, nullable=True)
    banner_image: Mapped[str | None] = mapped_column(String(255), nullable=True)

    parent_event_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("event.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurrence_pattern: Mapped[str | None] = mapped_column(String(50), nullable=True)
    recurrence_interval: Mapped[int | None] = mapped_column(Integer, nullable=True)
    recurrence_end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    recurrence_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    administrators: Mapped[list[Administrator]] = relationship(
        secondary=event_administrators,
        back_populates="events",
        lazy="selectin",
    )

    def __str__(self) -> str:
        return self.title or ""
