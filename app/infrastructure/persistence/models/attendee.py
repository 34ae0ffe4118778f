"""Attendee ORM model (registered participant of a single event)."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DEFAULT_ATTENDEE_ROLES
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_verification_token


class Attendee(CuidMixin, Base):
    """Attendee. Table: attendees. Unique email; FK event without cascade."""

    __tablename__ = "attendees"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(255), nullable=True)
    organization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    roles: Mapped[list[Any]] = mapped_column(
        JSON, nullable=False, default=lambda: list(DEFAULT_ATTENDEE_ROLES)
    )
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_verification_token: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True
    )
    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_checked_in: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    checked_in_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    badge_data: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def generate_email_verification_token(self) -> str:
        """Replace the verification token and return it."""
        self.email_verification_token = generate_verification_token()
        return self.email_verification_token

    def __str__(self) -> str:
        return self.name or ""
