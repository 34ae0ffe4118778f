"""Administrator ORM model (back-office accounts; manage events, receive messages)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import DEFAULT_ADMIN_ROLES
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.event import event_administrators
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.event import Event


class Administrator(CuidMixin, CreatedAtMixin, Base):
    """Administrator. Table: administrators. Unique email; password is a bcrypt hash."""

    __tablename__ = "administrators"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    roles: Mapped[list[Any]] = mapped_column(
        JSON, nullable=False, default=lambda: list(DEFAULT_ADMIN_ROLES)
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_super_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    events: Mapped[list[Event]] = relationship(
        secondary=event_administrators,
        back_populates="administrators",
        lazy="raise",
    )
