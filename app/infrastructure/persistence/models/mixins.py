"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, CreatedAtMixin, TimestampMixin.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CreatedAtMixin:
    """Mixin for created_at (set client-side so it is known right after flush)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            nullable=False,
        )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and a nullable updated_at touched on every update."""

    @declared_attr
    def updated_at(cls) -> Mapped[datetime | None]:
        return mapped_column(DateTime(timezone=True), onupdate=utc_now, nullable=True)
