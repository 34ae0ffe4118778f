"""EventImport ORM model: one bulk CSV import job and its JSON payloads."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import ImportStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin
from app.shared.utils.datetime import format_timestamp, utc_now


class EventImport(CuidMixin, CreatedAtMixin, Base):
    """Import job. Table: event_imports.

    results is keyed by entity kind ({"events": [...], "attendees": [...]});
    errors is a list of {message, row, timestamp}; imported_data holds the
    parsed CSV (headers + records) awaiting processing.
    """

    __tablename__ = "event_imports"

    created_by_id: Mapped[str] = mapped_column(
        String, ForeignKey("administrators.id"), nullable=False, index=True
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ImportStatus.PENDING.value
    )
    import_type: Mapped[str] = mapped_column(String(20), nullable=False)
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    results: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True, default=dict
    )
    errors: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True, default=list)
    total_rows: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    successful_rows: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    failed_rows: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    imported_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    # JSON columns are reassigned (not mutated in place) so SQLAlchemy sees the change.
    def add_error(self, message: str, row: int | None = None) -> None:
        entry = {"message": message, "row": row, "timestamp": format_timestamp(utc_now())}
        self.errors = [*(self.errors or []), entry]

    def add_result(self, kind: str, message: str, data: dict[str, Any] | None = None) -> None:
        entry = {
            "message": message,
            "data": data or {},
            "timestamp": format_timestamp(utc_now()),
        }
        results = dict(self.results or {})
        results[kind] = [*results.get(kind, []), entry]
        self.results = results

    @property
    def success_rate(self) -> float:
        """Percentage of successful rows (0.0 when nothing was imported)."""
        if not self.total_rows:
            return 0.0
        return (self.successful_rows / self.total_rows) * 100

    @property
    def is_completed(self) -> bool:
        return self.status in (ImportStatus.COMPLETED.value, ImportStatus.FAILED.value)
