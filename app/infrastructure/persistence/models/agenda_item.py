"""AgendaItem ORM model (one slot in an event's programme)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import AgendaItemType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class AgendaItem(CuidMixin, TimestampMixin, Base):
    """Agenda item. Table: agenda_items. Optional presenter reference."""

    __tablename__ = "agenda_items"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id"), nullable=False, index=True
    )
    presenter_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("presenter.id"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    item_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=AgendaItemType.SESSION.value
    )
    speaker: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
