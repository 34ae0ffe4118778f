"""Presenter directory: CRUD and lookup for the agenda editor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.application.interfaces.repositories import IPresenterRepository
from app.domain.exceptions import ResourceInUseException

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import Presenter

logger = logging.getLogger(__name__)

# Shorter terms return nothing from quick_search.
MIN_SEARCH_TERM_LENGTH = 2

_EDITABLE_FIELDS = frozenset(
    {"name", "email", "title", "company", "bio", "website", "linkedin", "twitter", "photo"}
)


def display_name(presenter: Presenter) -> str:
    """Name followed by "<title> at <company>" (or whichever of the two is set)."""
    parts = [presenter.name] if presenter.name else []
    if presenter.title and presenter.company:
        parts.append(f"{presenter.title} at {presenter.company}")
    elif presenter.title or presenter.company:
        parts.append(presenter.title or presenter.company)
    return " - ".join(parts)


class PresenterService:
    def __init__(self, presenter_repo: IPresenterRepository) -> None:
        self.presenter_repo = presenter_repo

    async def list_presenters(
        self, search: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[Presenter]:
        return await self.presenter_repo.search(search, skip=skip, limit=limit)

    async def quick_search(self, term: str, limit: int = 20) -> list[Presenter]:
        """Autocomplete lookup; terms under two characters match nothing."""
        term = term.strip()
        if len(term) < MIN_SEARCH_TERM_LENGTH:
            return []
        return await self.presenter_repo.search(term, limit=limit)

    async def get(self, presenter_id: str) -> Presenter:
        return await self.presenter_repo.get_or_raise(presenter_id)

    async def create(self, values: dict[str, Any]) -> Presenter:
        fields = {k: v for k, v in values.items() if k in _EDITABLE_FIELDS}
        presenter = await self.presenter_repo.create_presenter(**fields)
        logger.info("Created presenter %s (%s)", presenter.id, presenter.name)
        return presenter

    async def update(self, presenter_id: str, values: dict[str, Any]) -> Presenter:
        presenter = await self.presenter_repo.get_or_raise(presenter_id)
        for key, value in values.items():
            if key in _EDITABLE_FIELDS:
                setattr(presenter, key, value)
        return await self.presenter_repo.save(presenter)

    async def delete(self, presenter_id: str) -> None:
        """Delete a presenter who is not scheduled anywhere.

        Raises:
            ResourceNotFoundException: unknown presenter.
            ResourceInUseException: still assigned to an event or an agenda item.
        """
        presenter = await self.presenter_repo.get_or_raise(presenter_id)
        assigned = await self.presenter_repo.count_event_assignments(presenter_id)
        if assigned:
            raise ResourceInUseException(
                "presenter", presenter_id, f"assigned to {assigned} event(s)"
            )
        slots = await self.presenter_repo.count_agenda_items(presenter_id)
        if slots:
            raise ResourceInUseException(
                "presenter", presenter_id, f"referenced by {slots} agenda item(s)"
            )
        await self.presenter_repo.delete(presenter)
        logger.info("Deleted presenter %s", presenter_id)
