"""Administrator accounts: roles on creation and unique e-mail."""

import pytest

from app.domain.exceptions import DuplicateEmailException
from app.infrastructure.persistence.models import Administrator
from app.infrastructure.persistence.repositories import AdministratorRepository


async def test_roles_follow_super_admin_flag(db_session) -> None:
    repo = AdministratorRepository(db_session)
    admin = await repo.create_administrator(name="A", email="a@example.com", password="x")
    root = await repo.create_administrator(
        name="R", email="root@example.com", password="x", is_super_admin=True
    )

    assert admin.roles == ["ROLE_ADMIN"]
    assert root.roles == ["ROLE_ADMIN", "ROLE_SUPER_ADMIN"]
    assert (await repo.get_by_email("root@example.com")).id == root.id


async def test_duplicate_email_rejected(db_session) -> None:
    repo = AdministratorRepository(db_session)
    await repo.create_administrator(name="A", email="a@example.com", password="x")

    with pytest.raises(DuplicateEmailException):
        await repo.create_administrator(name="B", email="a@example.com", password="y")


def test_events_collection_is_never_lazy_loaded() -> None:
    assert Administrator.events.property.lazy == "raise"
