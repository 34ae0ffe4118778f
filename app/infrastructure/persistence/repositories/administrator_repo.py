"""Administrator repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import DEFAULT_ADMIN_ROLES, SUPER_ADMIN_ROLE
from app.domain.exceptions import DuplicateEmailException
from app.infrastructure.persistence.models.administrator import Administrator
from app.infrastructure.persistence.repositories.base import BaseRepository


class AdministratorRepository(BaseRepository[Administrator]):
    resource_name = "administrator"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Administrator)

    async def get_by_email(self, email: str) -> Administrator | None:
        result = await self.db.execute(
            select(Administrator).where(Administrator.email == email)
        )
        return result.scalar_one_or_none()

    async def create_administrator(
        self,
        *,
        name: str,
        email: str,
        password: str,
        is_super_admin: bool = False,
        department: str | None = None,
    ) -> Administrator:
        """Insert; a clash on the unique email raises DuplicateEmailException."""
        roles = list(DEFAULT_ADMIN_ROLES)
        if is_super_admin:
            roles.append(SUPER_ADMIN_ROLE)
        admin = Administrator(
            name=name,
            email=email,
            password=password,
            roles=roles,
            is_super_admin=is_super_admin,
            department=department,
        )
        return await self.create_unique(
            admin, lambda: DuplicateEmailException(admin.email, "administrator")
        )
