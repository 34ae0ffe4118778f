"""Create an administrator account.

Usage:
    uv run python -m scripts.create_admin <email> <name> [password] [--super]
If password is omitted, a random one is printed.
"""

import asyncio
import sys

import app.infrastructure.persistence.database as database
from app.core.config import get_settings
from app.domain.exceptions import DuplicateEmailException
from app.infrastructure.persistence.repositories import AdministratorRepository
from app.infrastructure.security import get_password_hash
from app.shared.utils import generate_temporary_password


async def main() -> None:
    """Insert one administrator; refuses an e-mail that is already registered."""
    args = [a for a in sys.argv[1:] if a != "--super"]
    is_super_admin = "--super" in sys.argv[1:]
    if len(args) < 2:
        print(
            "Usage: uv run python -m scripts.create_admin <email> <name> [password] [--super]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, name = args[0].strip().lower(), args[1]
    password = args[2] if len(args) > 2 else None
    generated = password is None
    if password is None:
        password = generate_temporary_password()

    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                repo = AdministratorRepository(session)
                admin = await repo.create_administrator(
                    name=name,
                    email=email,
                    password=get_password_hash(password),
                    is_super_admin=is_super_admin,
                )
                print(f"Created administrator: {admin.id} ({email})")
    except DuplicateEmailException:
        print(f"Administrator already exists: {email}", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.engine.dispose()
    if generated:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
