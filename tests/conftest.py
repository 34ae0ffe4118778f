"""Pytest configuration and fixtures for eventhub.

Every test gets a fresh SQLite database file (schema from the ORM metadata).
HTTP tests run against create_app() with get_db / get_db_transactional
overridden to use that database. All imports use app.*.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.limiter import limiter
from app.infrastructure.persistence import models  # noqa: F401 (registers tables)
from app.infrastructure.persistence.database import (
    Base,
    build_engine,
    build_session_factory,
    get_db,
    get_db_transactional,
)
from app.infrastructure.persistence.repositories import (
    AdministratorRepository,
    EventRepository,
)

# Settings are read when the app is created; tests never need Postgres or Redis.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("APP_ENV", "test")

EVENT_START = datetime(2030, 6, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine(tmp_path) -> AsyncEngine:
    """Async engine on a per-test SQLite file with all tables created."""
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'eventhub.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Session for repository/integration tests. Rolled back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def admin_id(session_factory) -> str:
    """Committed administrator; returns its id."""
    async with session_factory() as session:
        async with session.begin():
            admin = await AdministratorRepository(session).create_administrator(
                name="Ada Admin",
                email="admin@example.com",
                password="not-a-real-hash",
            )
            return admin.id


@pytest.fixture
async def event_id(session_factory) -> str:
    """Committed active event ("Annual Conference"); returns its id."""
    async with session_factory() as session:
        async with session.begin():
            event = await EventRepository(session).create_event(
                title="Annual Conference",
                slug="annual-conference",
                start_date=EVENT_START,
                end_date=EVENT_START + timedelta(hours=8),
                location="Convention Center",
            )
            return event.id


@pytest.fixture
def api_app(session_factory):
    """FastAPI app bound to the per-test database; rate limits off."""
    from app.main import create_app

    application = create_app()

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_db_transactional] = _get_db_transactional
    limiter.enabled = False
    yield application
    limiter.enabled = True
    application.dependency_overrides.clear()


@pytest.fixture
async def client(api_app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
