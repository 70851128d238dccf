"""Service test fixtures — async DB, FastAPI test client and user/seminar factories.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched so code reading it directly sees the test engine
    - Factories go through the real services, so fixtures obey the same rules as requests

Design Decisions:
    - StaticPool: one shared in-memory connection, visible to every session
    - SQLite in-memory: fast, no external dependency; SELECT ... FOR UPDATE is a no-op there
"""

from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from seminar.db.base import Base
from seminar.infrastructure.database import get_db, DatabaseSessionManager
from seminar.models.seminar import Seminar
from seminar.models.user import User
from seminar.schemas.seminar import SeminarCreate
from seminar.schemas.user import SignupRequest
from seminar.services.seminar_service import SeminarService
from seminar.services.user_service import UserService
import seminar.infrastructure.database as db_module
from seminar.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_user(test_db):
    """Sign up a user through UserService. Returns (user, token)."""

    async def _make(
        role: str = "participant", name: str | None = None,
        email: str | None = None, **fields,
    ) -> tuple[User, str]:
        suffix = uuid4().hex[:8]
        body = SignupRequest(
            email=email or f"{role}-{suffix}@example.com",
            name=name or f"{role} {suffix}",
            password="correct horse",
            role=role,
            **fields,
        )
        user, token = await UserService(test_db).signup(body)
        await test_db.commit()
        return user, token

    return _make


@pytest.fixture
def make_seminar(test_db, make_user):
    """Register a seminar through SeminarService, creating its instructor if needed."""

    async def _make(
        name: str = "Spring Seminar", capacity: int = 10, count: int = 5,
        time: str = "14:30", online: str | None = None,
        instructor: User | None = None, created_at: datetime | None = None,
    ) -> Seminar:
        if instructor is None:
            instructor, _ = await make_user(role="instructor")
        seminar = await SeminarService(test_db).register(
            SeminarCreate(
                name=name, capacity=capacity, count=count,
                time=time, online=online,
            ),
            instructor,
        )
        if created_at is not None:
            seminar.created_at = created_at
        await test_db.commit()
        return seminar

    return _make
