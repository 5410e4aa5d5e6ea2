"""Service test fixtures — async DB, wired UserRecordService, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe hits the test engine
    - Clock is fixed and advanced explicitly by tests

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for CRUD semantics
    - bcrypt at 4 rounds: real hashing, fast enough for per-test use
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from accounts.db.base import Base
from accounts.infrastructure.database import get_db, DatabaseSessionManager
from accounts.infrastructure.email_syntax import EmailSyntaxValidator
from accounts.infrastructure.password_hashing import HashService
from accounts.infrastructure.user_gateway import SqlAlchemyUserGateway
from accounts.services.user_record_service import UserRecordService
import accounts.infrastructure.database as db_module
from accounts.main import app


class FixedClock:
    """ClockSource that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
def clock():
    return FixedClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def hasher():
    return HashService(rounds=4)


@pytest.fixture
def gateway(test_db):
    return SqlAlchemyUserGateway(test_db)


@pytest.fixture
def service(gateway, hasher, clock):
    return UserRecordService(
        gateway=gateway,
        hasher=hasher,
        email_validator=EmailSyntaxValidator(),
        clock=clock,
    )


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness probe reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
