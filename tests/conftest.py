"""
Pytest configuration and shared fixtures.

Services run against an in-memory SQLite database; API tests drive the
FastAPI app through httpx with ``get_db`` pointed at the same database.
"""
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("APP_ENV", "test")

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import Ask, Match, MatchStatus, User

BASE_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def base_time() -> datetime:
    """Fixed timestamp seeded rows are stamped with"""
    return BASE_TIME


@pytest.fixture
async def engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app with the test database"""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# =============================================================================
# Seed helpers
# =============================================================================


@pytest.fixture
def make_user(session_maker):
    """Insert a user and return its id"""

    async def _make_user(phone: str, name: str = "User", **fields) -> int:
        async with session_maker() as session:
            user = User(phone=phone, name=name, **fields)
            session.add(user)
            await session.commit()
            return user.id

    return _make_user


@pytest.fixture
def make_ask(session_maker):
    """Insert an ask and return its id"""

    async def _make_ask(requester_id: int, title: str | None = "Need a designer", **fields) -> int:
        async with session_maker() as session:
            ask = Ask(requester_id=requester_id, title=title, **fields)
            session.add(ask)
            await session.commit()
            return ask.id

    return _make_ask


@pytest.fixture
def make_match(session_maker):
    """Insert a match and return its id; ``age_minutes`` backdates updated_at"""

    async def _make_match(
        ask_id: int,
        requester_id: int,
        matched_user_id: int,
        status: MatchStatus = MatchStatus.PENDING,
        age_minutes: int = 0,
        **fields,
    ) -> int:
        stamp = BASE_TIME - timedelta(minutes=age_minutes)
        async with session_maker() as session:
            match = Match(
                ask_id=ask_id,
                requester_id=requester_id,
                matched_user_id=matched_user_id,
                status=status,
                created_at=stamp,
                updated_at=stamp,
                **fields,
            )
            session.add(match)
            await session.commit()
            return match.id

    return _make_match


@pytest.fixture
def fetch_match_status(session_maker):
    """Read a match's stored status in a fresh session"""

    async def _fetch(match_id: int) -> MatchStatus:
        async with session_maker() as session:
            match = await session.get(Match, match_id)
            return match.status

    return _fetch


@pytest.fixture
def fetch_user(session_maker):
    """Read a user in a fresh session"""

    async def _fetch(user_id: int) -> User | None:
        async with session_maker() as session:
            return await session.get(User, user_id)

    return _fetch
