"""Async engine and request-scoped sessions."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import get_settings

settings = get_settings()


def engine_options(database_url: str) -> dict[str, Any]:
    """Engine keyword arguments for the configured backend.

    Pool sizing only applies to server databases; SQLite (local runs)
    uses the driver's default pool.
    """
    options: dict[str, Any] = {"echo": settings.app_debug}
    if make_url(database_url).get_backend_name() != "sqlite":
        options.update(pool_size=settings.database_pool_size, pool_pre_ping=True)
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request.

    Services commit or roll back their own work; whatever is still pending
    when the request ends is committed, and an escaping error rolls it back.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
