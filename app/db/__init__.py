"""Database utilities."""

from app.db.base import Base
from app.db.session import get_db, engine, async_session_maker

__all__ = ["Base", "get_db", "engine", "async_session_maker"]
