"""SQLAlchemy declarative base."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""


# Largest value the INTEGER primary key columns can hold
MAX_INTEGER_ID = 2**31 - 1
