"""User model with referral attribution."""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

DEFAULT_USER_NAME = "User"


class User(Base):
    """A person who can post asks and be matched against other people's asks.

    Phone is the natural key used for signup lookups. ``referred_by`` and
    ``referred_opportunity_id`` record who invited the user and to which ask.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default=DEFAULT_USER_NAME)
    phone: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    referred_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", name="fk_users_referred_by_users", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    referred_opportunity_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey(
            "asks.id",
            name="fk_users_referred_opportunity_id_asks",
            ondelete="SET NULL",
            use_alter=True,
        ),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
