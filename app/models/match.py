"""Match model and response status."""

import enum
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class MatchStatus(str, enum.Enum):
    """Match lifecycle status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    REFERRED = "referred"
    EXPIRED = "expired"


# Statuses that move a match into the responder's archive
ARCHIVED_STATUSES = (MatchStatus.DECLINED, MatchStatus.REFERRED)


class Match(Base):
    """Pairing of a requester's ask with a candidate responder."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{s.value}'" for s in MatchStatus) + ")",
            name="ck_matches_status",
        ),
        Index("ix_matches_matched_user_id_status", "matched_user_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ask_id: Mapped[int] = mapped_column(Integer, ForeignKey("asks.id"), nullable=False)
    requester_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    matched_user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    status: Mapped[MatchStatus] = mapped_column(
        Enum(
            MatchStatus,
            name="match_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=MatchStatus.PENDING,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
