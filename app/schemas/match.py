"""Pydantic schemas for match responses and the archive."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from app.models.match import MatchStatus


class MatchResponseRequest(BaseModel):
    """Responder's answer to a match."""

    response: Any = None
    user_id: int | None = None


class MatchResponseEnvelope(BaseModel):
    """Result of answering a match."""

    success: bool = True
    message: str
    status: MatchStatus


class ArchiveItem(BaseModel):
    """A declined or referred match with its ask and requester.

    ``title`` and ``other_name`` duplicate ``ask_title`` and
    ``requester_name`` for older clients.
    """

    id: int
    match_id: int
    ask_id: int
    status: MatchStatus
    ask_title: str
    title: str
    ask_text: str | None = None
    category: str | None = None
    requester_id: int | None = None
    requester_name: str
    other_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ArchiveEnvelope(BaseModel):
    """A responder's archive."""

    success: bool = True
    opportunities: list[ArchiveItem]
    count: int
