"""Match response and archive endpoints."""

from fastapi import APIRouter

from app.api.deps import DbSession
from app.schemas.common import ErrorEnvelope
from app.schemas.match import (
    ArchiveEnvelope,
    ArchiveItem,
    MatchResponseEnvelope,
    MatchResponseRequest,
)
from app.services.matches import get_archive, respond_to_match

router = APIRouter(prefix="/api", tags=["Matches"])


@router.post(
    "/matches/{match_id}/respond",
    response_model=MatchResponseEnvelope,
    responses={400: {"model": ErrorEnvelope}, 404: {"model": ErrorEnvelope}},
)
async def respond(
    match_id: int,
    db: DbSession,
    payload: MatchResponseRequest | None = None,
) -> MatchResponseEnvelope:
    """Answer a match as its matched user.

    Body: ``response`` is one of yes, no, declined, referred; ``user_id`` is
    the responder. A match that belongs to someone else is reported exactly
    like a missing one.
    """
    payload = payload or MatchResponseRequest()
    status = await respond_to_match(db, match_id, payload.user_id, payload.response)
    return MatchResponseEnvelope(message=f"Match {status.value}", status=status)


@router.get("/opportunities/{identifier}/archive", response_model=ArchiveEnvelope)
async def archive(identifier: str, db: DbSession) -> ArchiveEnvelope:
    """Get the declined and referred matches of a user, by id or phone.

    Unknown users get an empty list, never a 404.
    """
    items = [ArchiveItem(**item) for item in await get_archive(db, identifier)]
    return ArchiveEnvelope(opportunities=items, count=len(items))
