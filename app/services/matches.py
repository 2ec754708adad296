"""Match response and archive service.

Provides:
1. Recording a responder's answer to a match (accept, decline, refer)
2. The responder's archive of declined and referred matches
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.db.base import MAX_INTEGER_ID
from app.models.ask import Ask
from app.models.match import ARCHIVED_STATUSES, Match, MatchStatus
from app.models.user import User
from app.services.exceptions import InternalError, NotFoundError, ServiceError, ValidationError
from app.services.users import resolve_user

logger = logging.getLogger(__name__)

# Client response tokens and the status each one records
RESPONSE_STATUS: dict[str, MatchStatus] = {
    "yes": MatchStatus.ACCEPTED,
    "no": MatchStatus.DECLINED,
    "declined": MatchStatus.DECLINED,
    "referred": MatchStatus.REFERRED,
}

DEFAULT_ASK_TITLE = "Opportunity"
DEFAULT_REQUESTER_NAME = "Someone"


def status_for_response(response: Any) -> MatchStatus:
    """Map a client response token to the match status it records.

    Raises:
        ValidationError: the token is not one of yes, no, declined, referred
    """
    if not isinstance(response, str) or response not in RESPONSE_STATUS:
        raise ValidationError("Invalid response")
    return RESPONSE_STATUS[response]


async def respond_to_match(
    db: AsyncSession,
    match_id: int,
    user_id: int | None,
    response: Any,
) -> MatchStatus:
    """Record the matched user's response to a match.

    The ownership check and the status update share one transaction. The
    match row is locked while it is checked, so concurrent responses to the
    same match are applied one after another. Responding again to a match
    that already has an answer overwrites it.

    Args:
        db: Async database session
        match_id: Match being answered
        user_id: The responder; must be the match's matched_user_id
        response: One of "yes", "no", "declined", "referred"

    Returns:
        The status now stored on the match

    Raises:
        ValidationError: invalid response token or missing user_id
        NotFoundError: no match with that id belongs to user_id
        InternalError: the datastore failed
    """
    new_status = status_for_response(response)
    if user_id is None:
        raise ValidationError("user_id is required")
    if not (0 < match_id <= MAX_INTEGER_ID and 0 < user_id <= MAX_INTEGER_ID):
        logger.warning(f"Match {match_id} not found for user {user_id}")
        raise NotFoundError("Match not found")

    try:
        match = await db.scalar(
            select(Match)
            .where(Match.id == match_id, Match.matched_user_id == user_id)
            .with_for_update()
        )
        if match is None:
            logger.warning(f"Match {match_id} not found for user {user_id}")
            raise NotFoundError("Match not found")

        previous = match.status
        match.status = new_status
        match.updated_at = datetime.now(timezone.utc)
        await db.commit()
    except ServiceError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception(f"Failed to record response for match {match_id}")
        raise InternalError(str(e)) from e

    logger.info(f"Match {match_id}: {previous.value} -> {new_status.value} by user {user_id}")
    return new_status


async def get_archive(db: AsyncSession, identifier: str) -> list[dict[str, Any]]:
    """Get a responder's declined and referred matches, most recently answered first.

    An unknown identifier yields an empty archive rather than an error.

    Each item carries both ``ask_title``/``title`` and
    ``requester_name``/``other_name``; older clients read the second name
    of each pair.
    """
    requester = aliased(User, name="requester")

    try:
        user = await resolve_user(db, identifier)
        if user is None:
            logger.info(f"Archive requested for unknown user {identifier}")
            return []

        result = await db.execute(
            select(
                Match.id,
                Match.ask_id,
                Match.status,
                Match.created_at,
                Match.updated_at,
                Ask.title,
                Ask.ask_text,
                Ask.category,
                requester.id.label("requester_id"),
                requester.name.label("requester_name"),
            )
            .join(Ask, Ask.id == Match.ask_id)
            .outerjoin(requester, requester.id == Ask.requester_id)
            .where(
                Match.matched_user_id == user.id,
                Match.status.in_(ARCHIVED_STATUSES),
            )
            .order_by(Match.updated_at.desc(), Match.id.desc())
        )
        rows = result.all()
    except SQLAlchemyError as e:
        logger.exception(f"Archive query failed for {identifier}")
        raise InternalError(str(e)) from e

    items = []
    for row in rows:
        title = row.title or DEFAULT_ASK_TITLE
        requester_name = row.requester_name or DEFAULT_REQUESTER_NAME
        items.append({
            "id": row.id,
            "match_id": row.id,
            "ask_id": row.ask_id,
            "status": row.status.value,
            "ask_title": title,
            "title": title,
            "ask_text": row.ask_text,
            "category": row.category,
            "requester_id": row.requester_id,
            "requester_name": requester_name,
            "other_name": requester_name,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        })

    logger.info(f"Archive for user {user.id}: {len(items)} matches")
    return items
