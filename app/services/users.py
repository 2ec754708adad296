"""User registration, profile and referral lookups.

Provides:
1. Signup upsert keyed by phone, with referral attribution merge
2. Identifier resolution (numeric user id or phone)
3. Profile read
4. Listing of users referred by a given user
"""

import enum
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import MAX_INTEGER_ID
from app.models.user import DEFAULT_USER_NAME, User
from app.services.exceptions import InternalError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class Unset(enum.Enum):
    """Marker for an optional field the caller did not send at all."""

    UNSET = "UNSET"


UNSET = Unset.UNSET


def parse_optional_int(value: Any) -> int | None:
    """Parse a loosely-typed client value into an int.

    Anything that is not an integer or an integer-looking string becomes None.

    Examples:
        >>> parse_optional_int("42")
        42
        >>> parse_optional_int(7)
        7
        >>> parse_optional_int("abc") is None
        True
        >>> parse_optional_int(None) is None
        True
    """
    if value is None or value is UNSET or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        if isinstance(value, float):
            return int(value)
        return int(str(value).strip())
    except (ValueError, OverflowError):
        return None


def is_user_id(identifier: str) -> bool:
    """Whether a path identifier refers to a user id rather than a phone.

    Digit strings too large for the id column are phone numbers.
    """
    return (
        identifier.isascii()
        and identifier.isdigit()
        and len(identifier) <= len(str(MAX_INTEGER_ID))
        and int(identifier) <= MAX_INTEGER_ID
    )


async def resolve_user(db: AsyncSession, identifier: str) -> User | None:
    """Find a user by numeric id or by phone.

    Args:
        db: Async database session
        identifier: All-digit string within the id range for a user id,
            anything else for a phone

    Returns:
        The user, or None when nothing matches
    """
    if is_user_id(identifier):
        return await db.scalar(select(User).where(User.id == int(identifier)))
    return await db.scalar(select(User).where(User.phone == identifier))


async def register_or_update_user(
    db: AsyncSession,
    phone: str | None,
    name: str | None | Unset = UNSET,
    age: Any = UNSET,
    referred_by: Any = UNSET,
    referred_opportunity_id: Any = UNSET,
) -> User:
    """Create a user on first signup, or refresh an existing one.

    For an existing phone only the referral fields the caller sent are
    touched, and a sent value that parses to None keeps the stored value.
    Name and age are left alone.

    Raises:
        ValidationError: phone is missing
        InternalError: the datastore failed
    """
    if not phone:
        raise ValidationError("Phone number is required")

    now = datetime.now(timezone.utc)
    created = False
    try:
        user = await db.scalar(select(User).where(User.phone == phone))

        if user is not None:
            if referred_by is not UNSET:
                new_value = parse_optional_int(referred_by)
                if new_value is not None:
                    user.referred_by = new_value
            if referred_opportunity_id is not UNSET:
                new_value = parse_optional_int(referred_opportunity_id)
                if new_value is not None:
                    user.referred_opportunity_id = new_value
            user.updated_at = now
        else:
            user = User(
                name=name if name is not UNSET and name else DEFAULT_USER_NAME,
                phone=phone,
                age=parse_optional_int(age),
                referred_by=parse_optional_int(referred_by),
                referred_opportunity_id=parse_optional_int(referred_opportunity_id),
                created_at=now,
                updated_at=now,
            )
            db.add(user)
            created = True

        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception(f"Signup failed for phone {phone}")
        raise InternalError(str(e)) from e

    if created:
        logger.info(f"Registered new user {user.id} (referred_by={user.referred_by})")
    else:
        logger.info(f"Updated existing user {user.id} on signup")
    return user


async def get_user_profile(db: AsyncSession, identifier: str) -> User:
    """Get a user by id or phone.

    Raises:
        NotFoundError: no user matches the identifier
    """
    try:
        user = await resolve_user(db, identifier)
    except SQLAlchemyError as e:
        logger.exception(f"Profile lookup failed for {identifier}")
        raise InternalError(str(e)) from e

    if user is None:
        logger.warning(f"Profile requested for unknown user {identifier}")
        raise NotFoundError("User not found")
    return user


async def list_referrals(db: AsyncSession, identifier: str) -> list[User]:
    """List users who signed up with the given user as their referrer.

    Newest signups first.

    Raises:
        NotFoundError: no user matches the identifier
    """
    referrer = await get_user_profile(db, identifier)
    try:
        result = await db.scalars(
            select(User)
            .where(User.referred_by == referrer.id)
            .order_by(User.created_at.desc(), User.id.desc())
        )
    except SQLAlchemyError as e:
        logger.exception(f"Referral listing failed for {identifier}")
        raise InternalError(str(e)) from e
    return list(result.all())
