"""User endpoints: signup, profile and referrals."""

from fastapi import APIRouter, Request

from app.api.deps import DbSession, limiter, settings
from app.schemas.common import ErrorEnvelope
from app.schemas.user import ReferralsEnvelope, SignupRequest, UserEnvelope, UserOut
from app.services.users import (
    UNSET,
    get_user_profile,
    list_referrals,
    register_or_update_user,
)

router = APIRouter(prefix="/api", tags=["Users"])


@router.post("/signup", response_model=UserEnvelope, responses={400: {"model": ErrorEnvelope}})
@limiter.limit(settings.signup_rate_limit)
async def signup(
    request: Request,
    db: DbSession,
    payload: SignupRequest | None = None,
) -> UserEnvelope:
    """Create a user, or refresh an existing one with the same phone.

    Referral fields are merged: a field left out of the body, or sent as
    null, keeps whatever is already stored.
    """
    payload = payload or SignupRequest()
    sent = payload.model_fields_set

    user = await register_or_update_user(
        db,
        phone=payload.phone,
        name=payload.name if "name" in sent else UNSET,
        age=payload.age if "age" in sent else UNSET,
        referred_by=payload.referred_by if "referred_by" in sent else UNSET,
        referred_opportunity_id=(
            payload.referred_opportunity_id if "referred_opportunity_id" in sent else UNSET
        ),
    )
    return UserEnvelope(user=UserOut.model_validate(user))


@router.get(
    "/users/{identifier}/profile",
    response_model=UserEnvelope,
    responses={404: {"model": ErrorEnvelope}},
)
async def get_profile(identifier: str, db: DbSession) -> UserEnvelope:
    """Get a user by numeric id or phone."""
    user = await get_user_profile(db, identifier)
    return UserEnvelope(user=UserOut.model_validate(user))


@router.get("/users/{identifier}/referrals", response_model=ReferralsEnvelope)
async def get_referrals(identifier: str, db: DbSession) -> ReferralsEnvelope:
    """List the users who signed up with this user as their referrer."""
    referrals = [UserOut.model_validate(u) for u in await list_referrals(db, identifier)]
    return ReferralsEnvelope(referrals=referrals, count=len(referrals))
