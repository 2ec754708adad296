"""Pydantic schemas for signup, profile and referral payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class SignupRequest(BaseModel):
    """Signup payload.

    Every field is optional at the schema level; the registration service
    reports a missing phone. Which referral fields were sent at all is read
    from ``model_fields_set``.
    """

    phone: str | None = None
    name: str | None = None
    age: Any = None
    referred_by: Any = None
    referred_opportunity_id: Any = None

    @field_validator("phone", mode="before")
    @classmethod
    def phone_to_str(cls, v: Any) -> Any:
        """Accept phone numbers sent as JSON numbers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class UserOut(BaseModel):
    """Public projection of a user record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: str
    age: int | None = None
    referred_by: int | None = None
    referred_opportunity_id: int | None = None


class UserEnvelope(BaseModel):
    """Single-user response."""

    success: bool = True
    user: UserOut


class ReferralsEnvelope(BaseModel):
    """Users referred by another user."""

    success: bool = True
    referrals: list[UserOut]
    count: int
