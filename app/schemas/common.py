"""Response envelope shared by every endpoint."""

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    """Body returned for any failed request."""

    success: bool = False
    error: str
