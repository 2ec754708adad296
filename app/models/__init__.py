"""SQLAlchemy models.

Note: Asks and Matches are produced by the wider matching application.
This service owns the referral columns on users and match responses.
"""

from app.models.user import User
from app.models.ask import Ask
from app.models.match import Match, MatchStatus

__all__ = [
    "User",
    "Ask",
    "Match",
    "MatchStatus",
]
