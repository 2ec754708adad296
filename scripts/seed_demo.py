#!/usr/bin/env python3
"""Seed a local database with demo users, asks and matches.

This script:
1. Creates a requester and a responder (reusing them if the phones exist)
2. Creates a few asks owned by the requester
3. Creates one match per ask for the responder, in assorted statuses

Usage:
    python scripts/seed_demo.py
    python scripts/seed_demo.py --responder-phone +15550002

Environment variables required:
    - DATABASE_URL: PostgreSQL connection string (schema migrated with alembic)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import async_session_maker
from app.models import Ask, Match, MatchStatus
from app.services.users import register_or_update_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEMO_ASKS = [
    ("Intro to a seed investor", "Looking for a warm intro to a pre-seed fund", "fundraising", MatchStatus.PENDING),
    ("Logo design", "Need a simple logo for a bakery", "design", MatchStatus.DECLINED),
    ("Pitch deck review", "30 minutes of feedback on a 12 slide deck", "fundraising", MatchStatus.REFERRED),
    ("Rust mentor", None, "engineering", MatchStatus.ACCEPTED),
]


async def seed(db: AsyncSession, requester_phone: str, responder_phone: str) -> int:
    """Create demo rows and return the number of matches created."""
    requester = await register_or_update_user(db, requester_phone, name="Demo Requester")
    responder = await register_or_update_user(db, responder_phone, name="Demo Responder")

    count = 0
    for title, text, category, status in DEMO_ASKS:
        ask = Ask(requester_id=requester.id, title=title, ask_text=text, category=category)
        db.add(ask)
        await db.flush()  # Get the ID

        db.add(Match(
            ask_id=ask.id,
            requester_id=requester.id,
            matched_user_id=responder.id,
            status=status,
        ))
        count += 1
        logger.info(f"Ask {ask.id} '{title}' matched to user {responder.id} ({status.value})")

    await db.commit()
    return count


async def main(requester_phone: str, responder_phone: str) -> None:
    """Main entry point for demo seeding."""
    logger.info("Seeding demo data...")

    async with async_session_maker() as db:
        total = await seed(db, requester_phone, responder_phone)
        logger.info(f"Created {total} demo matches")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Seed demo users, asks and matches"
    )
    parser.add_argument("--requester-phone", default="+15550001")
    parser.add_argument("--responder-phone", default="+15550002")

    args = parser.parse_args()

    asyncio.run(main(args.requester_phone, args.responder_phone))
