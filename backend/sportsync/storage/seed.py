"""Startup seeding: admin account and a few sample matches.

Seeding is idempotent: the admin is created only if no user has the
configured email or username, and sample matches only if there are no
matches at all.
"""

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sportsync.core.security import hash_password
from sportsync.schemas import MatchCreate, UserCreate, utcnow

if TYPE_CHECKING:
    from sportsync.core.config import Settings
    from sportsync.storage.base import Storage

logger = logging.getLogger(__name__)


def sample_matches(now: datetime | None = None) -> list[MatchCreate]:
    """Two live matches and one upcoming match relative to ``now``."""
    now = now or utcnow()
    return [
        MatchCreate(
            sport_type="football",
            team1="Arsenal",
            team2="Liverpool",
            team1_logo="https://upload.wikimedia.org/wikipedia/en/5/53/Arsenal_FC.svg",
            team2_logo="https://upload.wikimedia.org/wikipedia/en/0/0c/Liverpool_FC.svg",
            score1="2",
            score2="1",
            venue="Emirates Stadium",
            match_time=now - timedelta(minutes=30),
            status="live",
            current_time="75'",
        ),
        MatchCreate(
            sport_type="football",
            team1="Barcelona",
            team2="Real Madrid",
            team1_logo="https://upload.wikimedia.org/wikipedia/en/4/47/FC_Barcelona_%28crest%29.svg",
            team2_logo="https://upload.wikimedia.org/wikipedia/en/5/56/Real_Madrid_CF.svg",
            venue="Camp Nou, Barcelona",
            match_time=now + timedelta(hours=24),
            status="upcoming",
            current_time="-",
        ),
        MatchCreate(
            sport_type="cricket",
            team1="India",
            team2="Pakistan",
            team1_logo="https://upload.wikimedia.org/wikipedia/commons/b/bc/Flag_of_India.png",
            team2_logo="https://upload.wikimedia.org/wikipedia/commons/3/32/Flag_of_Pakistan.svg",
            score1="187/4",
            score2="Yet to bat",
            venue="MCG, Melbourne",
            match_time=now - timedelta(hours=2),
            status="live",
            current_time="32.4 Overs",
        ),
    ]


async def seed_storage(storage: "Storage", settings: "Settings") -> dict[str, int]:
    """Create the admin user and sample matches if they are missing.

    Returns:
        Counts of records created, e.g. ``{"users": 1, "matches": 3}``.
    """
    created = {"users": 0, "matches": 0}

    if await storage.get_user_by_email(settings.admin_email) is None:
        if await storage.get_user_by_username(settings.admin_username) is not None:
            logger.warning(
                f"Skipping admin seed: username '{settings.admin_username}' is taken "
                f"by an account without email {settings.admin_email}"
            )
        else:
            await storage.create_user(
                UserCreate(
                    username=settings.admin_username,
                    email=settings.admin_email,
                    password=hash_password(
                        settings.admin_password, rounds=settings.bcrypt_rounds
                    ),
                    role="admin",
                )
            )
            created["users"] += 1

    if not await storage.get_matches():
        for match in sample_matches():
            await storage.create_match(match)
            created["matches"] += 1

    if any(created.values()):
        logger.info(f"Seeded {storage.backend_name} storage: {created}")
    return created
