"""Favorite-match reminders.

A reminder is created when a favorited, still-upcoming match is 24 hours
or 1 hour from kick-off. A user gets each reminder at most once per match,
so repeated checks within the same hour do not pile up notifications while
a later fixture between the same teams is still announced.
"""

import logging
import math
from datetime import datetime

from sportsync.schemas import Match, Notification, NotificationCreate, utcnow
from sportsync.storage.base import Storage

logger = logging.getLogger(__name__)

# Hours before kick-off that trigger a reminder
REMINDER_HOURS = (24, 1)

# (match id, message) pairs a user has already been sent
ReminderKey = tuple[int | None, str]


def hours_until(match_time: datetime, now: datetime | None = None) -> int:
    """Whole hours from ``now`` until ``match_time``, halves rounded up.

    The reminder for ``h`` hours therefore fires while kick-off is in
    ``[h - 0.5, h + 0.5)`` hours, so a check run moments after a match is
    scheduled exactly 24 hours out still counts as 24.
    """
    now = now or utcnow()
    return math.floor((match_time - now).total_seconds() / 3600 + 0.5)


def reminder_message(match: Match, hours: int) -> str:
    unit = "hour" if hours == 1 else "hours"
    return f"Reminder: {match.team1} vs {match.team2} starts in {hours} {unit}"


async def sent_reminders(storage: Storage, user_id: int) -> set[ReminderKey]:
    return {(n.match_id, n.message) for n in await storage.get_notifications_by_user_id(user_id)}


async def check_match_reminder(
    storage: Storage,
    user_id: int,
    match: Match,
    *,
    now: datetime | None = None,
    already_sent: set[ReminderKey] | None = None,
) -> Notification | None:
    """Create a reminder for one match if it is due and not already sent."""
    if match.status != "upcoming":
        return None

    hours = hours_until(match.match_time, now)
    if hours not in REMINDER_HOURS:
        return None

    message = reminder_message(match, hours)
    if already_sent is None:
        already_sent = await sent_reminders(storage, user_id)
    if (match.id, message) in already_sent:
        return None

    notification = await storage.create_notification(
        NotificationCreate(user_id=user_id, match_id=match.id, message=message)
    )
    already_sent.add((match.id, message))
    return notification


async def check_upcoming_for_user(
    storage: Storage,
    user_id: int,
    *,
    now: datetime | None = None,
) -> list[Notification]:
    """Run the reminder check over every favorited match of a user.

    Returns:
        The notifications created by this call.
    """
    now = now or utcnow()
    favorites = await storage.get_favorites_by_user_id(user_id)
    already_sent = await sent_reminders(storage, user_id)

    created: list[Notification] = []
    for favorite in favorites:
        notification = await check_match_reminder(
            storage, user_id, favorite.match, now=now, already_sent=already_sent
        )
        if notification is not None:
            created.append(notification)

    if created:
        logger.info(f"Created {len(created)} reminders for user {user_id}")
    return created


async def sweep_upcoming_reminders(storage: Storage) -> int:
    """Run the reminder check for every user. Returns reminders created."""
    now = utcnow()
    total = 0
    for user in await storage.get_users():
        total += len(await check_upcoming_for_user(storage, user.id, now=now))
    return total
