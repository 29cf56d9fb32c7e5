"""Notifications module for favorite-match reminders."""

from sportsync.notifications.reminders import (
    check_match_reminder,
    check_upcoming_for_user,
    hours_until,
    sweep_upcoming_reminders,
)

__all__ = [
    "check_match_reminder",
    "check_upcoming_for_user",
    "hours_until",
    "sweep_upcoming_reminders",
]
