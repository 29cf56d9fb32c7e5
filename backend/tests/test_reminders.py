"""Tests for reminder timing and the background sweep."""

from datetime import datetime, timedelta

from sportsync.notifications.reminders import (
    check_match_reminder,
    check_upcoming_for_user,
    hours_until,
    reminder_message,
    sweep_upcoming_reminders,
)
from sportsync.notifications.scheduler import (
    get_scheduler_status,
    init_scheduler,
    reminder_sweep_task,
    shutdown_scheduler,
)
from sportsync.schemas import FavoriteCreate, Match, MatchCreate, UserCreate, utcnow

NOW = datetime(2026, 10, 19, 12, 0)


async def favorite_match(storage, username: str = "alice", **overrides):
    """Create a user who has favorited one match."""
    user = await storage.create_user(
        UserCreate(username=username, email=f"{username}@example.com", password="hash")
    )
    values = {
        "sport_type": "cricket",
        "team1": "India",
        "team2": "Pakistan",
        "match_time": NOW + timedelta(hours=24),
    }
    values.update(overrides)
    match = await storage.create_match(MatchCreate(**values))
    await storage.add_favorite(FavoriteCreate(user_id=user.id, match_id=match.id))
    return user, match


class TestHoursUntil:
    """Tests for hours_until."""

    def test_rounds_to_nearest_hour(self):
        """Durations round to the nearest whole hour."""
        assert hours_until(NOW + timedelta(hours=23, minutes=31), NOW) == 24
        assert hours_until(NOW + timedelta(hours=24, minutes=29), NOW) == 24
        assert hours_until(NOW + timedelta(minutes=40), NOW) == 1
        assert hours_until(NOW + timedelta(hours=1, minutes=20), NOW) == 1
        assert hours_until(NOW + timedelta(hours=2), NOW) == 2

    def test_half_hours_round_up(self):
        """Exactly half an hour rounds up, so each reminder window is half-open."""
        assert hours_until(NOW + timedelta(hours=23, minutes=30), NOW) == 24
        assert hours_until(NOW + timedelta(hours=24, minutes=30), NOW) == 25
        assert hours_until(NOW + timedelta(minutes=30), NOW) == 1
        assert hours_until(NOW + timedelta(hours=1, minutes=30), NOW) == 2

    def test_past_matches_are_negative(self):
        """Matches already started give negative hours."""
        assert hours_until(NOW - timedelta(hours=3), NOW) == -3

    def test_message(self):
        """Singular and plural hours read naturally."""
        match_values = {
            "id": 1,
            "sport_type": "football",
            "team1": "Arsenal",
            "team2": "Chelsea",
            "match_time": NOW,
            "created_at": NOW,
        }
        match = Match(**match_values)

        assert reminder_message(match, 1) == "Reminder: Arsenal vs Chelsea starts in 1 hour"
        assert reminder_message(match, 24) == "Reminder: Arsenal vs Chelsea starts in 24 hours"


class TestCheckMatchReminder:
    """Tests for the per-match reminder check."""

    async def test_due_match_creates_one_reminder(self, any_storage):
        """A due reminder is created once per match."""
        user, match = await favorite_match(any_storage)

        first = await check_match_reminder(any_storage, user.id, match, now=NOW)
        second = await check_match_reminder(any_storage, user.id, match, now=NOW)

        assert first is not None
        assert first.message == "Reminder: India vs Pakistan starts in 24 hours"
        assert first.match_id == match.id
        assert second is None
        assert len(await any_storage.get_notifications_by_user_id(user.id)) == 1

    async def test_not_due(self, any_storage):
        """Matches outside the reminder hours produce nothing."""
        user, match = await favorite_match(any_storage, match_time=NOW + timedelta(hours=6))

        assert await check_match_reminder(any_storage, user.id, match, now=NOW) is None

    async def test_only_upcoming_matches(self, any_storage):
        """Live and completed matches never get reminders."""
        user, match = await favorite_match(any_storage, status="live")

        assert await check_match_reminder(any_storage, user.id, match, now=NOW) is None

    async def test_both_reminders_over_time(self, any_storage):
        """The 24-hour and 1-hour reminders are distinct."""
        user, _ = await favorite_match(any_storage)

        day_before = await check_upcoming_for_user(any_storage, user.id, now=NOW)
        hour_before = await check_upcoming_for_user(
            any_storage, user.id, now=NOW + timedelta(hours=23)
        )

        assert len(day_before) == 1
        assert len(hour_before) == 1
        assert hour_before[0].message.endswith("1 hour")
        assert len(await any_storage.get_notifications_by_user_id(user.id)) == 2

    async def test_later_fixture_between_same_teams(self, any_storage):
        """A second fixture between the same teams gets its own reminder."""
        user, first = await favorite_match(any_storage)
        second = await any_storage.create_match(
            MatchCreate(
                sport_type="cricket",
                team1="India",
                team2="Pakistan",
                match_time=NOW + timedelta(days=7, hours=24),
            )
        )
        await any_storage.add_favorite(FavoriteCreate(user_id=user.id, match_id=second.id))

        first_check = await check_upcoming_for_user(any_storage, user.id, now=NOW)
        second_check = await check_upcoming_for_user(
            any_storage, user.id, now=NOW + timedelta(days=7)
        )

        assert [n.match_id for n in first_check] == [first.id]
        assert [n.match_id for n in second_check] == [second.id]
        assert first_check[0].message == second_check[0].message
        assert len(await any_storage.get_notifications_by_user_id(user.id)) == 2


class TestSweep:
    """Tests for the all-users sweep and its scheduler."""

    async def test_sweep_covers_all_users(self, memory_storage):
        """Every user with a due favorite is reminded."""
        now_match = {"match_time": utcnow() + timedelta(hours=24)}
        alice, _ = await favorite_match(memory_storage, "alice", **now_match)
        bob, _ = await favorite_match(memory_storage, "bob", **now_match)

        created = await sweep_upcoming_reminders(memory_storage)

        assert created == 2
        assert len(await memory_storage.get_notifications_by_user_id(alice.id)) == 1
        assert len(await memory_storage.get_notifications_by_user_id(bob.id)) == 1

    async def test_sweep_task_swallows_errors(self):
        """A failing sweep is logged, not raised into the scheduler."""

        class BrokenStorage:
            async def get_users(self):
                raise RuntimeError("storage down")

        await reminder_sweep_task(BrokenStorage())

    async def test_scheduler_lifecycle(self, memory_storage):
        """The scheduler registers the sweep job and shuts down cleanly."""
        scheduler = init_scheduler(memory_storage, minutes=30)
        try:
            status = get_scheduler_status(scheduler)
            assert status["running"] is True
            assert [job["id"] for job in status["jobs"]] == ["reminder_sweep"]
        finally:
            shutdown_scheduler(scheduler)

        assert get_scheduler_status(None) == {"running": False, "jobs": []}
