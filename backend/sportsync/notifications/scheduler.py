"""Background scheduler for the periodic reminder sweep.

Runs:
- Favorite-match reminder sweep (every ``reminder_sweep_minutes``)
"""

import logging
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from sportsync.notifications.reminders import sweep_upcoming_reminders
from sportsync.storage.base import Storage

logger = logging.getLogger(__name__)


async def reminder_sweep_task(storage: Storage) -> None:
    """Periodic task: create due reminders for all users."""
    try:
        created = await sweep_upcoming_reminders(storage)
        logger.info(f"Reminder sweep complete: {created} notifications created")
    except Exception as e:
        logger.error(f"Reminder sweep failed: {e}")


def init_scheduler(storage: Storage, minutes: int) -> AsyncIOScheduler:
    """Create and start the scheduler with the reminder sweep job."""
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        reminder_sweep_task,
        IntervalTrigger(minutes=minutes),
        args=[storage],
        id="reminder_sweep",
        replace_existing=True,
        name="Favorite match reminder sweep",
    )
    scheduler.start()
    logger.info(f"Background scheduler started - reminder sweep every {minutes} min")
    return scheduler


def shutdown_scheduler(scheduler: AsyncIOScheduler | None) -> None:
    """Shutdown the scheduler gracefully."""
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shutdown complete")


def get_scheduler_status(scheduler: AsyncIOScheduler | None) -> dict[str, Any]:
    """Get scheduler status and next run times."""
    if not scheduler:
        return {"running": False, "jobs": []}

    jobs = [
        {
            "id": job.id,
            "name": job.name,
            "next_run": str(job.next_run_time) if job.next_run_time else None,
        }
        for job in scheduler.get_jobs()
    ]
    return {"running": scheduler.running, "jobs": jobs}
