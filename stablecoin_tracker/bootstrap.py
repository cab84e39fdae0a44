"""Bootstrap function for setting up the synchronization scheduler."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.combining import OrTrigger
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger

from stablecoin_tracker.orchestration import TrackerOrchestrator

logger = logging.getLogger(__name__)


def bootstrap(orchestrator: TrackerOrchestrator, schedule: str) -> AsyncIOScheduler:
    """Set up a scheduler running synchronization immediately and then on a crontab.

    A run can take tens of minutes because of provider rate limits; with
    max_instances=1 and coalesce a slow run is never overlapped by the next.

    Args:
        orchestrator: Orchestrator whose scheduled_synchronize() is registered
        schedule: Standard five-field crontab expression, e.g. "0 * * * *"

    Returns:
        Configured AsyncIOScheduler ready to start

    Raises:
        ValueError: If the crontab expression is invalid
    """
    scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,  # Skip missed runs if overlapping
            "max_instances": 1,  # Only one synchronization at a time
            "misfire_grace_time": 3600,  # Allow delayed starts within 1 hour
        }
    )

    scheduler.add_job(
        orchestrator.scheduled_synchronize,
        trigger=OrTrigger(
            [
                DateTrigger(),  # Run immediately on start
                CronTrigger.from_crontab(schedule),
            ]
        ),
        name="market_data_sync",
    )
    logger.info(f"Registered market data sync job (immediate + '{schedule}')")

    return scheduler
