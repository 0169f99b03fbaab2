"""Scheduled jobs keeping the live festival schedule current."""

import logging
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from festgrid.config import settings
from festgrid.services.refresh import RefreshCoordinator
from festgrid.utils.timecalc import festival_today

logger = logging.getLogger(__name__)


async def run_auto_refresh(coordinator: RefreshCoordinator) -> None:
    """Rebuild the live schedule, catching up on changes made outside this process."""
    if coordinator.target_date is None:
        logger.debug("Live schedule has no date yet, skipping auto refresh")
        return
    snapshot = await coordinator.force_refresh()
    logger.info(
        f"Auto refresh for {snapshot.target_date}: {snapshot.state.value}, "
        f"{len(snapshot.items)} items"
    )


async def run_day_rollover(coordinator: RefreshCoordinator) -> None:
    """Move the live schedule to the new festival day."""
    today = festival_today(settings.festival_timezone)
    if coordinator.target_date == today:
        return
    logger.info(f"Rolling live schedule over to {today}")
    await coordinator.set_target_date(today)


def register_refresh_jobs(scheduler: AsyncIOScheduler, coordinator: RefreshCoordinator) -> None:
    """Add the auto-refresh and midnight roll-over jobs to ``scheduler``."""
    if settings.auto_refresh_minutes > 0:
        scheduler.add_job(
            run_auto_refresh,
            trigger=IntervalTrigger(minutes=settings.auto_refresh_minutes),
            args=[coordinator],
            id="schedule_auto_refresh",
            name="Periodic live schedule rebuild",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.info(f"Auto refresh registered every {settings.auto_refresh_minutes} minutes")

    scheduler.add_job(
        run_day_rollover,
        trigger=CronTrigger(hour=0, minute=0, timezone=ZoneInfo(settings.festival_timezone)),
        args=[coordinator],
        id="schedule_day_rollover",
        name="Move live schedule to the new festival day",
        replace_existing=True,
    )
