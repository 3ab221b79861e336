from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from slotbot.config.settings import Settings
from slotbot.services.leaderboard import LeaderboardService

log = logging.getLogger(__name__)


# -------------------------------------------------
# Leaderboard projection refresh
# -------------------------------------------------

async def refresh_leaderboard_job(leaderboard: LeaderboardService) -> None:
    """
    Safety net for the per-spin refresh: if those fail or get dropped,
    the projection still catches up within one interval.
    """
    ok = await leaderboard.refresh()
    if not ok:
        log.warning("Scheduled leaderboard refresh failed; will retry next run")


# -------------------------------------------------
# Scheduler setup
# -------------------------------------------------

def build_scheduler(leaderboard: LeaderboardService, settings: Settings) -> AsyncIOScheduler:
    """
    Creates and returns an AsyncIOScheduler with our jobs registered.
    LEADERBOARD_REFRESH_MINUTES=0 disables the periodic refresh.
    """
    scheduler = AsyncIOScheduler(timezone="UTC")

    if settings.leaderboard_refresh_minutes > 0:
        scheduler.add_job(
            refresh_leaderboard_job,
            trigger=IntervalTrigger(minutes=settings.leaderboard_refresh_minutes, timezone="UTC"),
            kwargs={"leaderboard": leaderboard},
            id="refresh_leaderboard",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
            misfire_grace_time=60,
        )
    else:
        log.info("Periodic leaderboard refresh disabled")

    return scheduler
