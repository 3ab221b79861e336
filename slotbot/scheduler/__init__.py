# slotbot/scheduler/__init__.py
from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from slotbot.config.settings import Settings
from slotbot.scheduler.jobs import build_scheduler
from slotbot.services.leaderboard import LeaderboardService


def setup_scheduler(leaderboard: LeaderboardService, settings: Settings) -> AsyncIOScheduler:
    scheduler = build_scheduler(leaderboard=leaderboard, settings=settings)
    scheduler.start()
    return scheduler
