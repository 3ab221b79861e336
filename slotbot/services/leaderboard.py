# slotbot/services/leaderboard.py
from __future__ import annotations

import asyncio
import logging

from slotbot.database.repo import leaderboard_repo
from slotbot.database.repo.leaderboard_repo import LeaderboardRow
from slotbot.database.session import Database
from slotbot.database.tx import transactional

log = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


class LeaderboardService:
    """
    Reads go to the materialized projection, which may lag recent spins.
    Nothing here raises on storage failure: leaderboard trouble must never
    block gameplay.
    """

    def __init__(self, db: Database) -> None:
        self.db = db
        # one rebuild at a time per process (delete + re-insert of the whole table)
        self._refresh_lock = asyncio.Lock()

    async def refresh(self) -> bool:
        async with self._refresh_lock:
            try:
                async with self.db.session() as session:
                    async with transactional(session):
                        n = await leaderboard_repo.refresh_leaderboard(session)
            except Exception as e:
                log.warning("Failed to refresh leaderboard: %s", e)
                return False

        log.debug("Leaderboard refreshed (%s rows)", n)
        return True

    async def rank(self, limit: int = DEFAULT_LIMIT, offset: int = 0) -> list[LeaderboardRow]:
        try:
            async with self.db.session() as session:
                return await leaderboard_repo.get_page(session, limit=limit, offset=offset)
        except Exception:
            log.exception("Error loading leaderboard (limit=%s offset=%s)", limit, offset)
            return []

    async def rank_of(self, wallet: str) -> int | None:
        try:
            async with self.db.session() as session:
                return await leaderboard_repo.get_rank(session, wallet)
        except Exception:
            log.exception("Error getting rank for %s", wallet)
            return None

    async def total(self) -> int:
        try:
            async with self.db.session() as session:
                return await leaderboard_repo.count_entries(session)
        except Exception:
            log.exception("Error counting leaderboard entries")
            return 0
