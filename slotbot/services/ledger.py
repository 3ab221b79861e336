# slotbot/services/ledger.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from slotbot.database.models import SpinHistory
from slotbot.database.repo import players_repo
from slotbot.database.session import Database
from slotbot.database.tx import transactional
from slotbot.services.leaderboard import LeaderboardService
from slotbot.services.payout import SpinOutcome, is_jackpot
from slotbot.services.reels import RandomSource, Symbol
from slotbot.services.signature import looks_like_signature

log = logging.getLogger(__name__)


class TimeProvider:
    """Game days roll over at 00:00 UTC; any object with `today()` can stand in."""

    def today(self) -> date:
        return datetime.now(timezone.utc).date()


@dataclass(frozen=True, slots=True)
class GameState:
    total_points: int = 0
    spins_today: int = 0
    last_spin_date: date | None = None
    spin_history: list[SpinOutcome] = field(default_factory=list)
    highest_win: int = 0
    jackpot_count: int = 0

    @classmethod
    def default(cls) -> "GameState":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalPoints": self.total_points,
            "spinsToday": self.spins_today,
            "lastSpinDate": self.last_spin_date.isoformat() if self.last_spin_date else None,
            "spinHistory": [o.to_dict() for o in self.spin_history],
            "highestWin": self.highest_win,
            "jackpotCount": self.jackpot_count,
        }


def _outcome_from_row(row: SpinHistory) -> SpinOutcome:
    symbols = tuple(Symbol(s) for s in row.symbols)
    return SpinOutcome(
        symbols=symbols,  # type: ignore[arg-type]
        points=int(row.points_earned or 0),
        match_type=row.match_type,
        is_jackpot=is_jackpot(symbols),
    )


class LedgerService:
    """
    Per-wallet progress: aggregates, the daily counter and spin history.

    Availability beats consistency here. Reads fall back to a zeroed state and
    each write step of a spin is attempted on its own, so a storage failure
    never prevents a spin from being answered.
    """

    def __init__(
        self,
        db: Database,
        *,
        leaderboard: LeaderboardService | None = None,
        clock: TimeProvider | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.db = db
        self.leaderboard = leaderboard
        self.clock = clock or TimeProvider()
        self.rng = rng
        self._background: set[asyncio.Task] = set()

    # -------------------------------------------------
    # Helpers
    # -------------------------------------------------

    async def _step(
        self,
        name: str,
        wallet: str,
        fn: Callable[[AsyncSession], Awaitable[Any]],
    ) -> bool:
        """Runs one write in its own session + transaction. Failures are logged, not raised."""
        try:
            async with self.db.session() as session:
                async with transactional(session):
                    await fn(session)
            return True
        except Exception:
            log.exception("Ledger step %r failed for %s", name, wallet)
            return False

    def _schedule_refresh(self) -> None:
        if self.leaderboard is None:
            return

        task = asyncio.create_task(self.leaderboard.refresh())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def wait_background(self) -> None:
        """Awaits pending leaderboard refreshes (shutdown/tests)."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    # -------------------------------------------------
    # Reads
    # -------------------------------------------------

    async def load_state(self, wallet: str) -> GameState:
        """
        NOT a pure read.

        Creates the account on first contact and zeroes spins_today when the
        last spin happened on an earlier UTC day. Any storage failure yields
        the zeroed default state instead of an error.
        """
        try:
            try:
                async with self.db.session() as session:
                    account = await players_repo.get_account(session, wallet)
            except Exception:
                log.exception("Database error loading player %s", wallet)
                return GameState.default()

            if account is None:
                await self._step("create_account", wallet, lambda s: players_repo.ensure_account(s, wallet))
                return GameState.default()

            today = self.clock.today()
            spins_today = int(account.spins_today or 0)

            if account.last_spin_date != today:
                # stored counter belongs to another day either way
                spins_today = 0
                await self._step(
                    "reset_daily",
                    wallet,
                    lambda s: players_repo.reset_daily_if_stale(s, wallet, today),
                )

            history: list[SpinOutcome] = []
            try:
                async with self.db.session() as session:
                    rows = await players_repo.recent_spins(session, wallet)
                history = [_outcome_from_row(r) for r in rows]
            except Exception:
                log.exception("Error loading spin history for %s", wallet)

            return GameState(
                total_points=int(account.total_points or 0),
                spins_today=spins_today,
                last_spin_date=account.last_spin_date,
                spin_history=history,
                highest_win=int(account.highest_win or 0),
                jackpot_count=int(account.jackpot_count or 0),
            )
        except Exception:
            log.exception("Error loading game state for %s", wallet)
            return GameState.default()

    # -------------------------------------------------
    # Spin
    # -------------------------------------------------

    async def record_spin(self, wallet: str, signature: str | None = None) -> SpinOutcome:
        """
        Rolls a fresh outcome and folds it into `wallet`'s progress.

        Steps: ensure account -> append history -> update aggregates ->
        schedule leaderboard refresh. Nothing is rolled back if a later step
        fails; the outcome is returned regardless.
        """
        outcome = SpinOutcome.roll(self.rng)

        if signature and not looks_like_signature(signature):
            log.warning("Malformed spin signature from %s (stored for audit only)", wallet)

        today = self.clock.today()

        await self._step("ensure_account", wallet, lambda s: players_repo.ensure_account(s, wallet))
        await self._step(
            "insert_history",
            wallet,
            lambda s: players_repo.insert_spin(s, wallet, outcome, signature),
        )

        async def _apply(session: AsyncSession) -> None:
            if not await players_repo.apply_spin(session, wallet, outcome, today):
                log.warning("Aggregate update matched no player row for %s", wallet)

        await self._step("apply_aggregates", wallet, _apply)

        try:
            self._schedule_refresh()
        except Exception:
            log.exception("Failed to schedule leaderboard refresh")

        log.info(
            "Spin %s -> %s (%s pts%s)",
            wallet,
            "".join(s.value for s in outcome.symbols),
            outcome.points,
            ", JACKPOT" if outcome.is_jackpot else "",
        )
        return outcome
