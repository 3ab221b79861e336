from __future__ import annotations

from datetime import date

import pytest

from slotbot.database import Database
from slotbot.services.game_api import GameApi
from slotbot.services.leaderboard import LeaderboardService
from slotbot.services.ledger import LedgerService

WALLET_A = "0x" + "a" * 40
WALLET_B = "0x" + "b" * 40
WALLET_C = "0x" + "c" * 40


class MutableClock:
    """today() is whatever the test says it is."""

    def __init__(self, day: date) -> None:
        self.day = day

    def today(self) -> date:
        return self.day


class ScriptedRng:
    """random() replays the given values, then repeats the last one."""

    def __init__(self, *values: float) -> None:
        self.values = list(values)

    def random(self) -> float:
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.init_models()
    yield database
    await database.close()


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(date(2026, 10, 18))


@pytest.fixture
def leaderboard(db) -> LeaderboardService:
    return LeaderboardService(db)


@pytest.fixture
async def ledger(db, leaderboard, clock):
    service = LedgerService(db, leaderboard=leaderboard, clock=clock)
    yield service
    # refreshes must finish before the engine is disposed
    await service.wait_background()


@pytest.fixture
def game(db, ledger, leaderboard) -> GameApi:
    return GameApi(ledger, leaderboard, db=db)
