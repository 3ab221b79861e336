from __future__ import annotations

from conftest import WALLET_A, WALLET_B, WALLET_C
from sqlalchemy.exc import OperationalError

from slotbot.database.models import PlayerAccount
from slotbot.database.repo import leaderboard_repo

WALLET_D = "0x" + "d" * 40


async def _seed(db, *rows: tuple[str, int, int]) -> None:
    async with db.session() as session:
        async with session.begin():
            for wallet, points, jackpots in rows:
                session.add(PlayerAccount(wallet_address=wallet, total_points=points, jackpot_count=jackpots))
                await session.flush()  # ids follow insertion order


def _boom(*_args, **_kwargs):
    raise OperationalError("stmt", {}, Exception("no such table: leaderboard"))


async def test_ranks_by_points_descending(db, leaderboard):
    await _seed(db, (WALLET_A, 10, 0), (WALLET_B, 900, 1), (WALLET_C, 50, 0))
    assert await leaderboard.refresh() is True

    rows = await leaderboard.rank()
    assert [(r.address, r.points, r.rank) for r in rows] == [
        (WALLET_B, 900, 1),
        (WALLET_C, 50, 2),
        (WALLET_A, 10, 3),
    ]
    assert rows[0].jackpots == 1
    assert rows[0].to_dict() == {"address": WALLET_B, "points": 900, "rank": 1, "jackpots": 1}


async def test_higher_points_always_rank_lower(db, leaderboard):
    await _seed(db, *[(f"0x{i:040x}", (i * 37) % 11, 0) for i in range(1, 30)])
    await leaderboard.refresh()

    rows = await leaderboard.rank(limit=100)
    assert [r.rank for r in rows] == list(range(1, len(rows) + 1))
    for a in rows:
        for b in rows:
            if a.points > b.points:
                assert a.rank < b.rank


async def test_ties_get_distinct_positions_by_account_age(db, leaderboard):
    await _seed(db, (WALLET_C, 100, 0), (WALLET_A, 100, 0), (WALLET_B, 5, 0))
    await leaderboard.refresh()

    rows = await leaderboard.rank()
    assert [(r.address, r.rank) for r in rows] == [(WALLET_C, 1), (WALLET_A, 2), (WALLET_B, 3)]


async def test_pagination_and_rank_of_agree(db, leaderboard):
    await _seed(db, (WALLET_A, 40, 0), (WALLET_B, 30, 0), (WALLET_C, 20, 0), (WALLET_D, 10, 0))
    await leaderboard.refresh()

    page = await leaderboard.rank(limit=2, offset=1)
    assert [r.address for r in page] == [WALLET_B, WALLET_C]

    for row in await leaderboard.rank():
        assert await leaderboard.rank_of(row.address) == row.rank
    assert await leaderboard.total() == 4


async def test_unranked_wallet(db, leaderboard):
    await leaderboard.refresh()
    assert await leaderboard.rank_of(WALLET_A) is None
    assert await leaderboard.rank() == []


async def test_projection_is_stale_until_refresh(db, leaderboard):
    await _seed(db, (WALLET_A, 10, 0))
    await leaderboard.refresh()

    await _seed(db, (WALLET_B, 500, 0))
    assert await leaderboard.rank_of(WALLET_B) is None

    await leaderboard.refresh()
    assert await leaderboard.rank_of(WALLET_B) == 1
    assert await leaderboard.rank_of(WALLET_A) == 2


async def test_read_failures_degrade(leaderboard, monkeypatch):
    monkeypatch.setattr(leaderboard_repo, "get_page", _boom)
    monkeypatch.setattr(leaderboard_repo, "get_rank", _boom)
    monkeypatch.setattr(leaderboard_repo, "count_entries", _boom)

    assert await leaderboard.rank() == []
    assert await leaderboard.rank_of(WALLET_A) is None
    assert await leaderboard.total() == 0


async def test_refresh_failure_is_reported_not_raised(leaderboard, monkeypatch):
    monkeypatch.setattr(leaderboard_repo, "refresh_leaderboard", _boom)
    assert await leaderboard.refresh() is False
