from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from slotbot.database.models import LeaderboardEntry, PlayerAccount


# ------------------------
# Shared row DTO
# ------------------------

@dataclass(frozen=True, slots=True)
class LeaderboardRow:
    address: str
    points: int
    rank: int
    jackpots: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "points": self.points,
            "rank": self.rank,
            "jackpots": self.jackpots,
        }


# =========================================================
# PROJECTION REFRESH
# =========================================================

async def refresh_leaderboard(session: AsyncSession) -> int:
    """
    Rebuilds the whole projection from players.

    Rank is the 1-based position by total_points DESC, ties going to the
    older account (lower id). Caller owns the transaction so readers never
    see a half-built table. Returns the number of ranked rows.
    """
    ranked = select(
        PlayerAccount.wallet_address,
        PlayerAccount.total_points,
        func.row_number().over(
            order_by=(PlayerAccount.total_points.desc(), PlayerAccount.id.asc())
        ),
        PlayerAccount.jackpot_count,
    )

    await session.execute(delete(LeaderboardEntry))
    await session.execute(
        insert(LeaderboardEntry).from_select(
            ["address", "points", "rank", "jackpots"],
            ranked,
        )
    )

    return int(await session.scalar(select(func.count()).select_from(LeaderboardEntry)) or 0)


# =========================================================
# READS
# =========================================================

async def get_page(session: AsyncSession, limit: int = 50, offset: int = 0) -> list[LeaderboardRow]:
    res = await session.execute(
        select(
            LeaderboardEntry.address,
            LeaderboardEntry.points,
            LeaderboardEntry.rank,
            LeaderboardEntry.jackpots,
        )
        .order_by(LeaderboardEntry.rank.asc())
        .limit(limit)
        .offset(offset)
    )

    rows: list[LeaderboardRow] = []
    for address, points, rank, jackpots in res.all():
        rows.append(
            LeaderboardRow(
                address=address,
                points=int(points or 0),
                rank=int(rank),
                jackpots=int(jackpots or 0),
            )
        )
    return rows


async def get_rank(session: AsyncSession, wallet: str) -> int | None:
    """1-based rank of `wallet` in the current projection, None if not ranked."""
    rank = await session.scalar(
        select(LeaderboardEntry.rank).where(LeaderboardEntry.address == wallet)
    )
    return int(rank) if rank is not None else None


async def count_entries(session: AsyncSession) -> int:
    return int(await session.scalar(select(func.count()).select_from(LeaderboardEntry)) or 0)
