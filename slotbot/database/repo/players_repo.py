# slotbot/database/repo/players_repo.py
from __future__ import annotations

from datetime import date

from sqlalchemy import case, desc, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from slotbot.database.models import PlayerAccount, SpinHistory
from slotbot.services.payout import SpinOutcome

HISTORY_LIMIT = 50


def _insert_for(session: AsyncSession):
    # ON CONFLICT support lives in the dialect-specific insert()
    if session.bind is not None and session.bind.dialect.name == "postgresql":
        return pg_insert
    return sqlite_insert


async def ensure_account(session: AsyncSession, wallet: str) -> None:
    """
    Idempotent "create if absent". Concurrent callers for the same wallet are
    resolved by the unique constraint, never by a read-then-insert.
    """
    insert = _insert_for(session)
    stmt = (
        insert(PlayerAccount)
        .values(wallet_address=wallet)
        .on_conflict_do_nothing(index_elements=["wallet_address"])
    )
    await session.execute(stmt)


async def get_account(session: AsyncSession, wallet: str) -> PlayerAccount | None:
    res = await session.execute(
        select(PlayerAccount).where(PlayerAccount.wallet_address == wallet)
    )
    return res.scalar_one_or_none()


async def reset_daily_if_stale(session: AsyncSession, wallet: str, today: date) -> bool:
    """
    Zeroes spins_today when the last spin was not on `today`.
    Rows already at zero are left alone, so repeated loads are no-ops.
    Returns True if a row was reset.
    """
    res = await session.execute(
        update(PlayerAccount)
        .where(
            PlayerAccount.wallet_address == wallet,
            PlayerAccount.spins_today != 0,
            or_(
                PlayerAccount.last_spin_date.is_(None),
                PlayerAccount.last_spin_date != today,
            ),
        )
        .values(spins_today=0)
        .execution_options(synchronize_session=False)
    )
    return (res.rowcount or 0) > 0


async def insert_spin(
    session: AsyncSession,
    wallet: str,
    outcome: SpinOutcome,
    signature: str | None = None,
) -> SpinHistory:
    row = SpinHistory(
        wallet_address=wallet,
        symbols=[s.value for s in outcome.symbols],
        points_earned=outcome.points,
        match_type=outcome.match_type,
        is_jackpot=outcome.is_jackpot,
        signature=signature,
    )
    session.add(row)
    await session.flush()
    return row


async def apply_spin(session: AsyncSession, wallet: str, outcome: SpinOutcome, today: date) -> bool:
    """
    Folds one outcome into the wallet aggregates with a single UPDATE.

    Every field is computed from the stored row inside the statement, so two
    concurrent spins for the same wallet both land.
    """
    points = int(outcome.points)

    res = await session.execute(
        update(PlayerAccount)
        .where(PlayerAccount.wallet_address == wallet)
        .values(
            total_points=PlayerAccount.total_points + points,
            spins_today=case(
                (PlayerAccount.last_spin_date == today, PlayerAccount.spins_today + 1),
                else_=1,
            ),
            last_spin_date=today,
            highest_win=case(
                (PlayerAccount.highest_win < points, points),
                else_=PlayerAccount.highest_win,
            ),
            jackpot_count=PlayerAccount.jackpot_count + (1 if outcome.is_jackpot else 0),
        )
        .execution_options(synchronize_session=False)
    )
    return (res.rowcount or 0) > 0


async def recent_spins(session: AsyncSession, wallet: str, limit: int = HISTORY_LIMIT) -> list[SpinHistory]:
    res = await session.execute(
        select(SpinHistory)
        .where(SpinHistory.wallet_address == wallet)
        .order_by(desc(SpinHistory.created_at), desc(SpinHistory.id))
        .limit(limit)
    )
    return list(res.scalars().all())
