# slotbot/database/models/leaderboard.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from slotbot.database.base import Base


class LeaderboardEntry(Base):
    """
    Materialized ranking over players, rebuilt by refresh_leaderboard().
    Not a source of truth: safe to wipe at any time.
    """
    __tablename__ = "leaderboard"

    address: Mapped[str] = mapped_column(String(42), primary_key=True)
    points: Mapped[int] = mapped_column(BigInteger, default=0)
    rank: Mapped[int] = mapped_column(Integer, unique=True, index=True)
    jackpots: Mapped[int] = mapped_column(Integer, default=0)

    refreshed_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
