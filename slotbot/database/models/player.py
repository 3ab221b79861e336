# slotbot/database/models/player.py
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import BigInteger, CheckConstraint, Date, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from slotbot.database.base import Base


class PlayerAccount(Base):
    """
    One row per wallet (lower-cased 0x address).
    Aggregates are only ever changed by single-statement UPDATEs in players_repo.
    """
    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("total_points >= 0", name="ck_players_total_points_nonneg"),
        CheckConstraint("spins_today >= 0", name="ck_players_spins_today_nonneg"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    wallet_address: Mapped[str] = mapped_column(String(42), unique=True, index=True)

    total_points: Mapped[int] = mapped_column(BigInteger, default=0, server_default="0", index=True)
    spins_today: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    last_spin_date: Mapped[date | None] = mapped_column(Date, nullable=True)  # UTC day
    highest_win: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    jackpot_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )
