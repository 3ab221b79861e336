# slotbot/database/models/spin.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from slotbot.database.base import Base


class SpinHistory(Base):
    """
    Append-only log, one row per server-generated spin.
    Kept forever; only the newest 50 per wallet are shown to the owner.
    """
    __tablename__ = "spins"
    __table_args__ = (
        Index("ix_spins_wallet_created", "wallet_address", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    wallet_address: Mapped[str] = mapped_column(
        ForeignKey("players.wallet_address", ondelete="CASCADE"),
        index=True,
    )

    symbols: Mapped[list[str]] = mapped_column(JSON)  # ["7", "🍒", "🍋"]
    points_earned: Mapped[int] = mapped_column(Integer, default=0)
    match_type: Mapped[str] = mapped_column(String(64))
    is_jackpot: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    # client-supplied, stored for audit only (never used for authorization)
    signature: Mapped[str | None] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
