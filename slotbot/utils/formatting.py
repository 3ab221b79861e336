# slotbot/utils/formatting.py
from __future__ import annotations

from html import escape
from typing import Any

from slotbot.utils.wallet import short_wallet

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}
HISTORY_PREVIEW = 5


def render_failure(resp: Any) -> str:
    """HTML for a failed ApiResponse envelope."""
    lines = [f"⚠️ <b>{escape(resp.error or 'Error')}</b>"]
    if resp.message:
        lines.append(escape(resp.message))
    return "\n".join(lines)


def render_reels(symbols: list[str]) -> str:
    return " | ".join(symbols)


def render_spin(data: dict[str, Any]) -> str:
    reels = render_reels(data["symbols"])
    if data["isJackpot"]:
        head = "💥 <b>JACKPOT!</b>"
    elif data["points"] > 0:
        head = f"🎉 <b>+{data['points']} points</b>"
    else:
        head = "😅 <b>No luck this time.</b>"

    return (
        f"🎰 [ {reels} ]\n"
        f"{head}\n"
        f"<i>{escape(data['matchType'])}</i>"
    )


def render_state(address: str, data: dict[str, Any]) -> str:
    lines = [
        f"👛 <b>{escape(short_wallet(address))}</b>",
        f"• total points: <b>{data['totalPoints']}</b>",
        f"• spins today (UTC): <b>{data['spinsToday']}</b>",
        f"• highest win: <b>{data['highestWin']}</b>",
        f"• jackpots: <b>{data['jackpotCount']}</b>",
        f"• last spin: {data['lastSpinDate'] or '—'}",
    ]

    history = data.get("spinHistory") or []
    if history:
        lines.append("")
        lines.append("🕘 <b>Recent spins</b>")
        for spin in history[:HISTORY_PREVIEW]:
            lines.append(f"{render_reels(spin['symbols'])} → {spin['points']}")

    return "\n".join(lines)


def render_leaderboard(data: dict[str, Any], address: str | None = None) -> str:
    lines = ["🏆 <b>Leaderboard</b>", ""]

    entries = data.get("entries") or []
    if not entries:
        lines.append("ℹ️ No players ranked yet.")
    for row in entries:
        medal = MEDALS.get(row["rank"], f"{row['rank']}.")
        you = " <b>(you)</b>" if address and row["address"] == address else ""
        jackpots = f" · 💥{row['jackpots']}" if row["jackpots"] else ""
        lines.append(
            f"{medal} {escape(short_wallet(row['address']))} — <b>{row['points']}</b> pts{jackpots}{you}"
        )

    if address:
        lines.append("")
        rank = data.get("userRank")
        if rank is None:
            lines.append("📍 <b>Your rank:</b> unranked")
        else:
            lines.append(f"📍 <b>Your rank:</b> {rank} / {data.get('total', 0)}")

    return "\n".join(lines)
