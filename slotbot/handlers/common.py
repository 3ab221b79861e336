# slotbot/handlers/common.py
from __future__ import annotations

import logging

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import ErrorEvent, Message

from slotbot.services.game_api import GENERIC_ERROR_MESSAGE, GameApi

log = logging.getLogger(__name__)

router = Router(name="common")

HELP_TEXT = (
    "📌 Available commands:\n"
    "/spin &lt;wallet&gt; [signature] — spin the reels\n"
    "/state &lt;wallet&gt; — points, today's spins, recent history\n"
    "/leaderboard [limit] [offset] [wallet] — global ranking\n"
    "/health — service status\n"
    "/help — this message\n\n"
    "Wallets are 0x-prefixed 40-hex addresses."
)


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    await message.answer(
        "🎰 <b>Lucky Reels</b>\n\n"
        "Three reels, one lucky 7. Outcomes are rolled on the server.\n"
        "Use /help to see commands.",
        parse_mode="HTML",
    )


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT, parse_mode="HTML")


@router.message(Command("health"))
async def cmd_health(message: Message, game: GameApi) -> None:
    status = await game.health()
    icon = "✅" if status["database"] == "connected" else "❌"
    await message.answer(f"🩺 status: {status['status']}\n{icon} database: {status['database']}")


@router.errors()
async def on_error(event: ErrorEvent) -> bool:
    log.exception("Unhandled error while processing update", exc_info=event.exception)

    message = getattr(event.update, "message", None)
    if message is not None:
        try:
            await message.answer(f"⚠️ {GENERIC_ERROR_MESSAGE}")
        except Exception:
            log.exception("Failed to send error reply")
    return True
