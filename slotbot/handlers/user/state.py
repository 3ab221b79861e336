# slotbot/handlers/user/state.py
from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from slotbot.services.game_api import GameApi
from slotbot.utils.formatting import render_state
from slotbot.utils.reply import reply_envelope
from slotbot.utils.wallet import try_normalize_wallet

router = Router(name="state")


@router.message(Command("state", "status"))
async def state_cmd(message: Message, command: CommandObject, game: GameApi) -> None:
    address = (command.args or "").strip() or None

    resp = await game.get_state(address)
    wallet = try_normalize_wallet(address) or ""
    await reply_envelope(message, resp, lambda data: render_state(wallet, data))
