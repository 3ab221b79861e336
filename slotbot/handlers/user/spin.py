# slotbot/handlers/user/spin.py
from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from slotbot.services.game_api import GameApi
from slotbot.utils.formatting import render_spin
from slotbot.utils.reply import reply_envelope

router = Router(name="spin")


@router.message(Command("spin"))
async def spin_cmd(message: Message, command: CommandObject, game: GameApi) -> None:
    # /spin <wallet> [signature]
    args = (command.args or "").split()
    address = args[0] if args else None
    signature = args[1] if len(args) > 1 else None

    resp = await game.spin(address, signature=signature)
    await reply_envelope(message, resp, render_spin)
