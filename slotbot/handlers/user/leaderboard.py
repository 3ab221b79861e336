from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from slotbot.services.game_api import GameApi
from slotbot.utils.formatting import render_leaderboard
from slotbot.utils.reply import reply_envelope
from slotbot.utils.wallet import try_normalize_wallet

router = Router(name="leaderboard")


def parse_leaderboard_args(raw: str | None) -> tuple[str | None, str | None, str | None]:
    """
    "/leaderboard [limit] [offset] [wallet]".
    A 0x… token is taken as the wallet wherever it appears.
    """
    limit: str | None = None
    offset: str | None = None
    wallet: str | None = None

    for token in (raw or "").split():
        if token.lower().startswith("0x"):
            wallet = token
        elif limit is None:
            limit = token
        elif offset is None:
            offset = token

    return limit, offset, wallet


@router.message(Command("leaderboard", "top"))
async def leaderboard_cmd(message: Message, command: CommandObject, game: GameApi) -> None:
    limit, offset, address = parse_leaderboard_args(command.args)

    resp = await game.get_leaderboard(limit=limit, offset=offset, address=address)
    wallet = try_normalize_wallet(address)
    await reply_envelope(message, resp, lambda data: render_leaderboard(data, wallet))
