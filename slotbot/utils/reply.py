# slotbot/utils/reply.py
from __future__ import annotations

from typing import Any, Callable

from aiogram.types import Message

from slotbot.services.game_api import ApiResponse
from slotbot.utils.formatting import render_failure


async def reply_safe(message: Message, text: str, **kwargs) -> None:
    """
    Safe reply helper:
    - HTML by default (every renderer escapes user-controlled text)
    - no reply keyboard in groups
    """
    kwargs.setdefault("parse_mode", "HTML")
    if message.chat.type != "private":
        kwargs.setdefault("reply_markup", None)

    await message.answer(text, **kwargs)


async def reply_envelope(
    message: Message,
    resp: ApiResponse[Any],
    render: Callable[[Any], str],
) -> None:
    text = render(resp.data) if resp.success else render_failure(resp)
    await reply_safe(message, text)
