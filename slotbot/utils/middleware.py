# slotbot/utils/middleware.py
from __future__ import annotations

import logging
import time
from collections import deque
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from slotbot.services.game_api import ApiResponse
from slotbot.utils.formatting import render_failure
from slotbot.utils.wallet import try_normalize_wallet

log = logging.getLogger(__name__)

KeyFunc = Callable[[TelegramObject], "str | None"]


class SlidingWindowLimiter:
    """At most `max_hits` accepted hits per key within any `window_seconds` span."""

    def __init__(
        self,
        max_hits: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_hits = max_hits
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._hits)

    def _prune(self, key: str, now: float) -> deque[float] | None:
        hits = self._hits.get(key)
        if hits is None:
            return None
        while hits and now - hits[0] >= self.window_seconds:
            hits.popleft()
        if not hits:
            del self._hits[key]
            return None
        return hits

    def _sweep(self, now: float) -> None:
        # drop idle keys at most once per window
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        for key in list(self._hits):
            self._prune(key, now)

    def hit(self, key: str) -> bool:
        """Records a hit and returns True, or returns False if the key is over its limit."""
        if self.max_hits <= 0 or self.window_seconds <= 0:
            return True

        now = self._clock()
        self._sweep(now)
        hits = self._prune(key, now)
        if hits is not None and len(hits) >= self.max_hits:
            return False

        if hits is None:
            hits = self._hits[key] = deque()
        hits.append(now)
        return True

    def retry_after(self, key: str) -> float:
        now = self._clock()
        hits = self._prune(key, now)
        if hits is None or len(hits) < self.max_hits:
            return 0.0
        return max(0.0, self.window_seconds - (now - hits[0]))


# -------------------------------------------------
# Key functions
# -------------------------------------------------

def user_key(event: TelegramObject) -> str | None:
    u = getattr(event, "from_user", None)
    return f"user:{u.id}" if u else None


def spin_key(event: TelegramObject) -> str | None:
    """
    Spins are throttled per wallet: "/spin 0xabc… [sig]".
    Falls back to the Telegram user when the command carries no valid wallet.
    """
    text = getattr(event, "text", None) or ""
    parts = text.split()
    if len(parts) >= 2:
        wallet = try_normalize_wallet(parts[1])
        if wallet:
            return f"wallet:{wallet}"
    return user_key(event)


class ThrottleMiddleware(BaseMiddleware):
    """
    Rejects events over the limiter's budget before the handler runs.
    Rejected events touch no state; the sender gets a "wait" reply.
    """

    def __init__(
        self,
        limiter: SlidingWindowLimiter,
        *,
        key_func: KeyFunc = user_key,
        error: str = "Too many requests",
        message: str = "Please wait before making another request",
    ) -> None:
        self.limiter = limiter
        self.key_func = key_func
        self.error = error
        self.message = message

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        key = self.key_func(event)
        if key is None or self.limiter.hit(key):
            return await handler(event, data)

        log.info("Throttled %s (retry in %.1fs)", key, self.limiter.retry_after(key))
        answer = getattr(event, "answer", None)
        if answer is not None:
            await answer(
                render_failure(ApiResponse.fail(self.error, self.message)),
                parse_mode="HTML",
            )
        return None
