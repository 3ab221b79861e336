# slotbot/services/reels.py
from __future__ import annotations

import enum
import random
from typing import Protocol


class Symbol(str, enum.Enum):
    SEVEN = "7"  # lucky mark
    CHERRY = "🍒"
    LEMON = "🍋"
    BELL = "🔔"
    STAR = "⭐"
    CLOVER = "🍀"
    DIAMOND = "💎"


LUCKY_SYMBOL = Symbol.SEVEN

# Draw order matters: the cumulative walk below goes through this dict in order.
SYMBOL_WEIGHTS: dict[Symbol, int] = {
    Symbol.CHERRY: 20,  # most common
    Symbol.LEMON: 18,
    Symbol.BELL: 15,
    Symbol.STAR: 12,
    Symbol.CLOVER: 10,
    Symbol.DIAMOND: 8,
    Symbol.SEVEN: 17,
}
TOTAL_WEIGHT = sum(SYMBOL_WEIGHTS.values())

FALLBACK_SYMBOL = Symbol.CHERRY

# chance that a pair on reels 1+2 is completed on reel 3
NEAR_MISS_CHANCE = 0.15

Reels = tuple[Symbol, Symbol, Symbol]


class RandomSource(Protocol):
    def random(self) -> float: ...


_system_rng = random.SystemRandom()


def draw_symbol(rng: RandomSource) -> Symbol:
    remaining = rng.random() * TOTAL_WEIGHT
    for symbol, weight in SYMBOL_WEIGHTS.items():
        remaining -= weight
        if remaining <= 0:
            return symbol

    # only reachable through float exhaustion
    return FALLBACK_SYMBOL


def generate(rng: RandomSource | None = None) -> Reels:
    """
    Server-side reel outcome.

    Reels 1 and 2 are independent weighted draws. Reel 3 copies them with
    NEAR_MISS_CHANCE when they already match, otherwise it is drawn the same
    way as the first two.
    """
    rng = rng or _system_rng

    first = draw_symbol(rng)
    second = draw_symbol(rng)

    if first == second and rng.random() < NEAR_MISS_CHANCE:
        return (first, second, first)

    return (first, second, draw_symbol(rng))
