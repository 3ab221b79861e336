# slotbot/services/payout.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from slotbot.services.reels import LUCKY_SYMBOL, Reels, Symbol, generate, RandomSource


PAYOUTS: dict[str, int] = {
    "7-7-7": 777,
    "💎-💎-💎": 200,
    "🍀-🍀-🍀": 100,
    "⭐-⭐-⭐": 75,
    "🔔-🔔-🔔": 50,
    "🍋-🍋-🍋": 30,
    "🍒-🍒-🍒": 20,
    "7-7": 25,
    "💎-💎": 15,
    "🍀-🍀": 10,
    "⭐-⭐": 8,
    "🔔-🔔": 5,
    "🍋-🍋": 3,
    "🍒-🍒": 2,
    "7": 5,
    "none": 0,
}


@dataclass(frozen=True, slots=True)
class PayoutResult:
    points: int
    match_type: str


def _key(*symbols: Symbol) -> str:
    return "-".join(s.value for s in symbols)


def resolve(symbols: Sequence[Symbol]) -> PayoutResult:
    """
    First matching rule wins:
    triple, first two, last two, first & last, single lucky 7, nothing.
    """
    s1, s2, s3 = (Symbol(s) for s in symbols)

    if s1 == s2 == s3:
        key = _key(s1, s2, s3)
        return PayoutResult(points=PAYOUTS.get(key, 0), match_type=key)

    if s1 == s2:
        key = _key(s1, s2)
        return PayoutResult(points=PAYOUTS.get(key, 0), match_type=f"{key} (first two)")
    if s2 == s3:
        key = _key(s2, s3)
        return PayoutResult(points=PAYOUTS.get(key, 0), match_type=f"{key} (last two)")
    if s1 == s3:
        key = _key(s1, s3)
        return PayoutResult(points=PAYOUTS.get(key, 0), match_type=f"{key} (first & last)")

    if LUCKY_SYMBOL in (s1, s2, s3):
        return PayoutResult(points=PAYOUTS[LUCKY_SYMBOL.value], match_type="Single 7")

    return PayoutResult(points=PAYOUTS["none"], match_type="No match")


def is_jackpot(symbols: Sequence[Symbol]) -> bool:
    return len(symbols) == 3 and all(Symbol(s) == LUCKY_SYMBOL for s in symbols)


@dataclass(frozen=True, slots=True)
class SpinOutcome:
    symbols: Reels
    points: int
    match_type: str
    is_jackpot: bool

    @classmethod
    def from_symbols(cls, symbols: Sequence[Symbol | str]) -> "SpinOutcome":
        reels: Reels = tuple(Symbol(s) for s in symbols)  # type: ignore[assignment]
        if len(reels) != 3:
            raise ValueError(f"expected 3 symbols, got {len(reels)}")

        payout = resolve(reels)
        return cls(
            symbols=reels,
            points=payout.points,
            match_type=payout.match_type,
            is_jackpot=is_jackpot(reels),
        )

    @classmethod
    def roll(cls, rng: RandomSource | None = None) -> "SpinOutcome":
        return cls.from_symbols(generate(rng))

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbols": [s.value for s in self.symbols],
            "points": self.points,
            "matchType": self.match_type,
            "isJackpot": self.is_jackpot,
        }
