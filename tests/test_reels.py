from __future__ import annotations

import random
from collections import Counter

from conftest import ScriptedRng

from slotbot.services.reels import (
    FALLBACK_SYMBOL,
    NEAR_MISS_CHANCE,
    SYMBOL_WEIGHTS,
    TOTAL_WEIGHT,
    Symbol,
    draw_symbol,
    generate,
)


def test_weights_cover_every_symbol_and_sum_to_100():
    assert set(SYMBOL_WEIGHTS) == set(Symbol)
    assert TOTAL_WEIGHT == 100
    assert all(w > 0 for w in SYMBOL_WEIGHTS.values())


def test_draw_frequencies_follow_weights():
    rng = random.Random(1234)
    n = 100_000
    counts = Counter(draw_symbol(rng) for _ in range(n))

    assert set(counts) == set(Symbol)
    for symbol, weight in SYMBOL_WEIGHTS.items():
        assert abs(counts[symbol] / n - weight / TOTAL_WEIGHT) < 0.01, symbol


def test_first_reel_of_generate_follows_weights():
    rng = random.Random(99)
    n = 100_000
    counts = Counter(generate(rng)[0] for _ in range(n))

    for symbol, weight in SYMBOL_WEIGHTS.items():
        assert abs(counts[symbol] / n - weight / TOTAL_WEIGHT) < 0.01, symbol


def test_cumulative_walk_order():
    # remainder 0 -> first symbol in the table, 99 -> last one
    assert draw_symbol(ScriptedRng(0.0)) is Symbol.CHERRY
    assert draw_symbol(ScriptedRng(0.25)) is Symbol.LEMON
    assert draw_symbol(ScriptedRng(0.99)) is Symbol.SEVEN


def test_exhausted_walk_falls_back_to_most_common():
    assert draw_symbol(ScriptedRng(1.5)) is FALLBACK_SYMBOL


def test_pair_is_completed_when_boost_fires():
    # cherry, cherry, then 0.10 < 0.15 -> forced third cherry
    assert generate(ScriptedRng(0.0, 0.0, 0.10)) == (Symbol.CHERRY,) * 3


def test_pair_falls_through_to_independent_draw():
    # boost roll 0.5 misses; third reel drawn from 0.99 -> seven
    assert generate(ScriptedRng(0.0, 0.0, 0.5, 0.99)) == (Symbol.CHERRY, Symbol.CHERRY, Symbol.SEVEN)


def test_no_boost_roll_when_first_two_differ():
    # only three random() calls are consumed: the third value is the draw itself
    assert generate(ScriptedRng(0.99, 0.0, 0.05)) == (Symbol.SEVEN, Symbol.CHERRY, Symbol.CHERRY)


def test_near_miss_rate_matches_bias():
    rng = random.Random(7)
    pairs = 0
    completed = 0
    for _ in range(200_000):
        s1, s2, s3 = generate(rng)
        if s1 == s2:
            pairs += 1
            completed += s3 == s1

    # P(third matches | pair) = boost + (1 - boost) * E[w/100 | pair]
    sq = sum(w * w for w in SYMBOL_WEIGHTS.values())
    cube = sum(w ** 3 for w in SYMBOL_WEIGHTS.values())
    expected = NEAR_MISS_CHANCE + (1 - NEAR_MISS_CHANCE) * (cube / sq) / TOTAL_WEIGHT

    assert pairs > 20_000
    assert abs(completed / pairs - expected) < 0.015
