from __future__ import annotations

from conftest import WALLET_A, WALLET_B

from slotbot.handlers.user.leaderboard import parse_leaderboard_args
from slotbot.services.game_api import ApiResponse
from slotbot.utils.formatting import render_failure, render_leaderboard, render_spin, render_state


def test_leaderboard_args():
    assert parse_leaderboard_args(None) == (None, None, None)
    assert parse_leaderboard_args("10") == ("10", None, None)
    assert parse_leaderboard_args(f"10 20 {WALLET_A}") == ("10", "20", WALLET_A)
    assert parse_leaderboard_args(f"{WALLET_A} 5") == ("5", None, WALLET_A)


def test_render_spin_jackpot():
    text = render_spin({"symbols": ["7", "7", "7"], "points": 777, "matchType": "7-7-7", "isJackpot": True})
    assert "JACKPOT" in text
    assert "7 | 7 | 7" in text


def test_render_spin_miss():
    text = render_spin({"symbols": ["🍒", "🍋", "🔔"], "points": 0, "matchType": "No match", "isJackpot": False})
    assert "No luck" in text


def test_render_state_lists_recent_spins():
    data = {
        "totalPoints": 27,
        "spinsToday": 2,
        "lastSpinDate": "2026-10-18",
        "spinHistory": [
            {"symbols": ["7", "7", "🍒"], "points": 25, "matchType": "7-7 (first two)", "isJackpot": False},
        ],
        "highestWin": 25,
        "jackpotCount": 0,
    }
    text = render_state(WALLET_A, data)
    assert "<b>27</b>" in text
    assert "7 | 7 | 🍒 → 25" in text


def test_render_leaderboard_marks_caller():
    data = {
        "entries": [
            {"address": WALLET_B, "points": 50, "rank": 1, "jackpots": 0},
            {"address": WALLET_A, "points": 10, "rank": 2, "jackpots": 1},
        ],
        "userRank": 2,
        "total": 2,
    }
    text = render_leaderboard(data, WALLET_A)
    assert "🥇" in text
    assert "(you)" in text
    assert "Your rank:</b> 2 / 2" in text


def test_render_failure_escapes_html():
    text = render_failure(ApiResponse.fail("Validation error", "limit: <script>"))
    assert "&lt;script&gt;" in text
