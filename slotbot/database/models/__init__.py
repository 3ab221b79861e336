from .player import PlayerAccount
from .spin import SpinHistory
from .leaderboard import LeaderboardEntry

__all__ = [
    "PlayerAccount",
    "SpinHistory",
    "LeaderboardEntry",
]
