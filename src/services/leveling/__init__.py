"""
LevelBot - Leveling Package
===========================

XP ledger, cooldown gate, rank card renderer and leaderboard query.
"""

from .cooldown import CooldownGate, monotonic_ms
from .leaderboard import IdentityLookupError, LeaderboardQuery, LeaderboardRow
from .ledger import LedgerEntry, XPLedger, threshold, total_xp
from .rank_card import ImageDecodeError, render_rank_card
from .service import LevelingService

__all__ = [
    "CooldownGate",
    "IdentityLookupError",
    "ImageDecodeError",
    "LeaderboardQuery",
    "LeaderboardRow",
    "LedgerEntry",
    "LevelingService",
    "XPLedger",
    "monotonic_ms",
    "render_rank_card",
    "threshold",
    "total_xp",
]
