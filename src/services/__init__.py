"""
LevelBot - Services Package
===========================

Stateful services owned by the bot instance.

DESIGN:
    Services are plain classes created once in LevelBot.__init__ and
    reached by cogs through the bot. They hold no module-level state.

Available Services:
    LevelingService: XP ledger, cooldown gate, rank cards, leaderboard
    AfkService: AFK statuses
"""

from .afk_service import AfkService
from .leveling import LevelingService

__all__ = [
    "AfkService",
    "LevelingService",
]
