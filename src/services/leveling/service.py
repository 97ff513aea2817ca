"""
LevelBot - Leveling Service
===========================

Wires the ledger, cooldown gate and leaderboard into one owned object.

DESIGN:
    The bot creates a single LevelingService in its constructor and
    cogs reach it through `bot.leveling`. No module-level mutable state.
"""

import asyncio
import random
from typing import Iterable, Optional, Tuple

from src.core.constants import DEFAULT_COOLDOWN_MS, MS_PER_SECOND
from src.services.leveling.cooldown import CooldownGate
from src.services.leveling.leaderboard import LeaderboardQuery
from src.services.leveling.ledger import LedgerEntry, LevelStore, XPLedger
from src.services.leveling.rank_card import render_rank_card


# =============================================================================
# Leveling Service
# =============================================================================

class LevelingService:
    """
    Per-process leveling state.

    Attributes:
        ledger: Sole writer of XP/level records.
        gate: Per-user award cooldown.
        leaderboard: Ranking queries.
        xp_range: Inclusive (min, max) XP per message.
        excluded_ids: User IDs that never earn XP.
    """

    def __init__(
        self,
        store: LevelStore,
        cooldown_seconds: Optional[int] = None,
        xp_range: Tuple[int, int] = (5, 14),
        excluded_ids: Iterable[int] = (),
        rng: Optional[random.Random] = None,
    ) -> None:
        window_ms = DEFAULT_COOLDOWN_MS if cooldown_seconds is None else cooldown_seconds * MS_PER_SECOND

        self.ledger = XPLedger(store)
        self.gate = CooldownGate(window_ms)
        self.leaderboard = LeaderboardQuery(store)
        self.xp_range = xp_range
        self.excluded_ids = {str(uid) for uid in excluded_ids}
        self._rng = rng or random.Random()

    # =========================================================================
    # Message Flow
    # =========================================================================

    def roll_xp(self) -> int:
        """Random per-message XP inside xp_range (inclusive)."""
        low, high = self.xp_range
        return self._rng.randint(low, high)

    def process_message(self, user_id, now_ms: int, is_bot: bool = False) -> Optional[int]:
        """
        Handle one chat message for XP purposes.

        Args:
            user_id: Author ID.
            now_ms: Message time in milliseconds.
            is_bot: Whether the author is a bot.

        Returns:
            New level on level-up, otherwise None.

        Raises:
            StoreError: If the award could not be persisted.
        """
        user_id = str(user_id)
        if is_bot or user_id in self.excluded_ids:
            return None
        if not self.gate.try_consume(user_id, now_ms):
            return None
        return self.ledger.award(user_id, self.roll_xp())

    @staticmethod
    def level_up_message(username: str, level: int) -> str:
        return f"{username} leveled up to **{level}**! 🎉"

    # =========================================================================
    # Rank Card
    # =========================================================================

    async def render_card(
        self,
        display_name: str,
        avatar_bytes: Optional[bytes],
        entry: LedgerEntry,
    ) -> bytes:
        """Render a rank card off the event loop."""
        return await asyncio.to_thread(render_rank_card, display_name, avatar_bytes, entry)


__all__ = ["LevelingService"]
