"""
LevelBot - Leaderboard Query
============================

Top-N ranking over the ledger plus display-name resolution.

DESIGN:
    Rows are ordered by level, then XP inside the level, both descending.
    The store already orders this way; the result is re-sorted with a
    stable sort so ordering never depends on store internals.

    Name resolution is delegated to a caller supplied coroutine. A failed
    lookup never drops a row; the row gets a fallback label instead.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Sequence, Tuple

from src.core.logger import logger
from src.services.leveling.ledger import LedgerEntry, LevelStore


# =============================================================================
# Errors
# =============================================================================

class IdentityLookupError(Exception):
    """Raised by name resolvers when a user ID cannot be resolved."""

    pass


NameResolver = Callable[[str], Awaitable[str]]


# =============================================================================
# Rows
# =============================================================================

@dataclass(frozen=True)
class LeaderboardRow:
    """One ranked ledger entry."""

    user_id: str
    level: int
    xp: int
    total_xp: int

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "LeaderboardRow":
        return cls(
            user_id=entry.user_id,
            level=entry.level,
            xp=entry.xp,
            total_xp=entry.total_xp,
        )


def fallback_label(user_id: str) -> str:
    """Label used when a user's name cannot be resolved."""
    return f"Unknown user: {user_id}"


# =============================================================================
# Query
# =============================================================================

class LeaderboardQuery:
    """Read-only ranking view over a level store."""

    def __init__(self, store: LevelStore) -> None:
        self.store = store

    def top_n(self, n: int = 10) -> List[LeaderboardRow]:
        """
        Get the n highest ranked users.

        Args:
            n: Maximum rows to return.

        Returns:
            Rows ordered by level desc, then xp desc.

        Raises:
            StoreError: If the store cannot be read.
        """
        if n <= 0:
            return []

        records = self.store.find_top_levels(n)
        rows = [LeaderboardRow.from_entry(LedgerEntry.from_record(r)) for r in records]
        rows.sort(key=lambda row: (-row.level, -row.xp))
        return rows[:n]

    async def resolve_names(
        self,
        rows: Sequence[LeaderboardRow],
        resolver: NameResolver,
    ) -> List[Tuple[LeaderboardRow, str]]:
        """
        Pair each row with a display name.

        Args:
            rows: Ranked rows from top_n().
            resolver: Coroutine mapping a user ID to a display name.

        Returns:
            (row, name) pairs in the same order; unresolvable users get
            the "Unknown user: {id}" label.
        """
        named: List[Tuple[LeaderboardRow, str]] = []
        for row in rows:
            try:
                name = await resolver(row.user_id)
            except IdentityLookupError as e:
                logger.warning("Identity Lookup Failed", [
                    ("User ID", row.user_id),
                    ("Error", str(e)[:50]),
                ])
                name = fallback_label(row.user_id)
            named.append((row, name))
        return named


__all__ = [
    "IdentityLookupError",
    "LeaderboardQuery",
    "LeaderboardRow",
    "NameResolver",
    "fallback_label",
]
