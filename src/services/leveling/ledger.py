"""
LevelBot - XP Ledger
====================

Per-user experience/level records and the level-up arithmetic.

DESIGN:
    An entry stores only the XP earned inside the current level, so the
    invariant 0 <= xp < threshold(level) holds after every award. Total
    XP is derived on demand for ranking and never stored.

    award() is a read-modify-write against the store. It is serialized
    per user ID with a lock so concurrent awards for one user cannot
    interleave; different users never block each other.
"""

import math
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

from src.core.logger import logger
from src.core.constants import BASE_LEVEL, THRESHOLD_BASE, THRESHOLD_EXPONENT
from src.core.database.models import LevelRecord


# =============================================================================
# Level Curve
# =============================================================================

def threshold(level: int) -> int:
    """
    XP required to advance from `level` to the next level.

    Args:
        level: Current level (>= 1).

    Returns:
        floor(100 * level ** 1.5), strictly increasing in level.
    """
    return math.floor(THRESHOLD_BASE * level ** THRESHOLD_EXPONENT)


def xp_to_reach(level: int) -> int:
    """Sum of thresholds for every level below `level`."""
    return sum(threshold(lvl) for lvl in range(BASE_LEVEL, level))


# =============================================================================
# Ledger Entry
# =============================================================================

@dataclass(frozen=True)
class LedgerEntry:
    """Immutable snapshot of a user's ledger record."""

    user_id: str
    xp: int = 0
    level: int = BASE_LEVEL

    @property
    def threshold(self) -> int:
        """XP needed to finish the current level."""
        return threshold(self.level)

    @property
    def total_xp(self) -> int:
        """XP earned across all levels."""
        return total_xp(self)

    @classmethod
    def from_record(cls, record: LevelRecord) -> "LedgerEntry":
        return cls(user_id=str(record["user_id"]), xp=record["xp"], level=record["level"])


def total_xp(entry: LedgerEntry) -> int:
    """
    Derive lifetime XP from (level, xp).

    Args:
        entry: Ledger entry.

    Returns:
        entry.xp + sum(threshold(l) for l in 1..level-1).
    """
    return entry.xp + xp_to_reach(entry.level)


# =============================================================================
# Store Interface
# =============================================================================

class LevelStore(Protocol):
    """Keyed upsert-by-user store the ledger persists through."""

    def find_level(self, user_id: str) -> Optional[LevelRecord]: ...

    def upsert_level(self, user_id: str, xp: int, level: int) -> None: ...

    def find_top_levels(self, limit: int = 10) -> List[LevelRecord]: ...


# =============================================================================
# XP Ledger
# =============================================================================

class XPLedger:
    """
    Sole writer of ledger entries.

    Store failures propagate as StoreError; nothing is retried here.
    """

    def __init__(self, store: LevelStore) -> None:
        self.store = store
        self._user_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._user_locks[user_id] = lock
            return lock

    # =========================================================================
    # Read
    # =========================================================================

    def get_or_create(self, user_id: str) -> LedgerEntry:
        """
        Return the user's entry, creating a level 1 / 0 XP record if absent.

        Args:
            user_id: Discord user ID as string.

        Returns:
            Snapshot of the stored entry.

        Raises:
            StoreError: If the store cannot be read or written.
        """
        user_id = str(user_id)
        record = self.store.find_level(user_id)
        if record is not None:
            return LedgerEntry.from_record(record)

        entry = LedgerEntry(user_id=user_id)
        self.store.upsert_level(user_id, entry.xp, entry.level)
        logger.debug(f"Ledger entry created for {user_id}")
        return entry

    # =========================================================================
    # Write
    # =========================================================================

    def award(self, user_id: str, amount: int) -> Optional[int]:
        """
        Credit XP and apply every level boundary it crosses.

        One award can cross several boundaries; only the final level is
        reported and intermediate levels are not announced separately.

        Args:
            user_id: Discord user ID as string.
            amount: XP to add, must be positive.

        Returns:
            The final level reached if at least one boundary was crossed,
            otherwise None.

        Raises:
            ValueError: If amount is not a positive integer.
            StoreError: If the store cannot be read or written.
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValueError(f"XP amount must be a positive integer, got {amount!r}")

        user_id = str(user_id)
        with self._lock_for(user_id):
            entry = self.get_or_create(user_id)
            xp = entry.xp + amount
            level = entry.level
            leveled_up = False

            while xp >= threshold(level):
                xp -= threshold(level)
                level += 1
                leveled_up = True

            self.store.upsert_level(user_id, xp, level)

        if leveled_up:
            logger.tree("Level Up", [
                ("User ID", user_id),
                ("From", str(entry.level)),
                ("To", str(level)),
                ("XP", f"{xp} / {threshold(level)}"),
            ], emoji="🎉")
            return level
        return None


__all__ = [
    "LedgerEntry",
    "LevelStore",
    "XPLedger",
    "threshold",
    "total_xp",
    "xp_to_reach",
]
