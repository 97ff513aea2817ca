"""
LevelBot - Levels Operations Mixin
==================================

Keyed find/upsert/top-N operations backing the XP ledger.
"""

import time
from typing import TYPE_CHECKING, List, Optional

from src.core.database.base import wraps_store_errors
from src.core.database.models import LevelRecord

if TYPE_CHECKING:
    from .manager import DatabaseManager


class LevelsMixin:
    """Mixin for ledger persistence."""

    @wraps_store_errors("find_level")
    def find_level(self: "DatabaseManager", user_id: str) -> Optional[LevelRecord]:
        """
        Get a user's level record.

        Args:
            user_id: Discord user ID as string.

        Returns:
            LevelRecord or None if the user has no record.
        """
        row = self.fetchone(
            "SELECT user_id, xp, level FROM levels WHERE user_id = ?",
            (str(user_id),)
        )
        if row is None:
            return None
        return LevelRecord(user_id=row["user_id"], xp=row["xp"], level=row["level"])

    @wraps_store_errors("upsert_level")
    def upsert_level(self: "DatabaseManager", user_id: str, xp: int, level: int) -> None:
        """
        Insert or replace a user's xp/level in one statement.

        Args:
            user_id: Discord user ID as string.
            xp: XP inside the current level.
            level: Current level.
        """
        self.execute(
            """INSERT INTO levels (user_id, xp, level, updated_at)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(user_id) DO UPDATE SET
                   xp = excluded.xp,
                   level = excluded.level,
                   updated_at = excluded.updated_at""",
            (str(user_id), xp, level, time.time())
        )

    @wraps_store_errors("find_top_levels")
    def find_top_levels(self: "DatabaseManager", limit: int = 10) -> List[LevelRecord]:
        """
        Get the highest ranked records.

        Args:
            limit: Maximum rows to return.

        Returns:
            Records ordered by level, then xp, both descending.
        """
        rows = self.fetchall(
            """SELECT user_id, xp, level FROM levels
               ORDER BY level DESC, xp DESC, user_id ASC
               LIMIT ?""",
            (limit,)
        )
        return [LevelRecord(user_id=r["user_id"], xp=r["xp"], level=r["level"]) for r in rows]

    @wraps_store_errors("count_levels")
    def count_levels(self: "DatabaseManager") -> int:
        """Number of users with a ledger entry."""
        row = self.fetchone("SELECT COUNT(*) AS total FROM levels")
        return row["total"] if row else 0


__all__ = ["LevelsMixin"]
