"""
LevelBot - AFK Operations Mixin
===============================

Persistence for AFK statuses.
"""

from typing import TYPE_CHECKING, Optional

from src.core.database.base import wraps_store_errors
from src.core.database.models import AfkRecord

if TYPE_CHECKING:
    from .manager import DatabaseManager


class AfkMixin:
    """Mixin for AFK status operations."""

    @wraps_store_errors("set_afk")
    def set_afk(self: "DatabaseManager", user_id: str, status: str, since_ms: int) -> None:
        """Store (or replace) a user's AFK status."""
        self.execute(
            "INSERT OR REPLACE INTO afk_status (user_id, status, since_ms) VALUES (?, ?, ?)",
            (str(user_id), status, since_ms)
        )

    @wraps_store_errors("get_afk")
    def get_afk(self: "DatabaseManager", user_id: str) -> Optional[AfkRecord]:
        """Get a user's AFK status, or None."""
        row = self.fetchone(
            "SELECT user_id, status, since_ms FROM afk_status WHERE user_id = ?",
            (str(user_id),)
        )
        if row is None:
            return None
        return AfkRecord(user_id=row["user_id"], status=row["status"], since_ms=row["since_ms"])

    @wraps_store_errors("pop_afk")
    def pop_afk(self: "DatabaseManager", user_id: str) -> Optional[AfkRecord]:
        """
        Remove and return a user's AFK status.

        Returns:
            The removed record, or None if the user was not AFK.
        """
        with self.transaction() as tx:
            tx.execute(
                "SELECT user_id, status, since_ms FROM afk_status WHERE user_id = ?",
                (str(user_id),)
            )
            row = tx.fetchone()
            if row is None:
                return None
            tx.execute("DELETE FROM afk_status WHERE user_id = ?", (str(user_id),))
        return AfkRecord(user_id=row["user_id"], status=row["status"], since_ms=row["since_ms"])


__all__ = ["AfkMixin"]
