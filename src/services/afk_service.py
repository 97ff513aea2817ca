"""
LevelBot - AFK Service
======================

Owned state object for AFK statuses, persisted through the database.

DESIGN:
    Writes go straight to sqlite, so there is no periodic flush and a
    restart keeps every status.
"""

from typing import Optional, Protocol

from src.core.logger import logger
from src.core.database.models import AfkRecord
from src.utils.duration import format_duration


DEFAULT_AFK_STATUS = "AFK"


class AfkStore(Protocol):
    def set_afk(self, user_id: str, status: str, since_ms: int) -> None: ...

    def get_afk(self, user_id: str) -> Optional[AfkRecord]: ...

    def pop_afk(self, user_id: str) -> Optional[AfkRecord]: ...


class AfkService:
    """Set, read and clear AFK statuses."""

    def __init__(self, store: AfkStore) -> None:
        self.store = store

    def set(self, user_id, status: str, now_ms: int) -> None:
        status = (status or "").strip() or DEFAULT_AFK_STATUS
        self.store.set_afk(str(user_id), status, now_ms)
        logger.tree("AFK Set", [
            ("User ID", str(user_id)),
            ("Status", status[:50]),
        ], emoji="💤")

    def get(self, user_id) -> Optional[AfkRecord]:
        return self.store.get_afk(str(user_id))

    def clear(self, user_id) -> Optional[AfkRecord]:
        """
        Remove a user's AFK status.

        Returns:
            The removed record, or None if the user was not AFK.
        """
        record = self.store.pop_afk(str(user_id))
        if record is not None:
            logger.tree("AFK Cleared", [
                ("User ID", str(user_id)),
                ("Status", record["status"][:50]),
            ], emoji="👋")
        return record

    # =========================================================================
    # Messages
    # =========================================================================

    @staticmethod
    def welcome_back_message(mention: str, record: AfkRecord, now_ms: int) -> str:
        duration = format_duration(now_ms - record["since_ms"])
        return f"Welcome back, {mention}! **{record['status']}** (for **{duration}**)."

    @staticmethod
    def mention_notice(username: str, record: AfkRecord, now_ms: int) -> str:
        duration = format_duration(now_ms - record["since_ms"])
        return f"{username} is currently AFK: **{record['status']}** (for **{duration}**)."


__all__ = ["AfkService", "DEFAULT_AFK_STATUS"]
