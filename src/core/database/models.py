"""
LevelBot - Database Type Definitions
====================================

TypedDict definitions for database records.
"""

from typing import TypedDict


class LevelRecord(TypedDict):
    """Type for rows of the levels table."""
    user_id: str
    xp: int
    level: int


class AfkRecord(TypedDict):
    """Type for rows of the afk_status table."""
    user_id: str
    status: str
    since_ms: int


__all__ = ["LevelRecord", "AfkRecord"]
