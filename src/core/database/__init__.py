"""
LevelBot - Database Module
==========================

Centralized database management for LevelBot.
"""

from src.core.database.manager import (
    DatabaseManager,
    get_db,
    DATA_DIR,
    DB_PATH,
)
from src.core.database.base import StoreError
from src.core.database.models import LevelRecord, AfkRecord

__all__ = [
    # Main interface
    "DatabaseManager",
    "get_db",
    "DATA_DIR",
    "DB_PATH",

    # Errors
    "StoreError",

    # Type definitions
    "LevelRecord",
    "AfkRecord",
]
