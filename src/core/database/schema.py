"""
LevelBot - Database Schema Module
=================================

Table definitions.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """
        Initialize all database tables.

        DESIGN: Tables are created if not exist, allowing safe restarts.
        """
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Levels Table
        # DESIGN: One row per user. xp is progress inside the current level.
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS levels (
                user_id TEXT PRIMARY KEY,
                xp INTEGER NOT NULL DEFAULT 0 CHECK(xp >= 0),
                level INTEGER NOT NULL DEFAULT 1 CHECK(level >= 1),
                updated_at REAL NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_levels_rank
            ON levels(level DESC, xp DESC)
        """)

        # -----------------------------------------------------------------
        # AFK Status Table (replaces afk.json)
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS afk_status (
                user_id TEXT PRIMARY KEY,
                status TEXT NOT NULL,
                since_ms INTEGER NOT NULL
            )
        """)

        conn.commit()


__all__ = ["SchemaMixin"]
