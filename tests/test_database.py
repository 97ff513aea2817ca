"""
LevelBot - Database Tests
=========================

Tests for the database layer to ensure data integrity.
"""

import sqlite3

import pytest

from src.core.database import StoreError
from src.core.database.base import wraps_store_errors


class TestLevels:
    """Tests for levels operations."""

    def test_find_missing(self, test_db):
        assert test_db.find_level("1") is None

    def test_upsert_inserts(self, test_db):
        test_db.upsert_level("1", 40, 2)
        assert test_db.find_level("1") == {"user_id": "1", "xp": 40, "level": 2}

    def test_upsert_updates(self, test_db):
        test_db.upsert_level("1", 40, 2)
        test_db.upsert_level("1", 5, 3)
        assert test_db.find_level("1") == {"user_id": "1", "xp": 5, "level": 3}
        assert test_db.count_levels() == 1

    def test_int_ids_stored_as_text(self, test_db):
        test_db.upsert_level(123, 1, 1)
        assert test_db.find_level("123")["user_id"] == "123"

    def test_top_levels_order_and_ties(self, test_db):
        test_db.upsert_level("b", 10, 2)
        test_db.upsert_level("a", 10, 2)
        test_db.upsert_level("c", 90, 1)
        test_db.upsert_level("d", 0, 4)
        top = test_db.find_top_levels(10)
        assert [r["user_id"] for r in top] == ["d", "a", "b", "c"]

    def test_top_levels_limit(self, test_db):
        for i in range(5):
            test_db.upsert_level(str(i), i, 1)
        assert len(test_db.find_top_levels(3)) == 3

    def test_negative_xp_rejected(self, test_db):
        with pytest.raises(StoreError):
            test_db.upsert_level("1", -1, 1)
        assert test_db.find_level("1") is None

    def test_zero_level_rejected(self, test_db):
        with pytest.raises(StoreError):
            test_db.upsert_level("1", 0, 0)


class TestAfk:
    """Tests for AFK operations."""

    def test_set_and_get(self, test_db):
        test_db.set_afk("1", "Lunch", 1000)
        assert test_db.get_afk("1") == {"user_id": "1", "status": "Lunch", "since_ms": 1000}

    def test_set_replaces(self, test_db):
        test_db.set_afk("1", "Lunch", 1000)
        test_db.set_afk("1", "Sleep", 2000)
        assert test_db.get_afk("1")["status"] == "Sleep"

    def test_pop(self, test_db):
        test_db.set_afk("1", "Lunch", 1000)
        assert test_db.pop_afk("1")["status"] == "Lunch"
        assert test_db.get_afk("1") is None
        assert test_db.pop_afk("1") is None


class TestSingleton:
    """Tests for DatabaseManager lifecycle."""

    def test_get_db_returns_same_instance(self, test_db):
        from src.core.database import get_db
        assert get_db() is test_db

    def test_reconnects_after_close(self, test_db):
        test_db.upsert_level("1", 1, 1)
        test_db.close()
        assert test_db.find_level("1") == {"user_id": "1", "xp": 1, "level": 1}


def test_wraps_store_errors_chains_cause():
    @wraps_store_errors("boom")
    def failing():
        raise sqlite3.OperationalError("database is locked")

    with pytest.raises(StoreError) as exc_info:
        failing()
    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
    assert "boom" in str(exc_info.value)
