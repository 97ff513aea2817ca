"""
LevelBot - AFK Service Tests
============================
"""

from src.services.afk_service import AfkService


DAY_MS = 86_400_000


class TestAfkService:
    """Tests for AfkService."""

    def test_set_and_get(self, afk_service):
        afk_service.set(1, "Lunch", now_ms=1_000)
        assert afk_service.get(1) == {"user_id": "1", "status": "Lunch", "since_ms": 1_000}

    def test_blank_status_defaults_to_afk(self, afk_service):
        afk_service.set(1, "   ", now_ms=0)
        assert afk_service.get(1)["status"] == "AFK"

    def test_clear_returns_record_once(self, afk_service):
        afk_service.set(1, "Lunch", now_ms=0)
        assert afk_service.clear(1)["status"] == "Lunch"
        assert afk_service.clear(1) is None
        assert afk_service.get(1) is None

    def test_clear_unknown_user(self, afk_service):
        assert afk_service.clear(99) is None

    def test_persists_through_sqlite(self, test_db):
        service = AfkService(test_db)
        service.set(5, "Gaming", now_ms=10)
        assert AfkService(test_db).get(5)["status"] == "Gaming"


class TestAfkMessages:
    """Tests for the AFK notification strings."""

    def test_welcome_back(self):
        record = {"user_id": "1", "status": "Lunch", "since_ms": 0}
        message = AfkService.welcome_back_message("<@1>", record, now_ms=DAY_MS + 3_723_000 + 1_000)
        assert message == "Welcome back, <@1>! **Lunch** (for **1d 1h 2m 4s**)."

    def test_mention_notice(self):
        record = {"user_id": "1", "status": "Sleeping", "since_ms": 1_000}
        message = AfkService.mention_notice("alice", record, now_ms=61_000)
        assert message == "alice is currently AFK: **Sleeping** (for **1m**)."
