"""
LevelBot - Test Fixtures
========================

Shared fixtures for all tests.
"""

import os
import tempfile
from typing import Dict, List, Optional

import pytest
from unittest.mock import MagicMock, AsyncMock

# Set up test environment before importing modules
os.environ["TESTING"] = "1"
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="levelbot-logs-"))


# =============================================================================
# In-Memory Store
# =============================================================================

class InMemoryStore:
    """Dict-backed stand-in for DatabaseManager's levels and AFK methods."""

    def __init__(self) -> None:
        self.levels: Dict[str, dict] = {}
        self.afk: Dict[str, dict] = {}
        self.upserts = 0

    def find_level(self, user_id: str) -> Optional[dict]:
        record = self.levels.get(str(user_id))
        return dict(record) if record else None

    def upsert_level(self, user_id: str, xp: int, level: int) -> None:
        self.upserts += 1
        self.levels[str(user_id)] = {"user_id": str(user_id), "xp": xp, "level": level}

    def find_top_levels(self, limit: int = 10) -> List[dict]:
        ordered = sorted(
            self.levels.values(),
            key=lambda r: (-r["level"], -r["xp"], r["user_id"]),
        )
        return [dict(r) for r in ordered[:limit]]

    def count_levels(self) -> int:
        return len(self.levels)

    def set_afk(self, user_id: str, status: str, since_ms: int) -> None:
        self.afk[str(user_id)] = {"user_id": str(user_id), "status": status, "since_ms": since_ms}

    def get_afk(self, user_id: str) -> Optional[dict]:
        record = self.afk.get(str(user_id))
        return dict(record) if record else None

    def pop_afk(self, user_id: str) -> Optional[dict]:
        return self.afk.pop(str(user_id), None)


@pytest.fixture
def fake_store():
    """Fresh in-memory store."""
    return InMemoryStore()


# =============================================================================
# Config & Database
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_config():
    """Reload config from the environment for every test."""
    from src.core.config import reset_config

    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_levelbot.db"


@pytest.fixture
def test_db(temp_db_path, monkeypatch):
    """Create a fresh test database instance."""
    from src.core.database import manager as db_module

    # Reset singleton
    db_module.DatabaseManager._instance = None

    # Patch the DB path
    monkeypatch.setattr(db_module, "DB_PATH", temp_db_path)
    monkeypatch.setattr(db_module, "DATA_DIR", temp_db_path.parent)

    db = db_module.DatabaseManager()

    yield db

    # Cleanup
    db.close()
    db_module.DatabaseManager._instance = None


# =============================================================================
# Services
# =============================================================================

@pytest.fixture
def leveling_service(fake_store):
    """LevelingService with a fixed 10 XP per message."""
    from src.services.leveling import LevelingService

    return LevelingService(fake_store, cooldown_seconds=60, xp_range=(10, 10))


@pytest.fixture
def afk_service(fake_store):
    from src.services.afk_service import AfkService

    return AfkService(fake_store)


@pytest.fixture
def mock_bot(leveling_service, afk_service):
    """Bot double carrying real services."""
    bot = MagicMock()
    bot.leveling = leveling_service
    bot.afk = afk_service
    bot.get_channel = MagicMock(return_value=None)
    bot.resolve_display_name = AsyncMock(side_effect=lambda user_id: f"user-{user_id}")
    return bot


# =============================================================================
# Mock Discord Objects
# =============================================================================

@pytest.fixture
def mock_discord_member():
    """Create a mock Discord member."""
    member = MagicMock()
    member.id = 123456789
    member.name = "testuser"
    member.display_name = "Test User"
    member.bot = False
    member.mention = "<@123456789>"
    member.display_avatar.url = "https://example.com/avatar.png"
    member.guild_permissions = MagicMock()
    member.guild_permissions.administrator = False
    member.guild_permissions.moderate_members = False
    member.guild_permissions.manage_channels = False
    member.add_roles = AsyncMock()
    member.remove_roles = AsyncMock()
    member.timeout = AsyncMock()
    return member


@pytest.fixture
def mock_discord_admin(mock_discord_member):
    """Member with the administrator flag."""
    mock_discord_member.guild_permissions.administrator = True
    return mock_discord_member


@pytest.fixture
def mock_discord_guild():
    """Create a mock Discord guild."""
    guild = MagicMock()
    guild.id = 987654321
    guild.name = "Test Server"
    guild.roles = []
    guild.create_role = AsyncMock()
    return guild


@pytest.fixture
def mock_discord_interaction(mock_discord_member, mock_discord_guild):
    """Create a mock Discord interaction."""
    interaction = MagicMock()
    interaction.user = mock_discord_member
    interaction.guild = mock_discord_guild
    interaction.channel = MagicMock()
    interaction.channel.id = 555666777
    interaction.response = MagicMock()
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    interaction.edit_original_response = AsyncMock()
    return interaction


@pytest.fixture
def mock_discord_message(mock_discord_member):
    """Create a mock guild message."""
    message = MagicMock()
    message.id = 111222333
    message.content = "hello"
    message.author = mock_discord_member
    message.guild = MagicMock()
    message.mentions = []
    message.channel = MagicMock()
    message.channel.id = 555666777
    message.channel.send = AsyncMock()
    message.reply = AsyncMock()
    return message
