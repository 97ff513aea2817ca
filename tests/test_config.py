"""
LevelBot - Configuration Tests
==============================
"""

import pytest
from unittest.mock import MagicMock, AsyncMock

from src.core.config import (
    ConfigValidationError,
    get_config,
    has_capability,
    load_config,
    require_capability,
)


ENV_KEYS = [
    "GUILD_ID",
    "LEVEL_UP_CHANNEL_ID",
    "XP_EXCLUDED_USER_IDS",
    "XP_COOLDOWN_SECONDS",
    "XP_MIN",
    "XP_MAX",
    "LEADERBOARD_SIZE",
    "ERROR_WEBHOOK_URL",
    "BOT_ACTIVITY_NAME",
    "BOT_ACTIVITY_URL",
]


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setenv("DISCORD_TOKEN", "token")
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_token(self, clean_env):
        clean_env.delenv("DISCORD_TOKEN")
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config()
        assert "DISCORD_TOKEN" in str(exc_info.value)

    def test_defaults(self, clean_env):
        config = load_config()
        assert config.discord_token == "token"
        assert config.guild_id is None
        assert config.level_up_channel_id is None
        assert config.xp_excluded_user_ids == set()
        assert config.xp_cooldown_seconds == 60
        assert config.xp_range == (5, 14)
        assert config.leaderboard_size == 10
        assert config.error_webhook_url is None
        assert config.activity_name is None
        assert config.activity_url is None

    def test_parses_ids(self, clean_env):
        clean_env.setenv("GUILD_ID", "123")
        clean_env.setenv("LEVEL_UP_CHANNEL_ID", "not-a-number")
        clean_env.setenv("XP_EXCLUDED_USER_IDS", "1, 2,bad,,3")
        config = load_config()
        assert config.guild_id == 123
        assert config.level_up_channel_id is None
        assert config.xp_excluded_user_ids == {1, 2, 3}

    def test_clamps_ranges(self, clean_env):
        clean_env.setenv("LEADERBOARD_SIZE", "100")
        clean_env.setenv("XP_COOLDOWN_SECONDS", "-4")
        config = load_config()
        assert config.leaderboard_size == 25
        assert config.xp_cooldown_seconds == 0

    def test_invalid_int_uses_default(self, clean_env):
        clean_env.setenv("XP_MIN", "abc")
        assert load_config().xp_min == 5

    def test_xp_max_below_min(self, clean_env):
        clean_env.setenv("XP_MIN", "20")
        clean_env.setenv("XP_MAX", "10")
        with pytest.raises(ConfigValidationError):
            load_config()

    def test_webhook_url_validation(self, clean_env):
        clean_env.setenv("ERROR_WEBHOOK_URL", "ftp://nope")
        assert load_config().error_webhook_url is None
        clean_env.setenv("ERROR_WEBHOOK_URL", "https://discord.com/api/webhooks/1/x")
        assert load_config().error_webhook_url == "https://discord.com/api/webhooks/1/x"

    def test_activity(self, clean_env):
        clean_env.setenv("BOT_ACTIVITY_NAME", "  Bee Music  ")
        clean_env.setenv("BOT_ACTIVITY_URL", "https://www.youtube.com/watch?v=x")
        config = load_config()
        assert config.activity_name == "Bee Music"
        assert config.activity_url == "https://www.youtube.com/watch?v=x"

    def test_get_config_is_cached(self, clean_env):
        assert get_config() is get_config()


def _member(**flags):
    member = MagicMock()
    member.guild_permissions = MagicMock()
    member.guild_permissions.administrator = flags.get("administrator", False)
    member.guild_permissions.moderate_members = flags.get("moderate_members", False)
    member.guild_permissions.manage_channels = flags.get("manage_channels", False)
    return member


class TestCapabilities:
    """Tests for has_capability() / require_capability()."""

    def test_flag_present(self):
        assert has_capability(_member(moderate_members=True), "moderate_members") is True

    def test_flag_missing(self):
        assert has_capability(_member(), "moderate_members") is False

    def test_admin_passes_everything(self):
        assert has_capability(_member(administrator=True), "manage_channels") is True

    def test_none_member(self):
        assert has_capability(None, "administrator") is False

    def test_truthy_mock_is_not_permission(self):
        member = MagicMock()
        assert has_capability(member, "administrator") is False

    @pytest.mark.asyncio
    async def test_require_capability_denies(self):
        interaction = MagicMock()
        interaction.user = _member()
        interaction.response.send_message = AsyncMock()

        assert await require_capability(interaction, "manage_channels") is False
        interaction.response.send_message.assert_called_once_with(
            "You need Manage Channels permission to use this command.",
            ephemeral=True,
        )

    @pytest.mark.asyncio
    async def test_require_capability_allows(self):
        interaction = MagicMock()
        interaction.user = _member(administrator=True)
        interaction.response.send_message = AsyncMock()

        assert await require_capability(interaction, "administrator") is True
        interaction.response.send_message.assert_not_called()
