"""
LevelBot - Configuration Module
===============================

Centralized configuration management with environment variable validation.

DESIGN:
    This module provides a single source of truth for all configuration,
    loaded from environment variables at startup. Using a dataclass keeps
    every setting typed and discoverable in one place.

    Key patterns:
    - Singleton pattern via get_config() ensures one Config instance
    - Validation happens once at load time, not on every access
    - Capability helpers centralize authorization logic
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Set, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# =============================================================================
# Timezone Configuration
# =============================================================================

def _load_timezone() -> ZoneInfo:
    """Resolve BOT_TIMEZONE, falling back to UTC on unknown names."""
    try:
        return ZoneInfo(os.getenv("BOT_TIMEZONE", "UTC"))
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


BOT_TZ = _load_timezone()
"""Timezone used for log timestamps and embed footers."""


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Bot configuration loaded from environment variables.

    DESIGN:
        Required fields raise ConfigValidationError if missing.
        Optional fields have sensible defaults for development.
        All IDs are integers to prevent string comparison bugs.

    Attributes:
        discord_token: Discord bot authentication token.
        guild_id: Guild used for fast command sync (global sync if unset).
        level_up_channel_id: Channel that receives level-up announcements.
        xp_excluded_user_ids: Users who never earn XP.
        xp_cooldown_seconds: Minimum gap between XP-earning messages.
        xp_min: Lowest XP amount awarded per message.
        xp_max: Highest XP amount awarded per message (inclusive).
        leaderboard_size: Rows shown by /leaderboard.
        error_webhook_url: Webhook that receives logged errors.
        activity_name: Presence text shown on the bot (none when unset).
        activity_url: Stream URL; makes the presence a streaming activity.
    """

    # -------------------------------------------------------------------------
    # Required: Discord
    # -------------------------------------------------------------------------

    discord_token: str

    # -------------------------------------------------------------------------
    # Optional: Guild & Channels
    # -------------------------------------------------------------------------

    guild_id: Optional[int] = None
    level_up_channel_id: Optional[int] = None

    # -------------------------------------------------------------------------
    # Optional: Leveling
    # -------------------------------------------------------------------------

    xp_excluded_user_ids: Set[int] = field(default_factory=set)
    xp_cooldown_seconds: int = 60
    xp_min: int = 5
    xp_max: int = 14
    leaderboard_size: int = 10

    # -------------------------------------------------------------------------
    # Optional: Webhooks
    # -------------------------------------------------------------------------

    error_webhook_url: Optional[str] = None

    # -------------------------------------------------------------------------
    # Optional: Presence
    # -------------------------------------------------------------------------

    activity_name: Optional[str] = None
    activity_url: Optional[str] = None

    @property
    def xp_range(self) -> Tuple[int, int]:
        """Inclusive (min, max) XP range per message."""
        return (self.xp_min, self.xp_max)


# =============================================================================
# Embed Colors
# =============================================================================

class EmbedColors:
    """Standardized color palette for Discord embeds."""

    GOLD = 0xFFD700     # Leaderboard, level accents
    BLUE = 0x0099FF     # Default /embed color
    GREEN = 0x1E704F    # Progress bar fill, success
    RED = 0xDC3545      # Failures

    SUCCESS = GREEN
    ERROR = RED
    LEADERBOARD = GOLD
    DEFAULT = BLUE


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """
    Raised when required configuration is missing or invalid.

    DESIGN:
        Custom exception type allows callers to distinguish config
        errors from other startup failures.
    """

    pass


def _parse_int_optional(value: Optional[str]) -> Optional[int]:
    """
    Parse optional string to integer, returning None on failure.

    Args:
        value: String value from environment variable, may be None.

    Returns:
        Parsed integer or None if parsing fails.
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_int_set(value: Optional[str]) -> Set[int]:
    """
    Parse comma-separated string to set of integers.

    Args:
        value: Comma-separated string of integers (e.g., "123,456,789").

    Returns:
        Set of parsed integers, empty set if input is None or empty.
    """
    if not value:
        return set()
    result = set()
    for part in value.split(","):
        part = part.strip()
        if part:
            try:
                result.add(int(part))
            except ValueError:
                pass  # Skip invalid entries silently
    return result


def _parse_int_with_default(
    value: Optional[str],
    default: int,
    name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> int:
    """
    Parse optional integer with default and range validation.

    Args:
        value: String value from environment variable.
        default: Default value if not set or invalid.
        name: Variable name for warning messages.
        min_val: Minimum allowed value (inclusive).
        max_val: Maximum allowed value (inclusive).

    Returns:
        Parsed integer within valid range, or default.
    """
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        from src.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default

    if min_val is not None and parsed < min_val:
        from src.core.logger import logger
        logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
        return min_val
    if max_val is not None and parsed > max_val:
        from src.core.logger import logger
        logger.warning(f"Config {name}={parsed} above max {max_val}, using {max_val}")
        return max_val
    return parsed


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """
    Validate URL format for webhooks and stream links.

    Args:
        value: URL string to validate.
        name: Variable name for warning messages.

    Returns:
        URL if valid, None if invalid or empty.
    """
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from src.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    DESIGN:
        Validates all required variables upfront before creating the
        Config object. This fail-fast approach prevents partial
        initialization and unclear runtime errors.

    Returns:
        Validated Config object with all settings.

    Raises:
        ConfigValidationError: If any required variable is missing or invalid.
    """
    missing = []

    discord_token = os.getenv("DISCORD_TOKEN")
    if not discord_token:
        missing.append("DISCORD_TOKEN")

    if missing:
        raise ConfigValidationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    # -------------------------------------------------------------------------
    # Parse XP Range
    # -------------------------------------------------------------------------

    xp_min = _parse_int_with_default(os.getenv("XP_MIN"), 5, "XP_MIN", min_val=1, max_val=1000)
    xp_max = _parse_int_with_default(os.getenv("XP_MAX"), 14, "XP_MAX", min_val=1, max_val=1000)
    if xp_max < xp_min:
        raise ConfigValidationError(f"XP_MAX ({xp_max}) must be >= XP_MIN ({xp_min})")

    return Config(
        discord_token=discord_token,
        guild_id=_parse_int_optional(os.getenv("GUILD_ID")),
        level_up_channel_id=_parse_int_optional(os.getenv("LEVEL_UP_CHANNEL_ID")),
        xp_excluded_user_ids=_parse_int_set(os.getenv("XP_EXCLUDED_USER_IDS")),
        xp_cooldown_seconds=_parse_int_with_default(
            os.getenv("XP_COOLDOWN_SECONDS"), 60, "XP_COOLDOWN_SECONDS", min_val=0, max_val=3600
        ),
        xp_min=xp_min,
        xp_max=xp_max,
        leaderboard_size=_parse_int_with_default(
            os.getenv("LEADERBOARD_SIZE"), 10, "LEADERBOARD_SIZE", min_val=1, max_val=25
        ),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
        activity_name=os.getenv("BOT_ACTIVITY_NAME", "").strip() or None,
        activity_url=_validate_url(os.getenv("BOT_ACTIVITY_URL"), "BOT_ACTIVITY_URL"),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading if needed.

    Returns:
        The global Config instance.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached Config so the next get_config() reloads it."""
    global _config
    _config = None


# =============================================================================
# Config Validation & Logging
# =============================================================================

def validate_and_log_config() -> None:
    """
    Validate configuration and log results at startup.

    Raises:
        ConfigValidationError: If required configuration is missing.
    """
    from src.core.logger import logger

    config = get_config()

    if not config.level_up_channel_id:
        logger.info("Optional config not set: LEVEL_UP_CHANNEL_ID")
    if not config.guild_id:
        logger.info("Optional config not set: GUILD_ID (commands sync globally)")

    logger.tree("Configuration Validated", [
        ("Required", "✅ All required variables set"),
        ("XP Per Message", f"{config.xp_min}-{config.xp_max}"),
        ("XP Cooldown", f"{config.xp_cooldown_seconds}s"),
        ("Excluded Users", str(len(config.xp_excluded_user_ids))),
        ("Leaderboard Size", str(config.leaderboard_size)),
    ], emoji="⚙️")


# =============================================================================
# Capability Helpers
# =============================================================================

def has_capability(member, capability: str) -> bool:
    """
    Check whether a member holds a named guild permission flag.

    Args:
        member: Discord member object to check.
        capability: Permission flag name, e.g. "administrator".

    Returns:
        True if the member has the flag (administrators always pass).
    """
    if member is None:
        return False

    permissions = getattr(member, "guild_permissions", None)
    if permissions is None:
        return False

    if getattr(permissions, "administrator", False) is True:
        return True
    return getattr(permissions, capability, False) is True


async def require_capability(interaction, capability: str) -> bool:
    """
    Check a capability and send an error if not authorized.

    Args:
        interaction: Discord interaction to check.
        capability: Permission flag name.

    Returns:
        True if authorized, False if not (error already sent).
    """
    if not has_capability(interaction.user, capability):
        label = capability.replace("_", " ").title()
        await interaction.response.send_message(
            f"You need {label} permission to use this command.",
            ephemeral=True,
        )
        return False
    return True


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "BOT_TZ",
    "get_config",
    "load_config",
    "reset_config",
    "validate_and_log_config",
    "has_capability",
    "require_capability",
]
