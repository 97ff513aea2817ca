"""
LevelBot - Command Option Models
================================

Typed option bags for every slash command.

DESIGN:
    Each command is a variant tagged by its `command` field. Cogs build
    the variant from the raw slash-command arguments through
    parse_options(), so malformed input is rejected with a
    pydantic ValidationError before any state is touched.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from src.core.constants import (
    AFK_STATUS_MAX,
    EMBED_DESCRIPTION_MAX,
    EMBED_FOOTER_MAX,
    EMBED_TITLE_MAX,
    MAX_SLOWMODE_SECONDS,
    MAX_TIMEOUT_MINUTES,
    ROLE_NAME_MAX,
)
from src.utils.validators import hex_color_or_default, hex_to_int, normalize_hex_color


DEFAULT_EMBED_COLOR = "0099ff"


# =============================================================================
# Base
# =============================================================================

class CommandOptions(BaseModel):
    """Common base for command variants."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


# =============================================================================
# Leveling
# =============================================================================

class LevelOptions(CommandOptions):
    command: Literal["level"] = "level"
    user_id: Optional[int] = Field(default=None, description="Target user, defaults to caller")


# =============================================================================
# Roles
# =============================================================================

class RoleCreateOptions(CommandOptions):
    command: Literal["role"] = "role"
    name: str = Field(min_length=1, max_length=ROLE_NAME_MAX)
    color: str

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        return normalize_hex_color(value)


class DeleteRoleOptions(CommandOptions):
    command: Literal["deleterole"] = "deleterole"
    name: str = Field(min_length=1, max_length=ROLE_NAME_MAX)


class UserRoleOptions(CommandOptions):
    command: Literal["userrole"] = "userrole"
    user_id: int
    role_id: int
    action: Literal["add", "remove"]


# =============================================================================
# AFK & Embeds
# =============================================================================

class AfkOptions(CommandOptions):
    command: Literal["afk"] = "afk"
    status: str = Field(default="AFK", max_length=AFK_STATUS_MAX)

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            return "AFK"
        return value


class EmbedOptions(CommandOptions):
    command: Literal["embed"] = "embed"
    title: str = Field(min_length=1, max_length=EMBED_TITLE_MAX)
    description: str = Field(min_length=1, max_length=EMBED_DESCRIPTION_MAX)
    color: str = DEFAULT_EMBED_COLOR
    footer: Optional[str] = Field(default=None, max_length=EMBED_FOOTER_MAX)

    @field_validator("color", mode="before")
    @classmethod
    def _fallback_color(cls, value: Optional[str]) -> str:
        return hex_color_or_default(value, DEFAULT_EMBED_COLOR)

    @property
    def color_value(self) -> int:
        return hex_to_int(self.color)


# =============================================================================
# Moderation
# =============================================================================

class MuteOptions(CommandOptions):
    command: Literal["mute"] = "mute"
    user_id: int
    minutes: int = Field(ge=1, le=MAX_TIMEOUT_MINUTES)
    reason: Optional[str] = Field(default=None, max_length=512)


class SlowmodeOptions(CommandOptions):
    command: Literal["slowmode"] = "slowmode"
    seconds: int = Field(ge=0, le=MAX_SLOWMODE_SECONDS)


# =============================================================================
# Tagged Union
# =============================================================================

AnyCommandOptions = Annotated[
    Union[
        LevelOptions,
        RoleCreateOptions,
        DeleteRoleOptions,
        UserRoleOptions,
        AfkOptions,
        EmbedOptions,
        MuteOptions,
        SlowmodeOptions,
    ],
    Field(discriminator="command"),
]

_adapter: TypeAdapter = TypeAdapter(AnyCommandOptions)


def parse_options(command: str, **options) -> CommandOptions:
    """
    Validate raw slash-command arguments into their variant.

    Args:
        command: Command name, used as the discriminator.
        **options: Raw arguments as received from Discord.

    Raises:
        pydantic.ValidationError: If the arguments are invalid.
    """
    return _adapter.validate_python({"command": command, **options})


def first_error_message(error) -> str:
    """Human readable text of the first error in a ValidationError."""
    errors = error.errors()
    if not errors:
        return "Invalid input."
    first = errors[0]
    message = first.get("msg", "Invalid input.")
    # Strip pydantic's "Value error, " prefix from custom validators
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message


__all__ = [
    "AfkOptions",
    "AnyCommandOptions",
    "CommandOptions",
    "DEFAULT_EMBED_COLOR",
    "DeleteRoleOptions",
    "EmbedOptions",
    "LevelOptions",
    "MuteOptions",
    "RoleCreateOptions",
    "SlowmodeOptions",
    "UserRoleOptions",
    "first_error_message",
    "parse_options",
]
