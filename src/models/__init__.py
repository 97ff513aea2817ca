"""
LevelBot - Models Package
=========================

Pydantic option models for slash commands.
"""

from .commands import (
    AfkOptions,
    DeleteRoleOptions,
    EmbedOptions,
    LevelOptions,
    MuteOptions,
    RoleCreateOptions,
    SlowmodeOptions,
    UserRoleOptions,
    first_error_message,
    parse_options,
)

__all__ = [
    "AfkOptions",
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
