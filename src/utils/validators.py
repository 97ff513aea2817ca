"""
LevelBot - Input Validators
===========================

Validation helpers shared by command option models.
"""

import re
from typing import Optional


class ValidationError(ValueError):
    """Raised when user input fails validation."""

    pass


HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")

INVALID_HEX_MESSAGE = "Invalid hex color! Use 6 hex digits, e.g. ff0000 or #ff0000"


def normalize_hex_color(value: str) -> str:
    """
    Validate a hex colour and strip the optional '#'.

    Args:
        value: Raw colour like "ff0000" or "#FF0000".

    Returns:
        Lowercase six digit hex string.

    Raises:
        ValidationError: If the value is not exactly six hex digits.
    """
    match = HEX_COLOR_PATTERN.match((value or "").strip())
    if not match:
        raise ValidationError(INVALID_HEX_MESSAGE)
    return match.group(1).lower()


def hex_color_or_default(value: Optional[str], default: str) -> str:
    """Like normalize_hex_color but returns `default` on bad input."""
    if not value:
        return default
    try:
        return normalize_hex_color(value)
    except ValidationError:
        return default


def hex_to_int(value: str) -> int:
    """Convert a normalized hex colour to an integer."""
    return int(value, 16)


__all__ = [
    "ValidationError",
    "INVALID_HEX_MESSAGE",
    "normalize_hex_color",
    "hex_color_or_default",
    "hex_to_int",
]
