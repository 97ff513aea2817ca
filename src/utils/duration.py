"""
LevelBot - Duration Utilities
=============================

Formatting for elapsed times shown in AFK messages.

Usage:
    from src.utils.duration import format_duration

    format_duration(93784000)  # "1d 2h 3m 4s"
    format_duration(60000)     # "1m"
"""

import time

from src.core.constants import (
    MS_PER_SECOND,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)


def wall_clock_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * MS_PER_SECOND)


def format_duration(ms: int) -> str:
    """
    Format milliseconds as "Xd Xh Xm Xs".

    Zero components are omitted. Anything under one second formats
    as an empty string.

    Examples:
        >>> format_duration(3_661_000)
        "1h 1m 1s"
        >>> format_duration(500)
        ""
    """
    seconds = max(0, int(ms)) // MS_PER_SECOND

    days, seconds = divmod(seconds, SECONDS_PER_DAY)
    hours, seconds = divmod(seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(seconds, SECONDS_PER_MINUTE)

    parts = []
    for value, suffix in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s")):
        if value > 0:
            parts.append(f"{value}{suffix}")
    return " ".join(parts)


__all__ = ["format_duration", "wall_clock_ms"]
