"""
LevelBot - Cooldown Gate
========================

Per-user rate limiter that stops XP farming through rapid messages.

DESIGN:
    In-memory only; lifetime is the owning service's lifetime. Entries
    are never swept since the key space is bounded by active members.
    The check-and-set runs under a lock so two near-simultaneous
    messages from one user cannot both pass.
"""

import threading
import time
from typing import Dict, Optional

from src.core.constants import DEFAULT_COOLDOWN_MS, MS_PER_SECOND


def monotonic_ms() -> int:
    """Monotonic clock in milliseconds."""
    return int(time.monotonic() * MS_PER_SECOND)


class CooldownGate:
    """
    Allow at most one award per user per window.

    Attributes:
        window_ms: Default window length in milliseconds.
    """

    def __init__(self, window_ms: int = DEFAULT_COOLDOWN_MS) -> None:
        self.window_ms = window_ms
        self._last_award: Dict[str, int] = {}
        self._lock = threading.Lock()

    def try_consume(self, user_id: str, now: int, window_ms: Optional[int] = None) -> bool:
        """
        Consume the user's slot if the window has elapsed.

        Args:
            user_id: Discord user ID as string.
            now: Current time in milliseconds.
            window_ms: Override for the default window.

        Returns:
            True (and records `now`) if an award is allowed,
            False with no state change otherwise.
        """
        window = self.window_ms if window_ms is None else window_ms
        user_id = str(user_id)

        with self._lock:
            last = self._last_award.get(user_id)
            if last is not None and now - last < window:
                return False
            self._last_award[user_id] = now
            return True

    def last_award(self, user_id: str) -> Optional[int]:
        """Timestamp of the user's last allowed award, if any."""
        return self._last_award.get(str(user_id))

    def clear(self) -> None:
        """Forget every recorded timestamp."""
        with self._lock:
            self._last_award.clear()

    def __len__(self) -> int:
        return len(self._last_award)


__all__ = ["CooldownGate", "monotonic_ms"]
