"""
LevelBot - Events Package
=========================

Event handler Cogs, loaded dynamically with load_extension().

    Event routing:
    - messages.py: AFK bookkeeping and XP awards on message create
"""

# =============================================================================
# Event Cog Registry
# =============================================================================

EVENT_COGS = [
    "src.events.messages",
]
"""Event cog module paths, loaded in order by the bot."""


__all__ = [
    "EVENT_COGS",
]
