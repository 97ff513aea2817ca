"""
LevelBot - Commands Package
===========================

Slash command implementations, one discord.py Cog per file.

DESIGN:
    Cogs are loaded dynamically by the bot using load_extension().

    To add a new command:
    1. Create new_command.py in this directory
    2. Create a Cog class with @app_commands.command decorators
    3. Add async def setup(bot) function at the end
    4. Add the cog to COMMAND_COGS list below

Available Commands:
    /level: Rank card for a user
    /leaderboard: Top users by level and XP
    /role, /deleterole, /userrole: Role management
    /afk: Set an AFK status
    /embed: Post a custom embed (administrator)
    /mute, /slowmode: Moderation
"""

# =============================================================================
# Command Cog Registry
# =============================================================================

COMMAND_COGS = [
    "src.commands.level",
    "src.commands.leaderboard",
    "src.commands.roles",
    "src.commands.afk",
    "src.commands.embed",
    "src.commands.moderation",
]
"""Command cog module paths, loaded in order by the bot."""


__all__ = [
    "COMMAND_COGS",
]
