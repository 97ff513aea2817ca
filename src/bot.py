"""
LevelBot - Main Bot Class
=========================

Discord client for a single guild: leveling with rank cards and a
leaderboard, AFK statuses, role management and light moderation.
"""

from datetime import datetime
from typing import Optional

import discord
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.core.database import get_db
from src.services.afk_service import AfkService
from src.services.leveling import IdentityLookupError, LevelingService


# =============================================================================
# Presence
# =============================================================================

def build_activity(name: Optional[str], url: Optional[str]) -> Optional[discord.BaseActivity]:
    """Streaming activity when a URL is configured, a plain game status otherwise."""
    if not name:
        return None
    if url:
        return discord.Streaming(name=name, url=url)
    return discord.Game(name=name)


# =============================================================================
# LevelBot Class
# =============================================================================

class LevelBot(commands.Bot):
    """
    Main Discord bot class.

    DESIGN: Owns every piece of mutable state. Cogs reach the services
    through the bot instance:
    - self.db: DatabaseManager (sqlite)
    - self.leveling: LevelingService (ledger, cooldown gate, leaderboard)
    - self.afk: AfkService
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self) -> None:
        self.config = get_config()

        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True

        super().__init__(
            command_prefix="!",
            intents=intents,
            help_command=None,
        )

        self.db = get_db()
        self.start_time: datetime = datetime.now()

        self.leveling = LevelingService(
            self.db,
            cooldown_seconds=self.config.xp_cooldown_seconds,
            xp_range=self.config.xp_range,
            excluded_ids=self.config.xp_excluded_user_ids,
        )
        self.afk = AfkService(self.db)

        self._ready_initialized: bool = False

        logger.info("Bot Instance Created")

    # =========================================================================
    # Setup Hook
    # =========================================================================

    async def setup_hook(self) -> None:
        """Load cogs and sync commands before on_ready."""
        from src.commands import COMMAND_COGS
        for cog in COMMAND_COGS:
            try:
                await self.load_extension(cog)
                logger.info(f"Cog Loaded: {cog.split('.')[-1]}")
            except commands.ExtensionError as e:
                logger.error("Failed to Load Cog", [("Cog", cog), ("Error", str(e))])

        from src.events import EVENT_COGS
        for cog in EVENT_COGS:
            try:
                await self.load_extension(cog)
                logger.debug(f"Event Cog Loaded: {cog.split('.')[-1]}")
            except commands.ExtensionError as e:
                logger.error("Failed to Load Event Cog", [("Cog", cog), ("Error", str(e))])

        try:
            if self.config.guild_id:
                guild = discord.Object(id=self.config.guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                scope = f"Guild {self.config.guild_id}"
            else:
                synced = await self.tree.sync()
                scope = "Global"
            logger.tree("Commands Synced", [
                ("Count", str(len(synced))),
                ("Scope", scope),
            ], emoji="✅")
        except discord.HTTPException as e:
            logger.error("Command Sync Failed", [("Error", str(e))])

    # =========================================================================
    # On Ready
    # =========================================================================

    async def on_ready(self) -> None:
        if self._ready_initialized:
            logger.info("Bot Reconnected (skipping re-initialization)")
            return

        self._ready_initialized = True

        if not self.user:
            return

        logger.tree("BOT ONLINE", [
            ("Name", self.user.name),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
            ("Ranked Users", str(self.db.count_levels())),
        ], emoji="🚀")

        activity = build_activity(self.config.activity_name, self.config.activity_url)
        if activity is not None:
            await self.change_presence(activity=activity)
            logger.success(f"Presence Set: {activity.name}")

    # =========================================================================
    # Identity Lookup
    # =========================================================================

    async def resolve_display_name(self, user_id: str) -> str:
        """
        Resolve a user ID to a username.

        Raises:
            IdentityLookupError: If the user cannot be found or fetched.
        """
        try:
            snowflake = int(user_id)
        except (TypeError, ValueError) as e:
            raise IdentityLookupError(f"Invalid user ID: {user_id}") from e

        user = self.get_user(snowflake)
        if user is not None:
            return user.name

        try:
            user = await self.fetch_user(snowflake)
        except (discord.NotFound, discord.HTTPException) as e:
            raise IdentityLookupError(str(e)) from e
        return user.name

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def close(self) -> None:
        """Graceful shutdown with proper cleanup."""
        logger.info("Initiating Graceful Shutdown")

        await super().close()
        self.db.close()

        logger.tree("SHUTDOWN COMPLETE", [
            ("Uptime", str(datetime.now() - self.start_time)),
        ], emoji="🛑")


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["LevelBot", "build_activity"]
