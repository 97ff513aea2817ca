"""
LevelBot - Message Events
=========================

Handles message create events: AFK bookkeeping and XP awards.
"""

from typing import TYPE_CHECKING, Optional

import discord
from discord.ext import commands

from src.core.config import get_config
from src.core.database import StoreError
from src.core.logger import logger
from src.services.leveling.cooldown import monotonic_ms
from src.utils.duration import wall_clock_ms
from src.utils.error_handler import ErrorHandler

if TYPE_CHECKING:
    from src.bot import LevelBot


class MessageEvents(commands.Cog):
    """Message event handlers."""

    def __init__(self, bot: "LevelBot") -> None:
        self.bot = bot
        self.config = get_config()

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        """
        Event handler for messages.

        DESIGN: Two independent routes, each failing on its own:
        1. AFK -> Welcome back the author, announce mentioned AFK users
        2. XP -> Award through the cooldown gate, announce level-ups
        """
        if message.author.bot or message.guild is None:
            return

        await self._handle_afk(message)
        await self._handle_xp(message)

    # =========================================================================
    # AFK
    # =========================================================================

    async def _handle_afk(self, message: discord.Message) -> None:
        now_ms = wall_clock_ms()
        try:
            record = self.bot.afk.clear(message.author.id)
            if record is not None:
                await message.reply(self.bot.afk.welcome_back_message(message.author.mention, record, now_ms))

            for user in message.mentions:
                if user.id == message.author.id:
                    continue
                mentioned = self.bot.afk.get(user.id)
                if mentioned is not None:
                    await message.channel.send(self.bot.afk.mention_notice(user.name, mentioned, now_ms))
        except (StoreError, discord.HTTPException) as e:
            ErrorHandler.handle(e, location="on_message.afk", message=message)

    # =========================================================================
    # XP
    # =========================================================================

    async def _handle_xp(self, message: discord.Message) -> None:
        try:
            new_level = self.bot.leveling.process_message(
                message.author.id,
                monotonic_ms(),
                is_bot=message.author.bot,
            )
        except StoreError as e:
            ErrorHandler.handle(e, location="on_message.xp", message=message)
            return

        if new_level is None:
            return

        channel = self._level_up_channel() or message.channel
        try:
            await channel.send(self.bot.leveling.level_up_message(message.author.name, new_level))
        except discord.HTTPException as e:
            ErrorHandler.handle(e, location="on_message.level_up", message=message)

    def _level_up_channel(self) -> Optional[discord.abc.Messageable]:
        channel_id = self.config.level_up_channel_id
        if not channel_id:
            return None
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            logger.warning("Level-Up Channel Not Found", [("Channel ID", str(channel_id))])
        return channel


async def setup(bot: "LevelBot") -> None:
    await bot.add_cog(MessageEvents(bot))
