"""
LevelBot - AFK Command Cog
==========================

/afk stores a status that is announced when the user is mentioned
and cleared on their next message.
"""

from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands
from pydantic import ValidationError

from src.models.commands import AfkOptions, parse_options
from src.utils.duration import wall_clock_ms
from src.utils.error_handler import ErrorHandler, GENERIC_ERROR_MESSAGE
from src.utils.interaction import reply_invalid_options, safe_respond

if TYPE_CHECKING:
    from src.bot import LevelBot


class AfkCog(commands.Cog):
    """AFK status command."""

    def __init__(self, bot: "LevelBot") -> None:
        self.bot = bot

    @app_commands.command(name="afk", description="Set your AFK status")
    @app_commands.describe(status='Your custom AFK status (optional, defaults to "AFK")')
    async def afk(self, interaction: discord.Interaction, status: Optional[str] = None) -> None:
        try:
            options: AfkOptions = parse_options("afk", status=status)
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        try:
            self.bot.afk.set(interaction.user.id, options.status, wall_clock_ms())
        except Exception as e:
            ErrorHandler.handle(e, location="/afk", user_id=interaction.user.id)
            await safe_respond(interaction, GENERIC_ERROR_MESSAGE)
            return

        await interaction.response.send_message(f"{interaction.user.mention} is now AFK: **{options.status}**")


async def setup(bot: "LevelBot") -> None:
    await bot.add_cog(AfkCog(bot))
