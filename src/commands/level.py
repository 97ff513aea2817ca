"""
LevelBot - Level Command Cog
============================

/level renders a rank card for a user.

DESIGN:
    The reply is deferred first since the avatar download and the
    render can exceed Discord's three second acknowledgement window.
"""

import io
from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands
from pydantic import ValidationError

from src.core.logger import logger
from src.models.commands import LevelOptions, parse_options
from src.utils.avatar import fetch_avatar_bytes
from src.utils.error_handler import ErrorHandler, GENERIC_ERROR_MESSAGE
from src.utils.interaction import reply_invalid_options

if TYPE_CHECKING:
    from src.bot import LevelBot


CARD_FILENAME = "level-card.png"


class LevelCog(commands.Cog):
    """Rank card command."""

    def __init__(self, bot: "LevelBot") -> None:
        self.bot = bot

    @app_commands.command(name="level", description="Check the level of a user")
    @app_commands.describe(user="The user to check (optional)")
    async def level(
        self,
        interaction: discord.Interaction,
        user: Optional[discord.User] = None,
    ) -> None:
        """Show the target user's rank card."""
        target = user or interaction.user

        try:
            options: LevelOptions = parse_options("level", user_id=target.id)
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        if target.bot:
            await interaction.response.send_message("Bots don't earn XP.", ephemeral=True)
            return

        await interaction.response.defer()

        try:
            entry = self.bot.leveling.ledger.get_or_create(str(options.user_id))
            avatar_url = target.display_avatar.replace(format="png", size=128).url
            avatar_bytes = await fetch_avatar_bytes(avatar_url)
            card = await self.bot.leveling.render_card(target.name, avatar_bytes, entry)
            await interaction.followup.send(file=discord.File(io.BytesIO(card), filename=CARD_FILENAME))
        except Exception as e:
            ErrorHandler.handle(e, location="/level", user_id=target.id)
            await interaction.followup.send(GENERIC_ERROR_MESSAGE)
            return

        logger.tree("Rank Card Sent", [
            ("By", str(interaction.user)),
            ("Target", f"{target.name} ({target.id})"),
            ("Level", str(entry.level)),
            ("XP", f"{entry.xp} / {entry.threshold}"),
        ], emoji="🪪")


async def setup(bot: "LevelBot") -> None:
    await bot.add_cog(LevelCog(bot))
