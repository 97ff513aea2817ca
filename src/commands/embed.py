"""
LevelBot - Embed Command Cog
============================

/embed posts an administrator-authored embed in the current channel.
"""

from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands
from pydantic import ValidationError

from src.core.config import require_capability
from src.core.logger import logger
from src.models.commands import EmbedOptions, parse_options
from src.utils.interaction import reply_invalid_options, require_guild

if TYPE_CHECKING:
    from src.bot import LevelBot


def build_custom_embed(options: EmbedOptions) -> discord.Embed:
    embed = discord.Embed(
        title=options.title,
        description=options.description,
        color=options.color_value,
    )
    if options.footer:
        embed.set_footer(text=options.footer)
    return embed


class EmbedCog(commands.Cog):
    """Custom embed command."""

    def __init__(self, bot: "LevelBot") -> None:
        self.bot = bot

    @app_commands.command(name="embed", description="Create and send an embed message (Admin only)")
    @app_commands.guild_only()
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(
        title="The title of the embed",
        description="The description/body of the embed",
        color="Hex color for the embed (e.g. ff0000)",
        footer="Footer text",
    )
    async def embed(
        self,
        interaction: discord.Interaction,
        title: str,
        description: str,
        color: Optional[str] = None,
        footer: Optional[str] = None,
    ) -> None:
        if not await require_guild(interaction):
            return
        if not await require_capability(interaction, "administrator"):
            return

        try:
            options: EmbedOptions = parse_options(
                "embed", title=title, description=description, color=color, footer=footer,
            )
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        await interaction.response.send_message(embed=build_custom_embed(options))

        logger.tree("Embed Posted", [
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Title", options.title[:50]),
            ("Color", f"#{options.color}"),
        ], emoji="📝")


async def setup(bot: "LevelBot") -> None:
    await bot.add_cog(EmbedCog(bot))
