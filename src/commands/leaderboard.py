"""
LevelBot - Leaderboard Command Cog
==================================

/leaderboard lists the top users by level and XP.
"""

from typing import TYPE_CHECKING, List, Tuple

import discord
from discord import app_commands
from discord.ext import commands

from src.core.config import get_config, EmbedColors
from src.core.logger import logger
from src.services.leveling.leaderboard import LeaderboardRow
from src.utils.error_handler import ErrorHandler, GENERIC_ERROR_MESSAGE

if TYPE_CHECKING:
    from src.bot import LevelBot


EMPTY_LEADERBOARD_MESSAGE = "There is no one on the leaderboard yet!"


def build_leaderboard_embed(named_rows: List[Tuple[LeaderboardRow, str]]) -> discord.Embed:
    """
    Build the leaderboard embed.

    Args:
        named_rows: (row, display name) pairs already in rank order.
    """
    embed = discord.Embed(
        title="🏆 Leaderboard 🏆",
        description="Top users by level and XP",
        color=EmbedColors.LEADERBOARD,
    )
    for rank, (row, name) in enumerate(named_rows, start=1):
        embed.add_field(
            name=f"#{rank} - {name}",
            value=f"**Level:** {row.level} | **Total XP:** {row.total_xp}",
            inline=False,
        )
    return embed


class LeaderboardCog(commands.Cog):
    """Leaderboard command."""

    def __init__(self, bot: "LevelBot") -> None:
        self.bot = bot
        self.config = get_config()

    @app_commands.command(name="leaderboard", description="Show the top users by level")
    async def leaderboard(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer()

        try:
            rows = self.bot.leveling.leaderboard.top_n(self.config.leaderboard_size)
            if not rows:
                await interaction.followup.send(EMPTY_LEADERBOARD_MESSAGE)
                return

            named = await self.bot.leveling.leaderboard.resolve_names(rows, self.bot.resolve_display_name)
            await interaction.followup.send(embed=build_leaderboard_embed(named))
        except Exception as e:
            ErrorHandler.handle(e, location="/leaderboard")
            await interaction.followup.send(GENERIC_ERROR_MESSAGE)
            return

        logger.tree("Leaderboard Sent", [
            ("By", str(interaction.user)),
            ("Rows", str(len(rows))),
        ], emoji="🏆")


async def setup(bot: "LevelBot") -> None:
    await bot.add_cog(LeaderboardCog(bot))
