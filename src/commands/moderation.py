"""
LevelBot - Moderation Commands Cog
==================================

Lightweight moderation: Discord timeouts and channel slowmode.

Commands:
    /mute user minutes [reason]: Timeout a member (moderate_members)
    /slowmode seconds: Set the current channel's slowmode (manage_channels)
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands
from pydantic import ValidationError

from src.core.config import require_capability
from src.core.constants import MAX_SLOWMODE_SECONDS, MAX_TIMEOUT_MINUTES
from src.core.logger import logger
from src.models.commands import MuteOptions, SlowmodeOptions, parse_options
from src.utils.interaction import reply_invalid_options, require_guild

if TYPE_CHECKING:
    from src.bot import LevelBot


class ModerationCog(commands.Cog):
    """Timeout and slowmode commands."""

    def __init__(self, bot: "LevelBot") -> None:
        self.bot = bot

    # =========================================================================
    # /mute
    # =========================================================================

    @app_commands.command(name="mute", description="Timeout a member")
    @app_commands.guild_only()
    @app_commands.default_permissions(moderate_members=True)
    @app_commands.describe(
        user="The member to timeout",
        minutes=f"Timeout length in minutes (1-{MAX_TIMEOUT_MINUTES})",
        reason="Reason shown in the audit log",
    )
    async def mute(
        self,
        interaction: discord.Interaction,
        user: discord.Member,
        minutes: int,
        reason: Optional[str] = None,
    ) -> None:
        if not await require_guild(interaction):
            return
        if not await require_capability(interaction, "moderate_members"):
            return

        try:
            options: MuteOptions = parse_options("mute", user_id=user.id, minutes=minutes, reason=reason)
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        if user.id == interaction.user.id:
            await interaction.response.send_message("You cannot mute yourself.", ephemeral=True)
            return

        audit_reason = options.reason or f"Muted by {interaction.user} via /mute command"
        try:
            await user.timeout(timedelta(minutes=options.minutes), reason=audit_reason)
        except discord.HTTPException as e:
            await interaction.response.send_message(f"Failed to mute member: {e}", ephemeral=True)
            return

        await interaction.response.send_message(
            f"{user.mention} has been muted for **{options.minutes}** minute(s).",
            ephemeral=True,
        )

        logger.tree("Member Muted", [
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Target", f"{user} ({user.id})"),
            ("Minutes", str(options.minutes)),
            ("Reason", audit_reason[:50]),
        ], emoji="🔇")

    # =========================================================================
    # /slowmode
    # =========================================================================

    @app_commands.command(name="slowmode", description="Set slowmode for this channel")
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_channels=True)
    @app_commands.describe(seconds=f"Delay between messages in seconds (0-{MAX_SLOWMODE_SECONDS}, 0 disables)")
    async def slowmode(self, interaction: discord.Interaction, seconds: int) -> None:
        if not await require_guild(interaction):
            return
        if not await require_capability(interaction, "manage_channels"):
            return

        try:
            options: SlowmodeOptions = parse_options("slowmode", seconds=seconds)
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        channel = interaction.channel
        if not isinstance(channel, (discord.TextChannel, discord.Thread)):
            await interaction.response.send_message("Slowmode can only be set on text channels.", ephemeral=True)
            return

        try:
            await channel.edit(slowmode_delay=options.seconds)
        except discord.HTTPException as e:
            await interaction.response.send_message(f"Failed to set slowmode: {e}", ephemeral=True)
            return

        if options.seconds == 0:
            message = "Slowmode disabled."
        else:
            message = f"Slowmode set to **{options.seconds}** second(s)."
        await interaction.response.send_message(message, ephemeral=True)

        logger.tree("Slowmode Updated", [
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Channel", f"#{channel.name} ({channel.id})"),
            ("Seconds", str(options.seconds)),
        ], emoji="🐢")


async def setup(bot: "LevelBot") -> None:
    await bot.add_cog(ModerationCog(bot))
