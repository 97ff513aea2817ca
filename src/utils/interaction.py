"""
LevelBot - Interaction Utilities
================================

Shared helpers for Discord interaction handling.

Provides safe_respond() so commands do not repeat the
response.is_done() / followup dance on every error path.
"""

from typing import Any, Optional

import discord
from pydantic import ValidationError

from src.core.logger import logger
from src.models.commands import first_error_message


async def safe_respond(
    interaction: discord.Interaction,
    content: Optional[str] = None,
    *,
    embed: Optional[discord.Embed] = None,
    file: Optional[discord.File] = None,
    ephemeral: bool = True,
) -> None:
    """
    Respond to an interaction whether or not it was already acknowledged.

    Args:
        interaction: The Discord interaction to respond to.
        content: The message content.
        embed: A single embed to send.
        file: A file to attach.
        ephemeral: Whether the response is ephemeral (default True).
    """
    kwargs: dict[str, Any] = {"ephemeral": ephemeral}
    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed
    if file is not None:
        kwargs["file"] = file

    try:
        response_done = interaction.response.is_done()
    except discord.HTTPException:
        response_done = True

    try:
        if not response_done:
            await interaction.response.send_message(**kwargs)
        else:
            await interaction.followup.send(**kwargs)
    except discord.HTTPException as e:
        logger.warning("Interaction Response Failed", [
            ("User", str(interaction.user)),
            ("Error", str(e)[:100]),
        ])


async def reply_invalid_options(interaction: discord.Interaction, error: ValidationError) -> None:
    """Send the first validation failure back to the caller, ephemerally."""
    await safe_respond(interaction, first_error_message(error), ephemeral=True)


GUILD_ONLY_MESSAGE = "This command can only be used in a server."


async def require_guild(interaction: discord.Interaction) -> bool:
    """
    Reject interactions that did not come from a guild.

    Returns:
        True when the interaction has a guild, False after replying.
    """
    if interaction.guild is not None:
        return True
    await safe_respond(interaction, GUILD_ONLY_MESSAGE, ephemeral=True)
    return False


__all__ = ["safe_respond", "reply_invalid_options", "require_guild", "GUILD_ONLY_MESSAGE"]
