"""
LevelBot - Role Commands Cog
============================

Self-service role creation plus admin role management.

Commands:
    /role name color: Create a coloured role and assign it to yourself
    /deleterole name: Delete a role by exact name (administrator)
    /userrole user role action: Add or remove a role (administrator)
"""

from typing import TYPE_CHECKING, Literal

import discord
from discord import app_commands
from discord.ext import commands
from pydantic import ValidationError

from src.core.config import require_capability
from src.core.logger import logger
from src.models.commands import DeleteRoleOptions, RoleCreateOptions, UserRoleOptions, parse_options
from src.utils.interaction import reply_invalid_options, require_guild
from src.utils.validators import hex_to_int

if TYPE_CHECKING:
    from src.bot import LevelBot


class RolesCog(commands.Cog):
    """Role creation and assignment commands."""

    def __init__(self, bot: "LevelBot") -> None:
        self.bot = bot

    # =========================================================================
    # /role
    # =========================================================================

    @app_commands.command(name="role", description="Create a role and assign it to yourself")
    @app_commands.guild_only()
    @app_commands.describe(
        name="The name of the role",
        color="The hex code for the role color (e.g. ff0000)",
    )
    async def role(self, interaction: discord.Interaction, name: str, color: str) -> None:
        if not await require_guild(interaction):
            return

        try:
            options: RoleCreateOptions = parse_options("role", name=name, color=color)
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        await interaction.response.send_message(
            f"Creating role **{options.name}** with color **#{options.color}**...",
            ephemeral=True,
        )

        try:
            role = await interaction.guild.create_role(
                name=options.name,
                color=discord.Color(hex_to_int(options.color)),
                reason=f"Created by {interaction.user} via /role command",
            )
            await interaction.user.add_roles(role)
        except discord.HTTPException as e:
            await interaction.edit_original_response(content=f"Failed to create or assign role: {e}")
            return

        await interaction.edit_original_response(content=f"Role {role.mention} created and assigned to you!")

        logger.tree("Role Created", [
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Role", f"{options.name} ({role.id})"),
            ("Color", f"#{options.color}"),
        ], emoji="🎨")

    # =========================================================================
    # /deleterole
    # =========================================================================

    @app_commands.command(name="deleterole", description="Delete a role by name (Admin only)")
    @app_commands.guild_only()
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(name="The name of the role to delete")
    async def deleterole(self, interaction: discord.Interaction, name: str) -> None:
        if not await require_guild(interaction):
            return
        if not await require_capability(interaction, "administrator"):
            return

        try:
            options: DeleteRoleOptions = parse_options("deleterole", name=name)
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        role = discord.utils.get(interaction.guild.roles, name=options.name)
        if role is None:
            await interaction.response.send_message(f'Role "{options.name}" not found.', ephemeral=True)
            return

        try:
            await role.delete(reason=f"Deleted by {interaction.user} via /deleterole command")
        except discord.HTTPException as e:
            await interaction.response.send_message(f"Failed to delete role: {e}", ephemeral=True)
            return

        await interaction.response.send_message(f'Role "{options.name}" has been deleted.', ephemeral=True)

        logger.tree("Role Deleted", [
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Role", options.name),
        ], emoji="🗑️")

    # =========================================================================
    # /userrole
    # =========================================================================

    @app_commands.command(name="userrole", description="Add or remove a role from a user")
    @app_commands.guild_only()
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(
        user="The user to modify",
        role="The role to add or remove",
        action="Add or remove the role",
    )
    async def userrole(
        self,
        interaction: discord.Interaction,
        user: discord.Member,
        role: discord.Role,
        action: Literal["add", "remove"],
    ) -> None:
        if not await require_guild(interaction):
            return
        if not await require_capability(interaction, "administrator"):
            return

        try:
            options: UserRoleOptions = parse_options("userrole", user_id=user.id, role_id=role.id, action=action)
        except ValidationError as e:
            await reply_invalid_options(interaction, e)
            return

        if not role.is_assignable():
            await interaction.response.send_message(
                "I cannot manage that role. Make sure my role is higher than the target role.",
                ephemeral=True,
            )
            return

        try:
            if options.action == "add":
                await user.add_roles(role)
                message = f"Role {role.mention} added to {user.mention}."
            else:
                await user.remove_roles(role)
                message = f"Role {role.mention} removed from {user.mention}."
        except discord.HTTPException as e:
            await interaction.response.send_message(f"Failed to modify role: {e}", ephemeral=True)
            return

        await interaction.response.send_message(message, ephemeral=True)

        logger.tree("Role Updated", [
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Target", f"{user} ({user.id})"),
            ("Role", f"{role.name} ({role.id})"),
            ("Action", options.action),
        ], emoji="🏷️")


async def setup(bot: "LevelBot") -> None:
    await bot.add_cog(RolesCog(bot))
