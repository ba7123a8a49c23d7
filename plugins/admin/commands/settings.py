from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import hikari

from spectra.core.message_handler import PrefixContext
from spectra.database import FeedType
from spectra.permissions import PermLevel
from spectra.plugins.commands import ArgumentType, CommandArgument, command

from ..config import PREFIX_DISALLOWED_CHARS, PREFIX_MAX_LENGTH

if TYPE_CHECKING:
    from ..plugin import AdminPlugin

logger = logging.getLogger(__name__)


def setup_settings_commands(plugin: AdminPlugin) -> list[Callable[..., Any]]:
    """Register admin configuration commands."""

    @command(
        name="modrole",
        description="shows or sets the role that grants Moderator level",
        level=PermLevel.ADMIN,
        arguments=[CommandArgument("role", ArgumentType.ROLE, "role", required=False)],
    )
    async def manage_mod_role(ctx: PrefixContext, role: hikari.Role | None = None) -> bool:
        if role is None:
            guild_settings = await plugin.guild_settings.get_settings_for_guild(ctx.guild_id)
            current = guild_settings.mod_role_id if guild_settings else None
            if current is None:
                return await plugin.respond_warning(ctx, f"No moderator role is set. Use `{ctx.prefix}modrole <role>`")
            guild = ctx.get_guild()
            current_role = guild.get_role(current) if guild else None
            name = current_role.name if current_role else str(current)
            await ctx.respond(f"The moderator role is **{name}**")
            return True

        await plugin.guild_settings.set_mod_role(ctx.guild_id, role.id)
        logger.info(f"{ctx.author.username} set the moderator role of guild {ctx.guild_id} to {role.id}")
        return await plugin.respond_success(ctx, f"Members with **{role.name}** are now Moderators")

    @command(
        name="modlog",
        description="shows or sets the channel that receives the moderation log",
        level=PermLevel.ADMIN,
        arguments=[CommandArgument("channel", ArgumentType.CHANNEL, "channel", required=False)],
    )
    async def manage_mod_log(ctx: PrefixContext, channel: hikari.GuildChannel | None = None) -> bool:
        if channel is None:
            channel_id = await plugin.bot.feed_store.get_channel_id(ctx.guild_id, FeedType.MODLOG)
            if channel_id is None:
                return await plugin.respond_warning(ctx, f"No moderation log is set. Use `{ctx.prefix}modlog <channel>`")
            await ctx.respond(f"The moderation log is sent to <#{channel_id}>")
            return True

        if channel.type != hikari.ChannelType.GUILD_TEXT:
            return await plugin.respond_warning(ctx, "The moderation log must be a text channel")

        await plugin.bot.feed_store.set_feed(ctx.guild_id, FeedType.MODLOG, channel.id)
        logger.info(f"{ctx.author.username} set the modlog of guild {ctx.guild_id} to {channel.id}")
        return await plugin.respond_success(ctx, f"The moderation log will be sent to <#{channel.id}>")

    @command(
        name="prefix",
        description="shows or sets the command prefix for this server",
        level=PermLevel.ADMIN,
        arguments=[CommandArgument("new_prefix", ArgumentType.SHORTSTRING, "prefix", required=False)],
    )
    async def manage_prefix(ctx: PrefixContext, new_prefix: str | None = None) -> bool:
        if new_prefix is None:
            current_prefix = await plugin.bot.get_guild_prefix(ctx.guild_id)
            await ctx.respond(f"The prefix for this server is `{current_prefix}`")
            return True

        if len(new_prefix) > PREFIX_MAX_LENGTH:
            return await plugin.respond_warning(ctx, f"Prefix must be {PREFIX_MAX_LENGTH} characters or less")

        if any(char in PREFIX_DISALLOWED_CHARS for char in new_prefix):
            return await plugin.respond_warning(ctx, "Prefix cannot contain quotes or whitespace")

        await plugin.guild_settings.set_prefix(ctx.guild_id, new_prefix)
        logger.info(f"{ctx.author.username} set the prefix of guild {ctx.guild_id} to {new_prefix!r}")
        return await plugin.respond_success(ctx, f"The prefix is now `{new_prefix}`")

    return [manage_mod_role, manage_mod_log, manage_prefix]
