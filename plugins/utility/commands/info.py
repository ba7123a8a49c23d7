from __future__ import annotations

import logging
from collections.abc import Callable
from email.utils import format_datetime
from typing import TYPE_CHECKING, Any

import hikari

from spectra.core.constants import LINESTART, SERVER_INFO
from spectra.core.message_handler import PrefixContext
from spectra.core.utils import snowflake_to_datetime
from spectra.plugins.commands import command

from ..config import ONLINE_STATUSES, TABLEFLIP

if TYPE_CHECKING:
    from ..plugin import UtilityPlugin

logger = logging.getLogger(__name__)


def count_online(guild: hikari.GatewayGuild) -> int:
    """Members whose visible status is online or idle."""
    presences = guild.get_presences()
    online = 0
    for member_id in guild.get_members():
        presence = presences.get(member_id)
        if presence is not None and presence.visible_status in ONLINE_STATUSES:
            online += 1
    return online


def describe_verification(level: hikari.GuildVerificationLevel | int) -> str:
    if level == hikari.GuildVerificationLevel.VERY_HIGH:
        return TABLEFLIP
    name = getattr(level, "name", str(level))
    return name.replace("_", " ").title()


def setup_info_commands(plugin: UtilityPlugin) -> list[Callable[..., Any]]:
    """Register informational utility commands."""

    @command(
        name="server",
        description="shows information about the server",
        aliases=["serverinfo", "srvr", "guildinfo"],
    )
    async def server_info(ctx: PrefixContext) -> bool:
        guild = ctx.get_guild()
        members = guild.get_members()

        owner = members.get(guild.owner_id)
        owner_text = f"**{owner.username}** #{owner.discriminator}" if owner else f"**{guild.owner_id}**"

        channels = guild.get_channels().values()
        text_channels = sum(1 for channel in channels if channel.type == hikari.ChannelType.GUILD_TEXT)
        voice_channels = sum(1 for channel in channels if channel.type == hikari.ChannelType.GUILD_VOICE)

        created_at = format_datetime(snowflake_to_datetime(guild.id), usegmt=True)

        lines = [
            f"{SERVER_INFO} Information about **{guild.name}**:",
            f"{LINESTART}ID: **{guild.id}**",
            f"{LINESTART}Owner: {owner_text}",
            f"{LINESTART}Location: **{guild.preferred_locale}**",
            f"{LINESTART}Creation: **{created_at}**",
            f"{LINESTART}Users: **{len(members)}** ({count_online(guild)} online)",
            f"{LINESTART}Channels: **{text_channels}** Text, **{voice_channels}** Voice",
            f"{LINESTART}Verification: **{describe_verification(guild.verification_level)}**",
        ]

        icon_url = guild.make_icon_url()
        if icon_url is not None:
            lines.append(f"{LINESTART}Server Icon: {icon_url}")

        await ctx.respond("\n".join(lines))
        return True

    return [server_info]
