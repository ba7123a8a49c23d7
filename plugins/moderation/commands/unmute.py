from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

import hikari

from spectra.core.constants import MODLOG_UNMUTE
from spectra.core.message_handler import PrefixContext
from spectra.core.utils import can_interact, can_interact_role
from spectra.database import FeedType
from spectra.plugins.commands import ArgumentType, CommandArgument, command

from ..config import DEFAULT_REASON, MUTE_LEVEL, REASON_SEPARATOR

if TYPE_CHECKING:
    from ..plugin import ModerationPlugin

logger = logging.getLogger(__name__)


def setup_unmute_commands(plugin: ModerationPlugin) -> list[Callable[..., Any]]:
    @command(
        name="unmute",
        description="removes a mute from the specified user",
        level=MUTE_LEVEL,
        arguments=[
            CommandArgument("target", ArgumentType.LOCALUSER, "username"),
            CommandArgument("reason", ArgumentType.LONGSTRING, "for <reason>", required=False),
        ],
        separator=REASON_SEPARATOR,
        bot_permissions=[hikari.Permissions.MANAGE_ROLES],
        usage="<username> [for <reason>]",
    )
    async def unmute(ctx: PrefixContext, target: hikari.Member, reason: str | None = None) -> bool:
        guild = ctx.get_guild()
        reason = reason or DEFAULT_REASON

        muted_role = plugin.get_muted_role(guild)
        if muted_role is None:
            return await plugin.warn_missing_muted_role(ctx)

        me = plugin.get_bot_member(guild)
        if me is None or not can_interact(me, target, guild):
            return await plugin.respond_warning(ctx, f"I cannot unmute **{target.username}** due to permission hierarchy")

        if not can_interact_role(me, muted_role, guild):
            return await plugin.respond_warning(
                ctx,
                f'I cannot unmute **{target.username}** because the "{muted_role.name}" role is above my highest role!',
            )

        async with plugin.locks.acquire((target.id, guild.id)):
            has_role = muted_role.id in target.role_ids
            record = await plugin.mutes.get(target.id, guild.id)
            if not has_role and record is None:
                return await plugin.respond_warning(ctx, f"**{target.username}** is not muted")

            try:
                if has_role:
                    await plugin.rest.remove_role_from_member(
                        guild.id, target.id, muted_role.id, reason=f"Unmuted by {ctx.author.username}: {reason}"
                    )
                await plugin.mutes.delete(target.id, guild.id)
            except Exception as e:
                logger.error(f"Failed to unmute {target.username} ({target.id}) in guild {guild.id}: {e}")
                return await plugin.respond_error(ctx, f"Failed to unmute **{target.username}**")

            await plugin.respond_success(ctx, f"**{target.username}** was unmuted")
            await plugin.feeds.submit_text(
                FeedType.MODLOG,
                guild,
                f"{MODLOG_UNMUTE} **{ctx.author.username}** unmuted **{target.username}** (ID:{target.id}) for {reason}",
            )

        logger.info(f"{ctx.author.username} unmuted {target.username} in guild {guild.id}")
        return True

    return [unmute]
