from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable

import hikari

from spectra.core.constants import LINESTART, MODLOG_MUTE
from spectra.core.message_handler import PrefixContext
from spectra.core.utils import can_interact, can_interact_role, format_duration
from spectra.database import FeedType
from spectra.permissions import PermLevel
from spectra.plugins.commands import ArgumentType, CommandArgument, command

from ..config import (
    DEFAULT_REASON,
    MAX_MUTE_SECONDS,
    MUTE_LEVEL,
    MUTED_CHANNEL_TYPES,
    MUTED_DENY,
    MUTED_ROLE_NAME,
    REASON_SEPARATOR,
)

if TYPE_CHECKING:
    from ..plugin import ModerationPlugin

logger = logging.getLogger(__name__)


def describe_remaining(unmute_at: datetime, now: datetime) -> str:
    seconds = int((unmute_at - now).total_seconds())
    if seconds < 0:
        return f"ended {format_duration(seconds)} ago"
    return f"ends in {format_duration(seconds)}"


def setup_mute_commands(plugin: ModerationPlugin) -> list[Callable[..., Any]]:
    """Register mute and its sub-commands."""

    @command(
        name="mute",
        description="mutes the specified user for the given time",
        level=MUTE_LEVEL,
        arguments=[
            CommandArgument("target", ArgumentType.LOCALUSER, "username"),
            CommandArgument(
                "duration", ArgumentType.TIME, "for <time>", min_value=0, max_value=MAX_MUTE_SECONDS
            ),
            CommandArgument("reason", ArgumentType.LONGSTRING, "for <reason>", required=False),
        ],
        separator=REASON_SEPARATOR,
        bot_permissions=[hikari.Permissions.MANAGE_ROLES],
        usage="<username> for <time> [for <reason>]",
    )
    async def mute(
        ctx: PrefixContext, target: hikari.Member, duration: int, reason: str | None = None
    ) -> bool:
        guild = ctx.get_guild()
        reason = reason or DEFAULT_REASON

        muted_role = plugin.get_muted_role(guild)
        if muted_role is None:
            return await plugin.warn_missing_muted_role(ctx)

        target_level = await plugin.permissions.get_perm_level(target, guild)
        if target_level.is_at_least(MUTE_LEVEL):
            return await plugin.respond_warning(
                ctx, f"**{target.username}** cannot be muted because they are listed as {target_level}"
            )

        me = plugin.get_bot_member(guild)
        if me is None or not can_interact(me, target, guild):
            return await plugin.respond_warning(ctx, f"I cannot mute **{target.username}** due to permission hierarchy")

        if not can_interact_role(me, muted_role, guild):
            return await plugin.respond_warning(
                ctx,
                f'I cannot mute **{target.username}** because the "{muted_role.name}" role is above my highest role!',
            )

        async with plugin.locks.acquire((target.id, guild.id)):
            try:
                await plugin.rest.add_role_to_member(
                    guild.id, target.id, muted_role.id, reason=f"Muted by {ctx.author.username}: {reason}"
                )
                unmute_at = datetime.now(timezone.utc) + timedelta(seconds=duration)
                await plugin.mutes.upsert(target.id, guild.id, unmute_at)
            except Exception as e:
                logger.error(f"Failed to mute {target.username} ({target.id}) in guild {guild.id}: {e}")
                return await plugin.respond_error(ctx, f"Failed to mute **{target.username}**")

            await plugin.respond_success(ctx, f"**{target.username}** was muted for {format_duration(duration)}")
            await plugin.feeds.submit_text(
                FeedType.MODLOG,
                guild,
                f"{MODLOG_MUTE} **{ctx.author.username}** muted **{target.username}** (ID:{target.id}) "
                f"for {format_duration(duration)} for {reason}",
            )

        logger.info(f"{ctx.author.username} muted {target.username} in guild {guild.id} for {duration}s")
        return True

    @command(
        name="mute list",
        description="lists users with a mute on the server",
        level=MUTE_LEVEL,
    )
    async def mute_list(ctx: PrefixContext) -> bool:
        guild = ctx.get_guild()

        muted_role = plugin.get_muted_role(guild)
        if muted_role is None:
            return await plugin.warn_missing_muted_role(ctx)

        now = datetime.now(timezone.utc)
        records = {record.user_id: record for record in await plugin.mutes.list_for_guild(guild.id)}
        members = guild.get_members()

        lines = []
        holders = [member for member in members.values() if muted_role.id in member.role_ids]
        for member in holders:
            line = f"**{member.username}** (ID:{member.id})"
            record = records.get(member.id)
            if record is not None:
                line += f" {describe_remaining(record.unmute_at, now)}"
            lines.append(line)

        # Stored mutes for users that have left the server
        absent = [record for user_id, record in records.items() if user_id not in members]
        for record in absent:
            lines.append(f"ID:{record.user_id} {describe_remaining(record.unmute_at, now)}")

        count = len(holders) + len(absent)
        header = f"**{count}** users muted on **{guild.name}**:"
        return await plugin.respond_success(ctx, "\n".join([header, *(LINESTART + line for line in lines)]))

    @command(
        name="mute setup",
        description="creates a Muted role and denies it chat in every channel",
        level=PermLevel.ADMIN,
        bot_permissions=[hikari.Permissions.MANAGE_ROLES, hikari.Permissions.MANAGE_CHANNELS],
    )
    async def mute_setup(ctx: PrefixContext) -> bool:
        guild = ctx.get_guild()
        audit_reason = f"Mute setup by {ctx.author.username}"

        muted_role = plugin.get_muted_role(guild)
        created = muted_role is None
        if created:
            try:
                muted_role = await plugin.rest.create_role(
                    guild.id, name=MUTED_ROLE_NAME, permissions=hikari.Permissions.NONE, reason=audit_reason
                )
            except hikari.HikariError as e:
                logger.error(f"Failed to create muted role in guild {guild.id}: {e}")
                return await plugin.respond_error(ctx, f'Failed to create the "{MUTED_ROLE_NAME}" role')
        else:
            me = plugin.get_bot_member(guild)
            if me is None or not can_interact_role(me, muted_role, guild):
                return await plugin.respond_warning(
                    ctx, f'I cannot manage the "{muted_role.name}" role because it is above my highest role!'
                )

        updated = 0
        failed = 0
        for channel in guild.get_channels().values():
            if channel.type not in MUTED_CHANNEL_TYPES:
                continue
            try:
                await plugin.rest.edit_permission_overwrite(
                    channel.id,
                    muted_role.id,
                    target_type=hikari.PermissionOverwriteType.ROLE,
                    deny=MUTED_DENY,
                    reason=audit_reason,
                )
                updated += 1
            except hikari.HikariError as e:
                failed += 1
                logger.warning(f"Could not set muted overwrite in channel {channel.id}: {e}")

        action = "Created" if created else "Updated"
        message = f"{action} the **{muted_role.name}** role and applied it to {updated} channels"
        if failed:
            message += f" ({failed} channels could not be updated)"

        await plugin.respond_success(ctx, message)
        await plugin.feeds.submit_text(
            FeedType.MODLOG,
            guild,
            f"{MODLOG_MUTE} **{ctx.author.username}** set up the **{muted_role.name}** role",
        )
        return True

    return [mute, mute_list, mute_setup]
