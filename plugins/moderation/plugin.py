from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import hikari

from spectra.core.event_system import event_listener
from spectra.core.message_handler import PrefixContext
from spectra.core.utils import find_role_by_name
from spectra.plugins.base import BasePlugin

from .commands import setup_mute_commands, setup_unmute_commands
from .config import MUTED_ROLE_NAME
from .scheduler import MuteScheduler

logger = logging.getLogger(__name__)


class ModerationPlugin(BasePlugin):
    def __init__(self, bot: Any) -> None:
        super().__init__(bot)
        self.scheduler = MuteScheduler(self)
        self._register_commands()

    def _register_commands(self) -> None:
        command_factories = setup_mute_commands(self) + setup_unmute_commands(self)

        for command_func in command_factories:
            setattr(self, command_func.__name__, command_func)

    async def on_load(self) -> None:
        await super().on_load()
        self.scheduler.start()

    async def on_unload(self) -> None:
        await self.scheduler.stop()
        await super().on_unload()

    def get_muted_role(self, guild: hikari.Guild) -> hikari.Role | None:
        return find_role_by_name(guild, MUTED_ROLE_NAME)

    async def warn_missing_muted_role(self, ctx: PrefixContext) -> bool:
        return await self.respond_warning(
            ctx,
            f'No "{MUTED_ROLE_NAME}" role exists! Please add and set up a "{MUTED_ROLE_NAME}" role, '
            f"or use `{ctx.prefix}mute setup` to have one made automatically.",
        )

    @event_listener("member_join")
    async def on_member_join(self, member: hikari.Member) -> None:
        """Give the muted role back to members who leave and rejoin to dodge a mute."""
        record = await self.mutes.get(member.id, member.guild_id)
        if record is None or record.unmute_at <= datetime.now(timezone.utc):
            return

        guild = self.cache.get_guild(member.guild_id)
        role = self.get_muted_role(guild) if guild else None
        if role is None:
            self.logger.warning(f"Cannot restore mute for {member.id} in guild {member.guild_id}: no muted role")
            return

        async with self.locks.acquire((member.id, member.guild_id)):
            try:
                await self.rest.add_role_to_member(
                    member.guild_id, member.id, role.id, reason="Mute restored after rejoining"
                )
                self.logger.info(f"Restored mute for {member.username} in guild {member.guild_id}")
            except hikari.HikariError as e:
                self.logger.error(f"Failed to restore mute for {member.id} in guild {member.guild_id}: {e}")
