from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from config.settings import settings
from spectra.core.constants import MODLOG_UNMUTE
from spectra.database import FeedType, MuteRecord

if TYPE_CHECKING:
    from .plugin import ModerationPlugin

logger = logging.getLogger(__name__)


class MuteScheduler:
    """Periodically lifts mutes whose ``unmute_at`` has passed."""

    def __init__(self, plugin: ModerationPlugin, interval: float | None = None) -> None:
        self.plugin = plugin
        self.interval = interval if interval is not None else settings.mute_check_interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            logger.warning("Mute scheduler is already running")
            return

        self._task = asyncio.create_task(self._run())
        logger.info(f"Mute scheduler started (every {self.interval}s)")

    async def stop(self) -> None:
        if self.running:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            logger.info("Mute scheduler stopped")

        self._task = None

    async def _run(self) -> None:
        while True:
            try:
                await self.sweep()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Error in mute sweep: {e}")

            await asyncio.sleep(self.interval)

    async def sweep(self, now: datetime | None = None) -> int:
        """Lift every expired mute once; returns how many were lifted."""
        now = now or datetime.now(timezone.utc)
        lifted = 0

        for record in await self.plugin.mutes.list_expired(now):
            try:
                if await self._lift(record, now):
                    lifted += 1
            except Exception as e:
                # Left in place, picked up again on the next pass
                logger.error(f"Failed to lift mute for user {record.user_id} in guild {record.guild_id}: {e}")

        if lifted:
            logger.info(f"Lifted {lifted} expired mute(s)")
        return lifted

    async def _lift(self, record: MuteRecord, now: datetime) -> bool:
        async with self.plugin.locks.acquire((record.user_id, record.guild_id)):
            # Re-read under the lock: a new mute may have extended it
            current = await self.plugin.mutes.get(record.user_id, record.guild_id)
            if current is None or current.unmute_at > now:
                return False

            guild = self.plugin.cache.get_guild(record.guild_id)
            member = guild.get_member(record.user_id) if guild else None
            role = self.plugin.get_muted_role(guild) if guild else None

            if member is not None and role is not None and role.id in member.role_ids:
                await self.plugin.rest.remove_role_from_member(guild.id, member.id, role.id, reason="Mute expired")

            await self.plugin.mutes.delete(record.user_id, record.guild_id)

            if guild is not None:
                name = f"**{member.username}**" if member else "A user"
                await self.plugin.feeds.submit_text(
                    FeedType.MODLOG,
                    guild,
                    f"{MODLOG_UNMUTE} {name} (ID:{record.user_id}) was automatically unmuted",
                )

        logger.debug(f"Lifted mute for user {record.user_id} in guild {record.guild_id}")
        return True
