import logging

from sqlalchemy import select

from .manager import DatabaseManager
from .models import GuildSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Per-guild configuration used by permission checks and prefix lookup."""

    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def get_settings_for_guild(self, guild_id: int) -> GuildSettings | None:
        async with self.db.session() as session:
            result = await session.execute(select(GuildSettings).where(GuildSettings.guild_id == guild_id))
            return result.scalar_one_or_none()

    async def _update(self, guild_id: int, **values) -> GuildSettings:
        async with self.db.session() as session:
            result = await session.execute(select(GuildSettings).where(GuildSettings.guild_id == guild_id))
            guild_settings = result.scalar_one_or_none()

            if guild_settings:
                for key, value in values.items():
                    setattr(guild_settings, key, value)
            else:
                guild_settings = GuildSettings(guild_id=guild_id, **values)
                session.add(guild_settings)

            await session.commit()

        logger.info(f"Updated settings for guild {guild_id}: {values}")
        return guild_settings

    async def set_mod_role(self, guild_id: int, role_id: int | None) -> GuildSettings:
        return await self._update(guild_id, mod_role_id=role_id)

    async def set_prefix(self, guild_id: int, prefix: str | None) -> GuildSettings:
        return await self._update(guild_id, prefix=prefix)
