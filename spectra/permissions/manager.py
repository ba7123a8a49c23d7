import logging

import hikari

from config.settings import settings

from ..database.guild_settings import SettingsStore
from ..database.models import GuildSettings
from .levels import PermLevel

logger = logging.getLogger(__name__)


class PermissionManager:
    def __init__(self, settings_store: SettingsStore) -> None:
        self.settings_store = settings_store

    async def get_perm_level(self, user: hikari.User, guild: hikari.Guild | None) -> PermLevel:
        """Compute a user's level in a guild from fresh settings and platform state."""
        guild_settings = None
        if guild is not None:
            guild_settings = await self.settings_store.get_settings_for_guild(guild.id)
        return self.resolve_perm_level(user, guild, guild_settings)

    def resolve_perm_level(
        self,
        user: hikari.User,
        guild: hikari.Guild | None,
        guild_settings: GuildSettings | None,
    ) -> PermLevel:
        if user.id in settings.owner_ids:
            return PermLevel.OWNER

        if guild is None:
            return PermLevel.EVERYONE

        # Server owner always outranks everyone else in the guild
        if user.id == guild.owner_id:
            logger.debug(f"User {user.username} is server owner")
            return PermLevel.OWNER

        member = guild.get_member(user.id)
        if member is None:
            return PermLevel.EVERYONE

        try:
            from ..core.utils import calculate_member_permissions

            member_permissions = calculate_member_permissions(member, guild)
            if member_permissions & (hikari.Permissions.ADMINISTRATOR | hikari.Permissions.MANAGE_GUILD):
                return PermLevel.ADMIN
        except Exception as e:
            logger.debug(f"Could not calculate member permissions: {e}")

        if guild_settings and guild_settings.mod_role_id and guild_settings.mod_role_id in member.role_ids:
            return PermLevel.MODERATOR

        return PermLevel.EVERYONE
