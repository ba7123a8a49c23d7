"""Static configuration values for the moderation plugin."""

import hikari

from spectra.permissions import PermLevel

MUTED_ROLE_NAME = "Muted"
MUTE_LEVEL = PermLevel.MODERATOR
MAX_MUTE_SECONDS = 43_200  # 12 hours
DEFAULT_REASON = "[no reason specified]"

# "mute <user> for <time> for <reason>"
REASON_SEPARATOR = r"\s+for\s+"

MUTED_DENY = (
    hikari.Permissions.SEND_MESSAGES
    | hikari.Permissions.ADD_REACTIONS
    | hikari.Permissions.SEND_MESSAGES_IN_THREADS
    | hikari.Permissions.CREATE_PUBLIC_THREADS
    | hikari.Permissions.SPEAK
)

MUTED_CHANNEL_TYPES = {
    hikari.ChannelType.GUILD_TEXT,
    hikari.ChannelType.GUILD_VOICE,
    hikari.ChannelType.GUILD_CATEGORY,
}
