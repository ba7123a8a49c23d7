"""Utility functions shared by the core and the plugins."""

import re
from datetime import datetime, timezone

import hikari

DISCORD_EPOCH_MS = 1420070400000

_DURATION_UNITS = (
    ("week", 604800),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)

_UNIT_ALIASES = {
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}

_DURATION_TOKEN = re.compile(r"(\d+)\s*([a-z]*)")


def calculate_member_permissions(
    member: hikari.Member, guild: hikari.Guild, channel: hikari.GuildChannel | None = None
) -> hikari.Permissions:
    """
    Calculate the effective permissions for a member in a guild or channel.

    Args:
        member: The guild member to calculate permissions for
        guild: The guild the member belongs to
        channel: Optional channel to include channel overwrites

    Returns:
        The calculated permissions for the member
    """
    # Start with @everyone permissions
    everyone_role = guild.get_role(guild.id)  # @everyone role has same ID as guild
    permissions = everyone_role.permissions if everyone_role else hikari.Permissions.NONE

    # Add permissions from all member roles
    for role_id in member.role_ids:
        role = guild.get_role(role_id)
        if role:
            permissions |= role.permissions

    # If member has administrator permission, return all permissions
    if permissions & hikari.Permissions.ADMINISTRATOR:
        return ~hikari.Permissions.NONE  # All permissions set

    # Apply channel overwrites if channel is provided
    if channel and hasattr(channel, "permission_overwrites"):
        # Apply @everyone overwrites first
        everyone_overwrite = channel.permission_overwrites.get(guild.id)
        if everyone_overwrite:
            permissions &= ~everyone_overwrite.deny
            permissions |= everyone_overwrite.allow

        # Apply role overwrites
        for role_id in member.role_ids:
            role_overwrite = channel.permission_overwrites.get(role_id)
            if role_overwrite:
                permissions &= ~role_overwrite.deny
                permissions |= role_overwrite.allow

        # Apply member-specific overwrites (highest priority)
        member_overwrite = channel.permission_overwrites.get(member.id)
        if member_overwrite:
            permissions &= ~member_overwrite.deny
            permissions |= member_overwrite.allow

    return permissions


def find_role_by_name(guild: hikari.Guild, name: str) -> hikari.Role | None:
    """Return the first guild role whose name matches ``name`` case-insensitively."""
    wanted = name.lower()
    for role in guild.get_roles().values():
        if role.name.lower() == wanted:
            return role
    return None


def top_role_position(member: hikari.Member, guild: hikari.Guild) -> int:
    positions = [role.position for role_id in member.role_ids if (role := guild.get_role(role_id)) is not None]
    return max(positions, default=0)


def can_interact(actor: hikari.Member, target: hikari.Member, guild: hikari.Guild) -> bool:
    """Whether ``actor`` is allowed by the role hierarchy to act on ``target``."""
    if actor.id == guild.owner_id:
        return True
    if target.id == guild.owner_id:
        return False
    return top_role_position(actor, guild) > top_role_position(target, guild)


def can_interact_role(actor: hikari.Member, role: hikari.Role, guild: hikari.Guild) -> bool:
    """Whether ``actor``'s highest role outranks ``role``."""
    if actor.id == guild.owner_id:
        return True
    return top_role_position(actor, guild) > role.position


def snowflake_to_datetime(snowflake: int) -> datetime:
    """Decode the creation timestamp embedded in a Discord snowflake."""
    milliseconds = (int(snowflake) >> 22) + DISCORD_EPOCH_MS
    return datetime.fromtimestamp(milliseconds / 1000, tz=timezone.utc)


def format_duration(seconds: int | float) -> str:
    """
    Render a duration largest unit first, e.g. ``1 day, 2 hours, 5 seconds``.

    Negative input is rendered by its magnitude; callers decide how to
    phrase overdue values.
    """
    remaining = abs(int(seconds))
    parts = []
    for name, size in _DURATION_UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount} {name}" + ("" if amount == 1 else "s"))

    return ", ".join(parts) if parts else "0 seconds"


def parse_duration(text: str) -> int | None:
    """
    Parse strings such as ``90``, ``10m``, ``1h30m`` or ``2 hours 5 minutes``
    into seconds. Bare numbers are seconds. Returns None when invalid.
    """
    cleaned = text.strip().lower().replace(",", " ")
    if not cleaned:
        return None

    total = 0
    position = 0
    for match in _DURATION_TOKEN.finditer(cleaned):
        # Only whitespace may sit between tokens
        if cleaned[position:match.start()].strip():
            return None
        amount, unit = match.groups()
        if unit not in _UNIT_ALIASES:
            return None
        total += int(amount) * _UNIT_ALIASES[unit]
        position = match.end()

    if position == 0 or cleaned[position:].strip():
        return None
    return total
