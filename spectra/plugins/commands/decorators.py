"""Command decorators for prefix command creation."""

import hikari

from ...permissions.levels import PermLevel
from .argument_types import CommandArgument


def command(
    name: str,
    description: str = "",
    aliases: list[str] | None = None,
    level: PermLevel = PermLevel.EVERYONE,
    guild_only: bool = True,
    arguments: list[CommandArgument] | None = None,
    separator: str | None = None,
    bot_permissions: list[hikari.Permissions] | None = None,
    usage: str | None = None,
):
    """
    Declare a prefix command.

    ``name`` is the command path; sub-commands are declared with the parent's
    path followed by their own name, e.g. ``"mute list"``. The metadata is
    picked up by the plugin's CommandRegistry when the plugin loads.
    """

    def decorator(func):
        func._prefix_command = {
            "path": tuple(name.lower().split()),
            "description": description,
            "aliases": [alias.lower() for alias in aliases or []],
            "level": level,
            "guild_only": guild_only,
            "arguments": arguments or [],
            "separator": separator,
            "bot_permissions": bot_permissions or [],
            "usage": usage,
        }
        return func

    return decorator
