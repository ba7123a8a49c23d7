from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from spectra.core.constants import LINESTART
from spectra.core.message_handler import PrefixContext
from spectra.plugins.commands import ArgumentType, CommandArgument, command

if TYPE_CHECKING:
    from ..plugin import UtilityPlugin

logger = logging.getLogger(__name__)


def setup_help_commands(plugin: UtilityPlugin) -> list[Callable[..., Any]]:
    @command(
        name="help",
        description="lists the commands you can use",
        guild_only=False,
        arguments=[CommandArgument("name", ArgumentType.LONGSTRING, "command", required=False)],
    )
    async def help_command(ctx: PrefixContext, name: str | None = None) -> bool:
        level = await plugin.permissions.get_perm_level(ctx.author, ctx.get_guild())
        handler = plugin.bot.message_handler

        if name:
            found, _ = handler.resolve(name)
            if found is None or not level.is_at_least(found.level):
                return await plugin.respond_warning(ctx, f"No command called `{name}` is available to you")
            commands = [found]
        else:
            commands = [cmd for cmd in handler.get_commands() if level.is_at_least(cmd.level)]

        lines = [f"**Spectra** commands available to you ({level}):"]
        for cmd in commands:
            usage = f"{ctx.prefix}{cmd.name} {cmd.usage}".strip()
            line = f"{LINESTART}`{usage}` - {cmd.description}"
            if cmd.aliases:
                line += f" (aliases: {', '.join(cmd.aliases)})"
            lines.append(line)

        await ctx.respond("\n".join(lines))
        return True

    return [help_command]
