import logging
from typing import Any, Dict, List, Optional, Tuple

import hikari

from config.settings import settings

from ..permissions.levels import PermLevel
from ..plugins.commands.parsers import ArgumentError, ArgumentParserFactory
from .constants import ERROR, WARNING

logger = logging.getLogger(__name__)

CommandPath = Tuple[str, ...]


class PrefixCommand:
    def __init__(
        self,
        path: CommandPath,
        callback: Any,
        description: str = "",
        aliases: Optional[List[str]] = None,
        level: PermLevel = PermLevel.EVERYONE,
        guild_only: bool = True,
        arguments: Optional[List[Any]] = None,
        separator: Optional[str] = None,
        bot_permissions: Optional[List[hikari.Permissions]] = None,
        plugin_name: Optional[str] = None,
        usage: Optional[str] = None,
    ):
        self.path = tuple(path)
        self.callback = callback
        self.description = description
        self.aliases = aliases or []
        self.level = level
        self.guild_only = guild_only
        self.arguments = arguments or []
        self.separator = separator
        self.bot_permissions = bot_permissions or []
        self.plugin_name = plugin_name
        self._usage = usage

    @property
    def name(self) -> str:
        return " ".join(self.path)

    @property
    def usage(self) -> str:
        if self._usage is not None:
            return self._usage
        return " ".join(arg.usage for arg in self.arguments)

    @property
    def alias_paths(self) -> List[CommandPath]:
        return [self.path[:-1] + (alias,) for alias in self.aliases]


class MessageCommandHandler:
    """Resolves prefixed messages to commands keyed by path and runs them."""

    def __init__(self, bot: Any):
        self.bot = bot
        self.commands: Dict[CommandPath, PrefixCommand] = {}
        self.prefix = settings.bot_prefix

    def add_command(self, command: PrefixCommand) -> None:
        self.commands[command.path] = command

        # Add aliases
        for alias_path in command.alias_paths:
            self.commands[alias_path] = command

        logger.debug(f"Added prefix command: {command.name} (aliases: {command.aliases})")

    def remove_command(self, name: str) -> None:
        path = tuple(name.lower().split())
        if path in self.commands:
            command = self.commands[path]

            # Remove main command and aliases
            self.commands.pop(command.path, None)
            for alias_path in command.alias_paths:
                self.commands.pop(alias_path, None)

            logger.debug(f"Removed prefix command: {name}")

    def get_commands(self) -> List[PrefixCommand]:
        """Registered commands without alias duplicates, ordered by path."""
        unique = {command.path: command for command in self.commands.values()}
        return [unique[path] for path in sorted(unique)]

    def resolve(self, content: str) -> Tuple[Optional[PrefixCommand], str]:
        """Find the longest registered path at the start of ``content``."""
        tokens = content.split()
        found: Optional[PrefixCommand] = None
        consumed = 0

        for depth in range(1, len(tokens) + 1):
            key = tuple(token.lower() for token in tokens[:depth])
            if key not in self.commands:
                break
            found = self.commands[key]
            consumed = depth

        if found is None:
            return None, ""

        remainder = content.split(None, consumed)
        arg_text = remainder[consumed] if len(remainder) > consumed else ""
        return found, arg_text.strip()

    async def handle_message(self, event: hikari.MessageCreateEvent) -> bool:
        # Ignore bot messages
        if event.author.is_bot:
            return False

        guild_id = getattr(event, "guild_id", None)
        prefix = await self.bot.get_guild_prefix(guild_id) if guild_id else self.prefix

        # Check if message starts with prefix
        if not event.content or not event.content.startswith(prefix):
            return False

        content = event.content[len(prefix):].strip()
        if not content:
            return False

        command, arg_text = self.resolve(content)
        if command is None:
            return False

        logger.info(f"Prefix command called: {prefix}{command.name} by {event.author.username}")

        ctx = PrefixContext(event, self.bot, arg_text, prefix=prefix, command=command)

        try:
            if command.guild_only and not ctx.guild_id:
                await ctx.respond(f"{WARNING}`{prefix}{command.name}` is not available in Direct Messages")
                return True

            guild = ctx.get_guild()

            # Check the caller's level against the command's floor
            level = await self.bot.permission_manager.get_perm_level(event.author, guild)
            if not level.is_at_least(command.level):
                logger.warning(
                    f"Permission denied: {event.author.username} ({level}) tried to use {command.name} ({command.level})"
                )
                await ctx.respond(f"{WARNING}**{command.level}** level is required to use `{prefix}{command.name}`")
                return True

            # Check the bot's own platform permissions
            if command.bot_permissions and guild is not None:
                missing = self._missing_bot_permissions(guild, command.bot_permissions)
                if missing:
                    perm_list = ", ".join(f"`{perm}`" for perm in missing)
                    await ctx.respond(f"{WARNING}I need the following permissions to do that: {perm_list}")
                    return True

            try:
                parsed_args = await ArgumentParserFactory.parse_arguments(
                    arg_text, command.arguments, self.bot, ctx.guild_id, command.separator
                )
            except ArgumentError as e:
                usage = f"{prefix}{command.name} {command.usage}".strip()
                await ctx.respond(f"{WARNING}{e}\nUsage: `{usage}`")
                return True

            # Execute command
            success = await command.callback(ctx, **parsed_args)
            logger.debug(f"Command {command.name} finished (success={bool(success)})")
            return True

        except Exception as e:
            logger.exception(f"Error executing prefix command {command.name}: {e}")
            try:
                await ctx.respond(f"{ERROR}Command failed: {e}")
            except hikari.HikariError as respond_error:
                logger.error(f"Could not report failure of {command.name}: {respond_error}")
            return True

    def _missing_bot_permissions(self, guild: hikari.Guild, required: List[hikari.Permissions]) -> List[str]:
        from .utils import calculate_member_permissions

        me = guild.get_my_member()
        if me is None:
            return [perm.name for perm in required]

        granted = calculate_member_permissions(me, guild)
        return [perm.name for perm in required if (granted & perm) != perm]


class PrefixContext:
    def __init__(
        self,
        event: hikari.MessageCreateEvent,
        bot: Any,
        args: str,
        prefix: Optional[str] = None,
        command: Optional[PrefixCommand] = None,
    ):
        self.event = event
        self.bot = bot
        self.args = args
        self.prefix = prefix or settings.bot_prefix
        self.command = command

        self.author = event.author
        self.member = getattr(event, "member", None)
        self.guild_id = getattr(event, "guild_id", None)
        self.channel_id = event.channel_id

    def get_guild(self) -> Optional[hikari.GatewayGuild]:
        if self.guild_id:
            return self.bot.cache.get_guild(self.guild_id)
        return None

    async def respond(self, content: str) -> None:
        await self.bot.rest.create_message(self.channel_id, content=content)
