"""Argument parsers using strategy pattern."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

import hikari

from ...core.utils import format_duration, parse_duration
from .argument_types import ArgumentType, CommandArgument

logger = logging.getLogger(__name__)

_USER_MENTION = re.compile(r"^<@!?(\d+)>$")
_ROLE_MENTION = re.compile(r"^<@&(\d+)>$")
_CHANNEL_MENTION = re.compile(r"^<#(\d+)>$")
_SNOWFLAKE = re.compile(r"^\d{15,21}$")


class ArgumentError(Exception):
    """Raised when raw text cannot be turned into a command argument."""


def _extract_id(arg: str, mention: re.Pattern) -> int | None:
    match = mention.match(arg)
    if match:
        return int(match.group(1))
    if _SNOWFLAKE.match(arg):
        return int(arg)
    return None


def _check_bounds(value: int, definition: CommandArgument, render=str) -> int:
    low, high = definition.min_value, definition.max_value
    if (low is not None and value < low) or (high is not None and value > high):
        if low is not None and high is not None:
            raise ArgumentError(f"`{definition.name}` must be between {render(low)} and {render(high)}")
        if low is not None:
            raise ArgumentError(f"`{definition.name}` must be at least {render(low)}")
        raise ArgumentError(f"`{definition.name}` must be at most {render(high)}")
    return value


class ArgumentParser(ABC):
    """Base class for argument parsers."""

    @abstractmethod
    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        """Parse a string argument according to the definition."""
        pass


class StringArgumentParser(ArgumentParser):
    """Parser for string arguments."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        return arg


class IntegerArgumentParser(ArgumentParser):
    """Parser for integer arguments."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        try:
            value = int(arg)
        except ValueError:
            raise ArgumentError(f"`{arg}` is not a valid number") from None
        return _check_bounds(value, definition)


class TimeArgumentParser(ArgumentParser):
    """Parser for durations such as ``90``, ``15m`` or ``1h30m``; yields seconds."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        seconds = parse_duration(arg)
        if seconds is None:
            raise ArgumentError(f"`{arg}` is not a valid amount of time")
        return _check_bounds(seconds, definition, render=format_duration)


class LocalUserArgumentParser(ArgumentParser):
    """Parser for members of the guild the command was used in."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        guild = bot.cache.get_guild(guild_id) if guild_id else None
        if guild is None:
            raise ArgumentError("Members can only be looked up inside a server")

        user_id = _extract_id(arg, _USER_MENTION)
        if user_id is not None:
            member = guild.get_member(user_id)
            if member is None:
                raise ArgumentError(f'No member found matching "{arg}"')
            return member

        wanted = arg.lower()
        members = list(guild.get_members().values())

        # Exact matches win over prefix matches
        exact = [
            member
            for member in members
            if wanted in {
                member.username.lower(),
                f"{member.username}#{member.discriminator}".lower(),
                member.display_name.lower(),
            }
        ]
        candidates = exact or [
            member
            for member in members
            if member.username.lower().startswith(wanted) or member.display_name.lower().startswith(wanted)
        ]

        if not candidates:
            raise ArgumentError(f'No member found matching "{arg}"')
        if len(candidates) > 1:
            raise ArgumentError(f'Multiple members found matching "{arg}"')
        return candidates[0]


class UserArgumentParser(ArgumentParser):
    """Parser for user arguments."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        user_id = _extract_id(arg, _USER_MENTION)
        if user_id is None:
            raise ArgumentError(f"`{arg}` is not a user mention or ID")

        user = bot.cache.get_user(user_id)
        if user is not None:
            return user
        try:
            return await bot.rest.fetch_user(user_id)
        except hikari.NotFoundError:
            raise ArgumentError(f"No user found with ID {user_id}") from None


class RoleArgumentParser(ArgumentParser):
    """Parser for role arguments."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        guild = bot.cache.get_guild(guild_id) if guild_id else None
        if guild is None:
            raise ArgumentError("Roles can only be looked up inside a server")

        roles = guild.get_roles()
        role_id = _extract_id(arg, _ROLE_MENTION)
        if role_id is not None and role_id in roles:
            return roles[role_id]

        for role in roles.values():
            if role.name.lower() == arg.lower():
                return role

        raise ArgumentError(f'No role found matching "{arg}"')


class ChannelArgumentParser(ArgumentParser):
    """Parser for channel arguments."""

    async def parse(self, arg: str, definition: CommandArgument, bot: Any, guild_id: int | None) -> Any:
        guild = bot.cache.get_guild(guild_id) if guild_id else None
        if guild is None:
            raise ArgumentError("Channels can only be looked up inside a server")

        channels = guild.get_channels()
        channel_id = _extract_id(arg, _CHANNEL_MENTION)
        if channel_id is not None and channel_id in channels:
            return channels[channel_id]

        name = arg.lstrip("#").lower()
        for channel in channels.values():
            if channel.name and channel.name.lower() == name:
                return channel

        raise ArgumentError(f'No channel found matching "{arg}"')


class ArgumentParserFactory:
    """Factory for creating argument parsers."""

    _parsers = {
        ArgumentType.SHORTSTRING: StringArgumentParser(),
        ArgumentType.LONGSTRING: StringArgumentParser(),
        ArgumentType.INTEGER: IntegerArgumentParser(),
        ArgumentType.TIME: TimeArgumentParser(),
        ArgumentType.USER: UserArgumentParser(),
        ArgumentType.LOCALUSER: LocalUserArgumentParser(),
        ArgumentType.ROLE: RoleArgumentParser(),
        ArgumentType.CHANNEL: ChannelArgumentParser(),
    }

    @classmethod
    def get_parser(cls, arg_type: ArgumentType) -> ArgumentParser:
        """Get the appropriate parser for an argument type."""
        return cls._parsers.get(arg_type, StringArgumentParser())

    @staticmethod
    def split_arguments(text: str, command_args: list[CommandArgument], separator: str | None = None) -> list[str]:
        """Split raw argument text into one chunk per declared argument."""
        text = text.strip()
        if not text:
            return []

        if separator:
            parts = re.split(separator, text, maxsplit=max(len(command_args) - 1, 0), flags=re.IGNORECASE)
            return [part.strip() for part in parts]

        parts = []
        remaining = text
        for arg_def in command_args:
            if not remaining:
                break
            if arg_def.arg_type == ArgumentType.LONGSTRING:
                parts.append(remaining)
                remaining = ""
                break
            pieces = remaining.split(None, 1)
            parts.append(pieces[0])
            remaining = pieces[1] if len(pieces) > 1 else ""

        if remaining:
            raise ArgumentError(f"Unexpected text after the last argument: `{remaining}`")

        return parts

    @classmethod
    async def parse_arguments(
        cls,
        text: str,
        command_args: list[CommandArgument],
        bot: Any,
        guild_id: int | None,
        separator: str | None = None,
    ) -> dict[str, Any]:
        """Parse prefix command arguments based on command definitions."""
        parsed: dict[str, Any] = {}

        if not command_args:
            return parsed

        parts = cls.split_arguments(text, command_args, separator)

        for i, arg_def in enumerate(command_args):
            raw = parts[i] if i < len(parts) else ""
            if not raw:
                if arg_def.required:
                    raise ArgumentError(f"Missing required argument `{arg_def.name}`")
                parsed[arg_def.name] = arg_def.default
                continue

            parser = cls.get_parser(arg_def.arg_type)
            parsed[arg_def.name] = await parser.parse(raw, arg_def, bot, guild_id)
            logger.debug(f"Parsed argument {arg_def.name}: {raw!r}")

        return parsed
