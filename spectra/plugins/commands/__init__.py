"""Command system for bot plugins."""

from .argument_types import ArgumentType, CommandArgument
from .decorators import command
from .parsers import ArgumentError, ArgumentParserFactory
from .registry import CommandRegistry

__all__ = [
    "ArgumentType",
    "CommandArgument",
    "command",
    "ArgumentError",
    "ArgumentParserFactory",
    "CommandRegistry",
]
