"""Command argument types and definitions."""

import enum
from dataclasses import dataclass
from typing import Any


class ArgumentType(enum.Enum):
    USER = "user"
    LOCALUSER = "localuser"
    ROLE = "role"
    CHANNEL = "channel"
    INTEGER = "integer"
    TIME = "time"
    SHORTSTRING = "shortstring"
    LONGSTRING = "longstring"


@dataclass(frozen=True)
class CommandArgument:
    """Declares one positional argument of a prefix command."""

    name: str
    arg_type: ArgumentType
    description: str = ""
    required: bool = True
    min_value: int | None = None
    max_value: int | None = None
    default: Any = None

    @property
    def usage(self) -> str:
        label = self.description or self.name
        return f"<{label}>" if self.required else f"[{label}]"
