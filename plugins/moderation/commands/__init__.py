from .mute import setup_mute_commands
from .unmute import setup_unmute_commands

__all__ = [
    "setup_mute_commands",
    "setup_unmute_commands",
]
