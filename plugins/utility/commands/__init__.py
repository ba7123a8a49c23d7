from .help import setup_help_commands
from .info import setup_info_commands

__all__ = [
    "setup_help_commands",
    "setup_info_commands",
]
