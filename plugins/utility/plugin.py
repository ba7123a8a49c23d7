from __future__ import annotations

import logging
from typing import Any

from spectra.plugins.base import BasePlugin

from .commands import setup_help_commands, setup_info_commands

logger = logging.getLogger(__name__)


class UtilityPlugin(BasePlugin):
    def __init__(self, bot: Any) -> None:
        super().__init__(bot)
        self._register_commands()

    def _register_commands(self) -> None:
        command_factories = setup_info_commands(self) + setup_help_commands(self)

        for command_func in command_factories:
            setattr(self, command_func.__name__, command_func)
