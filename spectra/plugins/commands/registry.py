"""Command registration system."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Handles command registration for plugins."""

    def __init__(self, plugin: Any):
        self.plugin = plugin
        self.bot = plugin.bot
        self.logger = logging.getLogger(f"registry.{plugin.name}")
        self._commands: list[Any] = []

    async def register_commands(self) -> None:
        """Register all commands found in the plugin, parents before sub-commands."""
        from ...core.message_handler import PrefixCommand

        found = []
        for attr_name in dir(self.plugin):
            attr = getattr(self.plugin, attr_name)
            if isinstance(getattr(attr, "_prefix_command", None), dict):
                found.append((attr_name, attr))

        found.sort(key=lambda item: len(item[1]._prefix_command["path"]))

        for attr_name, attr in found:
            try:
                meta = attr._prefix_command
                path = meta["path"]

                if len(path) > 1 and path[:-1] not in self.bot.message_handler.commands:
                    self.logger.error(f"Cannot register {' '.join(path)}: parent command {' '.join(path[:-1])} is missing")
                    continue

                prefix_cmd = PrefixCommand(
                    path=path,
                    callback=attr,
                    description=meta.get("description", ""),
                    aliases=meta.get("aliases", []),
                    level=meta["level"],
                    guild_only=meta.get("guild_only", True),
                    arguments=meta.get("arguments", []),
                    separator=meta.get("separator"),
                    bot_permissions=meta.get("bot_permissions", []),
                    plugin_name=self.plugin.name,
                    usage=meta.get("usage"),
                )
                self.bot.message_handler.add_command(prefix_cmd)
                if attr not in self._commands:  # Avoid duplicates
                    self._commands.append(attr)
                self.logger.info(f"Registered prefix command: {prefix_cmd.name} from plugin {self.plugin.name}")

            except Exception as e:
                self.logger.error(f"Failed to register prefix command {attr_name}: {e}")

    async def unregister_commands(self) -> None:
        """Unregister all commands, sub-commands first."""
        for command in sorted(self._commands, key=lambda cmd: -len(cmd._prefix_command["path"])):
            try:
                name = " ".join(command._prefix_command["path"])
                self.bot.message_handler.remove_command(name)
                self.logger.debug(f"Removed prefix command: {name}")
            except Exception as e:
                self.logger.error(f"Error unregistering command: {e}")

        self._commands.clear()

    @property
    def commands(self) -> list[Any]:
        return list(self._commands)
