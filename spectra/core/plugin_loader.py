import importlib.util
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any

from ..plugins.base import BasePlugin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluginMetadata:
    name: str
    version: str = "1.0.0"
    author: str = "Unknown"
    description: str = ""
    dependencies: list[str] = field(default_factory=list)

    @classmethod
    def from_module(cls, module: ModuleType) -> "PluginMetadata":
        values = dict(getattr(module, "PLUGIN_METADATA", None) or {"name": module.__name__})
        return cls(**{key: values[key] for key in cls.__dataclass_fields__ if key in values})


class PluginLoader:
    """Imports ``<directory>/<name>/__init__.py`` packages and drives their load/unload hooks."""

    def __init__(self, bot: Any) -> None:
        self.bot = bot
        self.plugins: dict[str, BasePlugin] = {}
        self.metadata: dict[str, PluginMetadata] = {}
        self.plugin_directories: list[Path] = []

    def add_plugin_directory(self, directory: str) -> None:
        path = Path(directory)
        if not path.is_dir():
            logger.warning(f"Plugin directory does not exist: {path}")
            return

        self.plugin_directories.append(path)
        logger.info(f"Added plugin directory: {path}")

    def discover_plugins(self) -> list[str]:
        discovered = [
            plugin_path.name
            for directory in self.plugin_directories
            for plugin_path in sorted(directory.iterdir())
            if not plugin_path.name.startswith("_") and (plugin_path / "__init__.py").is_file()
        ]
        logger.info(f"Discovered plugins: {discovered}")
        return discovered

    def _import(self, plugin_name: str) -> ModuleType:
        module_name = f"plugins.{plugin_name}"
        for directory in self.plugin_directories:
            init_file = directory / plugin_name / "__init__.py"
            if not init_file.is_file():
                continue

            spec = importlib.util.spec_from_file_location(module_name, init_file)
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)
            return module

        raise ImportError(f"Plugin {plugin_name} not found")

    async def load_plugin(self, plugin_name: str) -> bool:
        if plugin_name in self.plugins:
            logger.info(f"Plugin {plugin_name} is already loaded")
            return True

        try:
            module = self._import(plugin_name)
            metadata = PluginMetadata.from_module(module)

            missing = [dep for dep in metadata.dependencies if dep not in self.plugins]
            if missing:
                logger.error(f"Plugin {plugin_name} requires {', '.join(missing)} which is not loaded")
                return False

            # Every plugin package exposes setup(bot) -> BasePlugin
            plugin = module.setup(self.bot)
            await plugin.on_load()

        except Exception as e:
            logger.exception(f"Failed to load plugin {plugin_name}: {e}")
            return False

        self.plugins[plugin_name] = plugin
        self.metadata[plugin_name] = metadata
        logger.info(f"Loaded plugin {plugin_name} v{metadata.version}")
        return True

    async def unload_plugin(self, plugin_name: str) -> bool:
        plugin = self.plugins.pop(plugin_name, None)
        if plugin is None:
            logger.warning(f"Plugin {plugin_name} is not loaded")
            return False

        self.metadata.pop(plugin_name, None)
        sys.modules.pop(f"plugins.{plugin_name}", None)

        try:
            await plugin.on_unload()
        except Exception as e:
            logger.error(f"Error while unloading plugin {plugin_name}: {e}")
            return False

        logger.info(f"Unloaded plugin {plugin_name}")
        return True

    async def load_all_plugins(self, plugin_names: list[str]) -> None:
        for plugin_name in plugin_names:
            await self.load_plugin(plugin_name)
