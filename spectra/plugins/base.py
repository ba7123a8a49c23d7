from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import hikari

from ..core.constants import ERROR, SUCCESS, WARNING

if TYPE_CHECKING:
    from ..core.bot import SpectraBot
    from ..core.message_handler import PrefixContext

logger = logging.getLogger(__name__)


class BasePlugin:
    def __init__(self, bot: SpectraBot) -> None:
        self.bot = bot
        self.name = self.__class__.__name__.lower().replace("plugin", "")
        self.logger = logging.getLogger(f"plugin.{self.name}")
        self._event_listeners: list[Any] = []
        # Import CommandRegistry here to avoid circular import
        from .commands import CommandRegistry

        self._command_registry: CommandRegistry = CommandRegistry(self)
        self.events = bot.event_system
        self.permissions = bot.permission_manager
        self.mutes = bot.mute_store
        self.guild_settings = bot.settings_store
        self.feeds = bot.feed_handler
        self.locks = bot.member_locks

    @property
    def rest(self) -> hikari.api.RESTClient:
        return self.bot.rest

    @property
    def cache(self) -> hikari.api.Cache:
        return self.bot.cache

    async def on_load(self) -> None:
        await self._command_registry.register_commands()
        await self._register_event_listeners()
        self.logger.info(f"Plugin {self.name} loaded successfully")

    async def on_unload(self) -> None:
        await self._command_registry.unregister_commands()
        await self._unregister_event_listeners()
        self.logger.info(f"Plugin {self.name} unloaded successfully")

    async def _register_event_listeners(self) -> None:
        # Register event listeners
        for attr_name in dir(self):
            attr = getattr(self, attr_name)
            event_name = getattr(attr, "_event_listener", None)
            if isinstance(event_name, str):
                self.events.add_listener(event_name, attr)
                self._event_listeners.append((event_name, attr))
                self.logger.debug(f"Registered event listener: {attr_name} -> {event_name}")

    async def _unregister_event_listeners(self) -> None:
        # Unregister event listeners
        for event_name, listener in self._event_listeners:
            self.events.remove_listener(event_name, listener)

        self._event_listeners.clear()

    def get_bot_member(self, guild: hikari.GatewayGuild) -> hikari.Member | None:
        """The bot's own member object in ``guild``."""
        return guild.get_my_member()

    async def respond_success(self, ctx: PrefixContext, message: str) -> bool:
        await ctx.respond(f"{SUCCESS}{message}")
        return True

    async def respond_warning(self, ctx: PrefixContext, message: str) -> bool:
        await ctx.respond(f"{WARNING}{message}")
        return False

    async def respond_error(self, ctx: PrefixContext, message: str) -> bool:
        await ctx.respond(f"{ERROR}{message}")
        return False

