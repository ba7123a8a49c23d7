import logging

import hikari

from config.settings import settings

from ..database import FeedStore, MuteStore, SettingsStore, db_manager
from ..middleware import error_handler_middleware, logging_middleware
from ..permissions import PermissionManager
from .event_system import EventSystem
from .feeds import FeedHandler
from .locks import KeyedLock
from .message_handler import MessageCommandHandler
from .plugin_loader import PluginLoader

logger = logging.getLogger(__name__)


class SpectraBot:
    def __init__(self) -> None:
        intents = (
            hikari.Intents.ALL_MESSAGES
            | hikari.Intents.GUILDS
            | hikari.Intents.GUILD_MEMBERS
            | hikari.Intents.GUILD_PRESENCES  # Required for online counts
            | hikari.Intents.MESSAGE_CONTENT
        )
        self.hikari_bot = hikari.GatewayBot(token=settings.discord_token, intents=intents)

        # Storage
        self.db = db_manager
        self.mute_store = MuteStore(self.db)
        self.settings_store = SettingsStore(self.db)
        self.feed_store = FeedStore(self.db)

        # Initialize systems
        self.event_system = EventSystem()
        self.event_system.add_middleware(logging_middleware)
        self.event_system.add_middleware(error_handler_middleware)
        self.message_handler = MessageCommandHandler(self)
        self.permission_manager = PermissionManager(self.settings_store)
        self.feed_handler = FeedHandler(self, self.feed_store)
        self.member_locks = KeyedLock()
        self.plugin_loader = PluginLoader(self)

        for directory in settings.plugin_directories:
            self.plugin_loader.add_plugin_directory(directory)

        self._setup_event_listeners()

    def _setup_event_listeners(self) -> None:
        @self.hikari_bot.listen(hikari.StartingEvent)
        async def on_starting(event: hikari.StartingEvent) -> None:
            logger.info("Bot is starting...")

        @self.hikari_bot.listen(hikari.StartedEvent)
        async def on_started(event: hikari.StartedEvent) -> None:
            logger.info("Bot has started, initializing systems...")
            await self._initialize_systems()

            logger.info(f"Bot is ready! Logged in as {self.hikari_bot.get_me()}")
            await self.event_system.emit("bot_ready", self)

        @self.hikari_bot.listen(hikari.StoppingEvent)
        async def on_stopping(event: hikari.StoppingEvent) -> None:
            logger.info("Bot is stopping...")
            await self._cleanup()

        @self.hikari_bot.listen(hikari.MemberCreateEvent)
        async def on_member_join(event: hikari.MemberCreateEvent) -> None:
            await self.event_system.emit("member_join", event.member)

        @self.hikari_bot.listen(hikari.MessageCreateEvent)
        async def on_message_create(event: hikari.MessageCreateEvent) -> None:
            handled = await self.message_handler.handle_message(event)
            if not handled:
                await self.event_system.emit("message_create", event)

    @property
    def rest(self) -> hikari.api.RESTClient:
        return self.hikari_bot.rest

    @property
    def cache(self) -> hikari.api.Cache:
        return self.hikari_bot.cache

    async def _initialize_systems(self) -> None:
        try:
            await self.db.create_tables()
            logger.info("Database initialized")

            await self._load_plugins()
            logger.info("Plugins loaded")

            logger.info("All systems initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize systems: {e}")
            raise

    async def _load_plugins(self) -> None:
        discovered = self.plugin_loader.discover_plugins()
        plugins_to_load = [p for p in settings.enabled_plugins if p in discovered]

        if plugins_to_load:
            logger.info(f"Loading plugins: {plugins_to_load}")
            await self.plugin_loader.load_all_plugins(plugins_to_load)
        else:
            logger.warning("No valid plugins found to load")

    async def _cleanup(self) -> None:
        try:
            await self.event_system.emit("bot_stopping", self)

            for plugin_name in list(self.plugin_loader.plugins.keys()):
                await self.plugin_loader.unload_plugin(plugin_name)

            await self.db.close()

            logger.info("Cleanup completed")

        except Exception as e:
            logger.error(f"Error during cleanup: {e}")

    async def get_guild_prefix(self, guild_id: int) -> str:
        """Get the prefix for a specific guild, falling back to default if not found."""
        try:
            guild_settings = await self.settings_store.get_settings_for_guild(guild_id)
            if guild_settings and guild_settings.prefix:
                return guild_settings.prefix

        except Exception as e:
            logger.error(f"Error getting guild prefix for {guild_id}: {e}")

        return settings.bot_prefix

    def run(self) -> None:
        if not settings.discord_token:
            raise RuntimeError("DISCORD_TOKEN is not set")

        try:
            logger.info("Starting bot...")
            self.hikari_bot.run()
        except KeyboardInterrupt:
            logger.info("Bot stopped by user")
        except Exception as e:
            logger.error(f"Bot crashed: {e}")
            raise
