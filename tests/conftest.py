"""Pytest configuration and shared fixtures."""

import logging
from unittest.mock import AsyncMock, MagicMock

import hikari
import pytest

from spectra.core.locks import KeyedLock
from spectra.core.message_handler import MessageCommandHandler
from spectra.permissions import PermissionManager

# Disable logging during tests
logging.disable(logging.CRITICAL)

GUILD_ID = 123456789
OWNER_ID = 987654321
BOT_ID = 12345

MUTED_ROLE_ID = 500
MOD_ROLE_ID = 600
BOT_ROLE_ID = 700
HIGH_ROLE_ID = 800


def make_role(role_id, name, position, permissions=hikari.Permissions.NONE):
    role = MagicMock()
    role.id = role_id
    role.name = name
    role.position = position
    role.permissions = permissions
    return role


def make_member(member_id, username, role_ids=None, display_name=None, discriminator="0"):
    member = MagicMock()
    member.id = member_id
    member.username = username
    member.display_name = display_name or username
    member.discriminator = discriminator
    member.guild_id = GUILD_ID
    member.is_bot = False
    member.role_ids = list(role_ids or [])
    return member


@pytest.fixture
def roles():
    """Roles of the test guild keyed by ID."""
    return {
        GUILD_ID: make_role(GUILD_ID, "@everyone", 0, hikari.Permissions.SEND_MESSAGES),
        MUTED_ROLE_ID: make_role(MUTED_ROLE_ID, "Muted", 1),
        MOD_ROLE_ID: make_role(MOD_ROLE_ID, "Moderators", 2, hikari.Permissions.KICK_MEMBERS),
        BOT_ROLE_ID: make_role(
            BOT_ROLE_ID, "Spectra", 5, hikari.Permissions.MANAGE_ROLES | hikari.Permissions.MANAGE_CHANNELS
        ),
        HIGH_ROLE_ID: make_role(HIGH_ROLE_ID, "Staff", 10, hikari.Permissions.MANAGE_GUILD),
    }


@pytest.fixture
def mock_member():
    """A regular member without any roles."""
    return make_member(111111111, "testuser", display_name="Test User", discriminator="1234")


@pytest.fixture
def mock_moderator():
    """A member holding the configured moderator role."""
    return make_member(222222222, "modperson", [MOD_ROLE_ID])


@pytest.fixture
def mock_bot_member():
    return make_member(BOT_ID, "Spectra", [BOT_ROLE_ID])


@pytest.fixture
def mock_owner():
    return make_member(OWNER_ID, "guildowner", discriminator="0001")


@pytest.fixture
def members(mock_member, mock_moderator, mock_bot_member, mock_owner):
    """Members of the test guild keyed by ID."""
    return {
        member.id: member
        for member in (mock_member, mock_moderator, mock_bot_member, mock_owner)
    }


@pytest.fixture
def mock_guild(roles, members, mock_bot_member):
    """Mock gateway guild backed by the ``roles`` and ``members`` fixtures."""
    guild = MagicMock()
    guild.id = GUILD_ID
    guild.name = "Test Guild"
    guild.owner_id = OWNER_ID
    guild.preferred_locale = "en-US"
    guild.verification_level = hikari.GuildVerificationLevel.MEDIUM
    guild.make_icon_url = MagicMock(return_value="https://example.com/icon.png")
    guild.get_roles = MagicMock(side_effect=lambda: roles)
    guild.get_role = MagicMock(side_effect=lambda role_id: roles.get(role_id))
    guild.get_members = MagicMock(side_effect=lambda: members)
    guild.get_member = MagicMock(side_effect=lambda user_id: members.get(user_id))
    guild.get_my_member = MagicMock(return_value=mock_bot_member)
    guild.get_channels = MagicMock(return_value={})
    guild.get_presences = MagicMock(return_value={})
    return guild


@pytest.fixture
def mock_hikari_bot(mock_guild):
    """Mock Hikari bot instance."""
    bot = MagicMock(spec=hikari.GatewayBot)
    bot.cache = MagicMock()
    bot.rest = MagicMock()
    bot.get_me = MagicMock(return_value=MagicMock(id=BOT_ID, username="Spectra"))

    # Mock cache methods
    bot.cache.get_guild = MagicMock(side_effect=lambda guild_id: mock_guild if guild_id == GUILD_ID else None)
    bot.cache.get_user = MagicMock(return_value=None)

    # Mock REST methods
    bot.rest.create_message = AsyncMock()
    bot.rest.add_role_to_member = AsyncMock()
    bot.rest.remove_role_from_member = AsyncMock()
    bot.rest.create_role = AsyncMock()
    bot.rest.edit_permission_overwrite = AsyncMock()
    bot.rest.fetch_user = AsyncMock()

    return bot


@pytest.fixture
def mock_db_manager():
    """Mock database manager."""
    db = AsyncMock()

    # Mock session context manager
    mock_session = AsyncMock()
    db.session = MagicMock(return_value=AsyncContextManager(mock_session))

    return db


@pytest.fixture
def mock_guild_settings():
    """Stored settings for the test guild."""
    guild_settings = MagicMock()
    guild_settings.guild_id = GUILD_ID
    guild_settings.prefix = None
    guild_settings.mod_role_id = MOD_ROLE_ID
    return guild_settings


@pytest.fixture
def mock_settings_store(mock_guild_settings):
    store = AsyncMock()
    store.get_settings_for_guild = AsyncMock(return_value=mock_guild_settings)
    return store


@pytest.fixture
def mock_mute_store():
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.list_for_guild = AsyncMock(return_value=[])
    store.list_expired = AsyncMock(return_value=[])
    store.delete = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_feed_store():
    store = AsyncMock()
    store.get_channel_id = AsyncMock(return_value=None)
    return store


@pytest.fixture
def mock_plugin_loader():
    """Mock plugin loader."""
    loader = MagicMock()
    loader.plugins = {}
    return loader


@pytest.fixture
def mock_event_system():
    """Mock event system."""
    event_system = MagicMock()
    return event_system


@pytest.fixture
def mock_bot(
    mock_hikari_bot,
    mock_db_manager,
    mock_settings_store,
    mock_mute_store,
    mock_feed_store,
    mock_plugin_loader,
    mock_event_system,
):
    """Mock complete bot instance with real locks, permissions and dispatch table."""
    bot = MagicMock()
    bot.hikari_bot = mock_hikari_bot
    bot.rest = mock_hikari_bot.rest
    bot.cache = mock_hikari_bot.cache
    bot.db = mock_db_manager
    bot.settings_store = mock_settings_store
    bot.mute_store = mock_mute_store
    bot.feed_store = mock_feed_store
    bot.feed_handler = MagicMock()
    bot.feed_handler.submit_text = AsyncMock()
    bot.member_locks = KeyedLock()
    bot.permission_manager = PermissionManager(mock_settings_store)
    bot.plugin_loader = mock_plugin_loader
    bot.event_system = mock_event_system
    bot.get_guild_prefix = AsyncMock(return_value="!")
    bot.message_handler = MessageCommandHandler(bot)
    return bot


@pytest.fixture
def mock_author():
    """The moderator invoking commands."""
    author = MagicMock(spec=hikari.User)
    author.id = 222222222
    author.username = "modperson"
    author.is_bot = False
    return author


@pytest.fixture
def mock_context(mock_author, mock_guild, mock_bot):
    """Mock command context."""
    ctx = MagicMock()
    ctx.author = mock_author
    ctx.guild_id = mock_guild.id
    ctx.channel_id = 444444444
    ctx.bot = mock_bot
    ctx.prefix = "!"
    ctx.get_guild = MagicMock(return_value=mock_guild)
    ctx.respond = AsyncMock()
    return ctx


@pytest.fixture
def mock_message_event(mock_author, mock_guild):
    """Mock message create event."""
    event = MagicMock(spec=hikari.GuildMessageCreateEvent)
    event.author = mock_author
    event.member = None
    event.guild_id = mock_guild.id
    event.channel_id = 444444444
    event.content = "!test command"
    return event


class AsyncContextManager:
    """Helper for mocking async context managers."""

    def __init__(self, return_value=None):
        self.return_value = return_value

    async def __aenter__(self):
        return self.return_value

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


@pytest.fixture
def async_context_manager():
    """Factory for creating async context managers."""
    return AsyncContextManager


@pytest.fixture
def muted_role(roles):
    return roles[MUTED_ROLE_ID]


@pytest.fixture
def role_factory():
    """Factory for roles that are not part of the default guild."""
    return make_role


@pytest.fixture
def member_factory():
    """Factory for members that are not part of the default guild."""
    return make_member
