from .feeds import FeedStore
from .guild_settings import SettingsStore
from .manager import DatabaseManager, db_manager
from .models import Base, Feed, FeedType, GuildSettings, MuteRecord
from .mutes import MuteStore

__all__ = [
    "DatabaseManager",
    "db_manager",
    "Base",
    "Feed",
    "FeedType",
    "GuildSettings",
    "MuteRecord",
    "FeedStore",
    "MuteStore",
    "SettingsStore",
]
