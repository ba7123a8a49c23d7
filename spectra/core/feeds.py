import logging
from datetime import datetime, timezone
from typing import Any

import hikari

from ..database.feeds import FeedStore
from ..database.models import FeedType

logger = logging.getLogger(__name__)


class FeedHandler:
    """Delivers audit entries to the channel a guild configured for each feed type."""

    def __init__(self, bot: Any, feed_store: FeedStore) -> None:
        self.bot = bot
        self.feed_store = feed_store

    async def submit_text(self, feed_type: FeedType, guild: hikari.Guild, message: str) -> None:
        try:
            channel_id = await self.feed_store.get_channel_id(guild.id, feed_type)
            if channel_id is None:
                logger.debug(f"No {feed_type.value} feed configured for guild {guild.id}")
                return

            timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S")
            await self.bot.rest.create_message(channel_id, f"`[{timestamp}]` {message}")

        except Exception as e:
            logger.error(f"Failed to submit {feed_type.value} entry for guild {guild.id}: {e}")
