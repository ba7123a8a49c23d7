import logging

from sqlalchemy import delete, select

from .manager import DatabaseManager
from .models import Feed, FeedType

logger = logging.getLogger(__name__)


class FeedStore:
    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def get_channel_id(self, guild_id: int, feed_type: FeedType) -> int | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(Feed.channel_id).where(Feed.guild_id == guild_id, Feed.feed_type == feed_type)
            )
            return result.scalar_one_or_none()

    async def set_feed(self, guild_id: int, feed_type: FeedType, channel_id: int) -> None:
        async with self.db.session() as session:
            result = await session.execute(
                select(Feed).where(Feed.guild_id == guild_id, Feed.feed_type == feed_type)
            )
            feed = result.scalar_one_or_none()

            if feed:
                feed.channel_id = channel_id
            else:
                session.add(Feed(guild_id=guild_id, feed_type=feed_type, channel_id=channel_id))

            await session.commit()

        logger.info(f"Set {feed_type.value} feed for guild {guild_id} to channel {channel_id}")

    async def remove_feed(self, guild_id: int, feed_type: FeedType) -> bool:
        async with self.db.session() as session:
            result = await session.execute(
                delete(Feed).where(Feed.guild_id == guild_id, Feed.feed_type == feed_type)
            )
            await session.commit()

        return bool(result.rowcount)
