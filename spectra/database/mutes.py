import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select

from .manager import DatabaseManager
from .models import MuteRecord

logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MuteStore:
    """Persistent mute records, at most one per (user, guild)."""

    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def upsert(self, user_id: int, guild_id: int, unmute_at: datetime) -> MuteRecord:
        async with self.db.session() as session:
            result = await session.execute(
                select(MuteRecord).where(
                    MuteRecord.user_id == user_id,
                    MuteRecord.guild_id == guild_id,
                )
            )
            record = result.scalar_one_or_none()

            if record:
                record.unmute_at = unmute_at
            else:
                record = MuteRecord(user_id=user_id, guild_id=guild_id, unmute_at=unmute_at)
                session.add(record)

            await session.commit()

        logger.debug(f"Stored mute for user {user_id} in guild {guild_id} until {unmute_at.isoformat()}")
        record.unmute_at = _aware(record.unmute_at)
        return record

    async def get(self, user_id: int, guild_id: int) -> MuteRecord | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(MuteRecord).where(
                    MuteRecord.user_id == user_id,
                    MuteRecord.guild_id == guild_id,
                )
            )
            record = result.scalar_one_or_none()

        if record:
            record.unmute_at = _aware(record.unmute_at)
        return record

    async def list_for_guild(self, guild_id: int) -> list[MuteRecord]:
        async with self.db.session() as session:
            result = await session.execute(
                select(MuteRecord).where(MuteRecord.guild_id == guild_id).order_by(MuteRecord.unmute_at)
            )
            records = list(result.scalars())

        for record in records:
            record.unmute_at = _aware(record.unmute_at)
        return records

    async def list_expired(self, now: datetime | None = None) -> list[MuteRecord]:
        now = now or datetime.now(timezone.utc)
        async with self.db.session() as session:
            result = await session.execute(
                select(MuteRecord).where(MuteRecord.unmute_at <= now).order_by(MuteRecord.unmute_at)
            )
            records = list(result.scalars())

        for record in records:
            record.unmute_at = _aware(record.unmute_at)
        return records

    async def delete(self, user_id: int, guild_id: int) -> bool:
        async with self.db.session() as session:
            result = await session.execute(
                delete(MuteRecord).where(
                    MuteRecord.user_id == user_id,
                    MuteRecord.guild_id == guild_id,
                )
            )
            await session.commit()

        removed = bool(result.rowcount)
        if removed:
            logger.debug(f"Removed mute for user {user_id} in guild {guild_id}")
        return removed
