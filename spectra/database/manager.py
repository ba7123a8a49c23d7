import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from config.settings import settings

from .models import Base

logger = logging.getLogger(__name__)

# Backend name -> async driver and engine options
_BACKENDS = {
    "sqlite": ("aiosqlite", {"connect_args": {"check_same_thread": False}}),
    "postgresql": ("asyncpg", {"pool_size": 5, "max_overflow": 10, "pool_pre_ping": True}),
}


class DatabaseManager:
    """Owns the async engine the mute, settings and feed stores share."""

    def __init__(self, database_url: str | None = None) -> None:
        self.url = make_url(database_url or settings.database_url)

        backend = self.url.get_backend_name()
        if backend not in _BACKENDS:
            raise ValueError(f"Unsupported database URL: {self.url.render_as_string(hide_password=True)}")

        driver, engine_kwargs = _BACKENDS[backend]
        self.url = self.url.set(drivername=f"{backend}+{driver}")
        self.engine = create_async_engine(self.url, echo=settings.debug, **engine_kwargs)
        self.session_factory = async_sessionmaker(bind=self.engine, class_=AsyncSession, expire_on_commit=False)

    async def create_tables(self) -> None:
        database = self.url.database
        if self.url.get_backend_name() == "sqlite" and database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database tables created")

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        logger.info("Database tables dropped")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """A session committed on success and rolled back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")


db_manager = DatabaseManager()
