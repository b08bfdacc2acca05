"""
Database session configuration.

This module owns the single process-wide connection pool. The ``Database``
object is constructed once, handed to the application lifespan for table
creation and disposal, and reaches request handlers through ``get_db``.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from zapship.app.core.config import settings

# Create declarative base for models
Base = declarative_base()


class Database:
    """Async engine plus session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        if not url.startswith("sqlite"):
            engine_kwargs.setdefault("pool_size", settings.db_pool_size)
            engine_kwargs.setdefault("max_overflow", settings.db_max_overflow)
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


database = Database(settings.database_url, echo=settings.db_echo)


async def get_db():
    """
    FastAPI dependency for database sessions.

    Yields an async database session and ensures it's properly closed.
    """
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
