"""
Database connection and session management.
Wraps the async SQLAlchemy engine, its connection pool and the session factory.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import Integer, text
from typing import Dict, Any, Optional
import logging

from app.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table has an auto-incrementing integer primary key.
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True
    )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    Server databases get a bounded pool: requests beyond ``db_pool_size``
    wait up to ``db_pool_timeout`` seconds for a free connection.
    """
    url = settings.database_url
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=settings.debug, hide_parameters=not settings.debug)

    engine_kwargs: Dict[str, Any] = {
        "echo": settings.debug,
        "hide_parameters": not settings.debug,
        "pool_size": settings.db_pool_size,
        "max_overflow": 0,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_timeout": settings.db_pool_timeout,
    }
    if url.startswith("postgresql+asyncpg"):
        engine_kwargs["connect_args"] = {
            "server_settings": {"application_name": "real_estate_api"}
        }
    return create_async_engine(url, **engine_kwargs)


class Database:
    """Owns the engine and hands out sessions."""

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.engine = engine or build_engine(settings)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        """New session, meant to be used as ``async with database.session() as session``."""
        return self.session_factory()

    async def check_connection(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                result.scalar()
            logger.info("Database connection successful")
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    async def create_tables(self) -> None:
        """Create all database tables that do not exist yet."""
        # Import models so their tables are registered on Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all database tables. Only used by tests."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def close(self) -> None:
        """
        Close database connections.
        This should be called during application shutdown.
        """
        await self.engine.dispose()
        logger.info("Database connections closed")
