"""
Recipe Catalog Database Configuration
Async database client built on SQLAlchemy 2.0
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import DateTime, MetaData, text
from sqlalchemy.types import TypeDecorator
from contextlib import asynccontextmanager
from fastapi import Request
from datetime import datetime, timezone
from functools import partial
import json
import structlog
from typing import AsyncGenerator, Optional

from core.config import Settings

logger = structlog.get_logger()


class Base(DeclarativeBase):
    """Base class for all database models"""

    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s"
        }
    )


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, also on backends that store them naive"""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Database:
    """
    Owns the async engine and session factory for one application instance.

    Created by the application lifespan, connected on startup and disposed on
    shutdown. Request handlers reach it through ``request.app.state.db``.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    def _engine_options(self) -> dict:
        url = self.settings.database_url_async
        options = {
            "echo": self.settings.DEBUG,
            "json_serializer": partial(json.dumps, ensure_ascii=False),
        }

        if url.startswith("sqlite"):
            # A single shared connection keeps in-memory databases alive
            options.update(
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            options.update(
                pool_size=self.settings.DATABASE_POOL_SIZE,
                max_overflow=self.settings.DATABASE_MAX_OVERFLOW,
                pool_timeout=self.settings.DATABASE_POOL_TIMEOUT,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        return options

    async def connect(self) -> None:
        """Create the engine, verify connectivity and create tables"""
        try:
            self.engine = create_async_engine(
                self.settings.database_url_async, **self._engine_options()
            )

            self.session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if self.settings.DATABASE_CREATE_TABLES:
                    # Registers every model on Base.metadata
                    import models  # noqa: F401

                    await conn.run_sync(Base.metadata.create_all)

            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            await self.disconnect()
            raise

    async def disconnect(self) -> None:
        """Close database connections"""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self.session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async context manager for database sessions
        Rolls back on any error; services commit their own writes
        """
        if self.session_factory is None:
            raise RuntimeError("Database not initialized. Call connect() first.")

        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if database connection is healthy"""
        try:
            async with self.session() as session:
                result = await session.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to get database session
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session


__all__ = [
    "Base",
    "UTCDateTime",
    "Database",
    "get_db",
]
