"""Database engine configuration for SQLAlchemy with SQLModel.

This module builds the async SQLAlchemy engine the relational repository
runs on. It includes:
- Engine configuration per environment
- Schema bootstrap
- Health check functionality
"""

from typing import Any, Dict, Optional
import asyncio
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shortlink.core.config import EnvironmentType, Settings, settings as default_settings
from shortlink.db.tables import ShortUrlRecord

logger = logging.getLogger(__name__)


def _is_sqlite_memory(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def get_engine_config(config: Optional[Settings] = None) -> Dict[str, Any]:
    """Get the engine keyword arguments for the configured database.

    Args:
        config: Settings to read from (defaults to the module-level settings)

    Returns:
        Dict: Keyword arguments for create_async_engine
    """
    config = config or default_settings
    database_url = config.DATABASE_URL

    if _is_sqlite_memory(database_url):
        # Every connection to ":memory:" is a separate database; share one
        return {
            "echo": config.DB_ECHO,
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }

    if config.ENVIRONMENT == EnvironmentType.TESTING:
        return {
            "echo": config.DB_ECHO,
            "poolclass": NullPool,  # Use NullPool for tests to avoid connection issues
        }

    return {
        "echo": config.DB_ECHO,
        "pool_size": config.DB_POOL_SIZE,
        "max_overflow": config.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": config.DB_POOL_TIMEOUT,
        "pool_recycle": config.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


def get_engine(config: Optional[Settings] = None) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Args:
        config: Settings to read from (defaults to the module-level settings)

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    config = config or default_settings
    engine_url = config.DATABASE_URL
    engine_config = get_engine_config(config)

    logger.info(f"Creating database engine with URL: {make_url(engine_url).render_as_string(hide_password=True)}")

    return create_async_engine(engine_url, **engine_config)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the short_urls table if it does not exist yet.

    Args:
        engine: Engine bound to the target database
    """
    async with engine.begin() as conn:
        await conn.run_sync(
            SQLModel.metadata.create_all,
            tables=[ShortUrlRecord.__table__],
        )
    logger.info("Database schema is up to date")


async def drop_schema(engine: AsyncEngine) -> None:
    """Drop the short_urls table.

    Args:
        engine: Engine bound to the target database
    """
    async with engine.begin() as conn:
        await conn.run_sync(
            SQLModel.metadata.drop_all,
            tables=[ShortUrlRecord.__table__],
        )


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    @staticmethod
    async def check_connection(engine: AsyncEngine) -> Dict[str, Any]:
        """Check database connectivity and return status.

        Args:
            engine: Engine to check

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
