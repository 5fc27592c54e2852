"""Main application module.

This module builds the FastAPI application: it opens the configured
repository in the lifespan, includes the routes, and installs the
exception handlers.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from shortlink.api import build_api_router
from shortlink.api.errors import register_exception_handlers
from shortlink.core.config import Settings, StorageBackend, settings as default_settings
from shortlink.core.logging import setup_logging
from shortlink.db.base import get_engine
from shortlink.repositories.base import ShortUrlRepository
from shortlink.repositories.locking import SerializedRepository
from shortlink.repositories.memory import InMemoryShortUrlRepository
from shortlink.repositories.sql import SqlShortUrlRepository


def serialized(repository: ShortUrlRepository) -> ShortUrlRepository:
    """Wrap an unlocked in-memory repository so requests can share it."""
    if isinstance(repository, InMemoryShortUrlRepository):
        return SerializedRepository(repository)
    return repository


async def open_repository(config: Settings) -> ShortUrlRepository:
    """Create the repository selected by STORAGE_BACKEND.

    The in-memory backend is wrapped in SerializedRepository because the
    application shares one instance across all requests.

    Args:
        config: Application settings

    Returns:
        ShortUrlRepository: A ready-to-use repository
    """
    if config.STORAGE_BACKEND == StorageBackend.MEMORY:
        logger.warning("Using in-memory storage; short URLs will not survive a restart")
        return serialized(InMemoryShortUrlRepository())

    repository = SqlShortUrlRepository(
        get_engine(config),
        operation_timeout=config.DB_OPERATION_TIMEOUT,
        owns_engine=True,
    )
    if config.DB_CREATE_SCHEMA_ON_STARTUP:
        logger.info("Creating database schema")
        await repository.create_schema()
    return repository


def create_app(
    repository: Optional[ShortUrlRepository] = None,
    config: Optional[Settings] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        repository: Repository to serve from; when omitted one is opened
            from the settings on startup and closed on shutdown. An
            in-memory repository is served through SerializedRepository
        config: Settings to use (defaults to the module-level settings)

    Returns:
        FastAPI: The configured application
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")
        logger.info(f"Environment: {config.ENVIRONMENT.value}")

        owned = repository is None
        app.state.repository = await open_repository(config) if owned else serialized(repository)
        logger.info(f"Storage backend: {app.state.repository.backend_name}")
        try:
            yield
        finally:
            logger.info(f"Shutting down {config.APP_NAME}")
            if owned:
                await app.state.repository.close()

    app = FastAPI(
        title=config.APP_NAME,
        description=config.APP_DESCRIPTION,
        version=config.APP_VERSION,
        docs_url="/docs" if config.DEBUG else None,
        redoc_url="/redoc" if config.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = config

    app.include_router(build_api_router(config.API_PREFIX))
    register_exception_handlers(app)

    return app


def get_app() -> FastAPI:
    """Application factory for uvicorn (`uvicorn shortlink.main:get_app --factory`)."""
    setup_logging()
    return create_app()
