"""Test fixtures for the URL shortener application."""

import os
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

# Keep the module-level settings away from any developer .env
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from shortlink.core.config import Settings
from shortlink.db.base import create_schema, drop_schema
from shortlink.main import create_app
from shortlink.repositories.memory import InMemoryShortUrlRepository
from shortlink.repositories.sql import SqlShortUrlRepository


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    await create_schema(engine)

    yield engine

    await drop_schema(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def file_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite engine with a real connection pool.

    Used where several connections must be open at once, which the shared
    in-memory engine cannot provide.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'shortlink-test.db'}",
        pool_size=10,
        max_overflow=10,
    )

    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def memory_repository() -> InMemoryShortUrlRepository:
    """Return an empty in-memory repository."""
    return InMemoryShortUrlRepository()


@pytest.fixture
def sql_repository(test_engine) -> SqlShortUrlRepository:
    """Return a relational repository on the in-memory SQLite engine."""
    return SqlShortUrlRepository(test_engine)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repository(request):
    """Run a test once against every repository backend."""
    if request.param == "memory":
        yield InMemoryShortUrlRepository()
        return

    repo = SqlShortUrlRepository.from_url(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await repo.create_schema()
    yield repo
    await repo.close()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated test application."""
    return Settings(
        ENVIRONMENT="testing",
        DEBUG=True,
        STORAGE_BACKEND="memory",
        DATABASE_URL=TEST_SQLALCHEMY_DATABASE_URL,
        API_PREFIX="/api",
    )


@pytest.fixture
def test_app(memory_repository, test_settings) -> FastAPI:
    """Create FastAPI test app serving from an in-memory repository."""
    return create_app(repository=memory_repository, config=test_settings)


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app) as test_client:
        yield test_client
