"""Relational short URL repository.

This module provides SqlShortUrlRepository, the durable backend built on
async SQLAlchemy and the short_urls table. Uniqueness of short codes is
enforced by the database's unique index: inserts never read first, they
write and translate a violation of that index into
ShortCodeAlreadyExistsError.
"""

import asyncio
from typing import Any, Awaitable, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from shortlink.core.exceptions import (
    ShortCodeAlreadyExistsError,
    ShortCodeNotUniqueError,
    ShortUrlNotFoundError,
    StorageError,
)
from shortlink.db.base import create_schema
from shortlink.db.tables import ShortUrlRecord
from shortlink.models.short_url import ShortUrl
from shortlink.repositories.base import ShortUrlRepository

T = TypeVar("T")

# Names the short column's unique index shows up under in driver messages
# ("short_urls.short" on SQLite, "ix_short_urls_short" on PostgreSQL)
SHORT_CODE_CONSTRAINT_NAMES = (
    f"{ShortUrlRecord.__tablename__}.short",
    f"ix_{ShortUrlRecord.__tablename__}_short",
)


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an IntegrityError comes from the short code's unique index.

    Other constraint failures, such as a primary key collision on id, are
    not duplicate short codes and return False.
    """
    message = str(error.orig if error.orig is not None else error).lower()
    if "unique constraint" not in message and "duplicate key" not in message:
        return False
    return any(name in message for name in SHORT_CODE_CONSTRAINT_NAMES)


class SqlShortUrlRepository(ShortUrlRepository):
    """
    Repository for short URLs stored in a relational database.

    Every operation opens its own session and transaction, so one instance
    can be shared by any number of concurrent callers without extra
    locking.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        operation_timeout: Optional[float] = None,
        owns_engine: bool = False,
    ):
        """
        Initialize the repository on an existing engine.

        Args:
            engine: Async engine bound to the database
            operation_timeout: Seconds a single call may take before it fails
                with StorageError (None disables the limit)
            owns_engine: Dispose of the engine when the repository is closed
        """
        self.engine = engine
        self.operation_timeout = operation_timeout
        self._owns_engine = owns_engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_url(
        cls,
        database_url: str,
        operation_timeout: Optional[float] = None,
        **engine_kwargs: Any,
    ) -> "SqlShortUrlRepository":
        """Create a repository with its own engine for the given URL."""
        engine = create_async_engine(database_url, **engine_kwargs)
        return cls(engine, operation_timeout=operation_timeout, owns_engine=True)

    async def create_schema(self) -> None:
        """Create the short_urls table if it does not exist.

        Raises:
            StorageError: If the schema cannot be created
        """
        try:
            await create_schema(self.engine)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Database error creating schema: {e}", e) from e

    async def find_by_code(self, code: str) -> ShortUrl:
        return await self._bounded(self._find_by_code(code), f"looking up '{code}'")

    async def insert(self, short_url: ShortUrl) -> None:
        await self._bounded(self._insert(short_url), f"inserting '{short_url.code}'")

    async def close(self) -> None:
        if self._owns_engine:
            await self.engine.dispose()

    @property
    def backend_name(self) -> str:
        return f"sql:{self.engine.dialect.name}"

    async def _find_by_code(self, code: str) -> ShortUrl:
        query = (
            select(ShortUrlRecord.id, ShortUrlRecord.short, ShortUrlRecord.target)
            .where(ShortUrlRecord.short == code)
            .limit(2)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.all()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Database error retrieving short URL '{code}': {e}", e) from e

        if not rows:
            raise ShortUrlNotFoundError(code)
        if len(rows) > 1:
            raise ShortCodeNotUniqueError(code, len(rows))

        row = rows[0]
        return ShortUrl.from_stored(row.id, row.short, row.target)

    async def _insert(self, short_url: ShortUrl) -> None:
        record = ShortUrlRecord(
            id=short_url.id,
            short=short_url.short,
            target=short_url.target,
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(record)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ShortCodeAlreadyExistsError(short_url.short) from e
            raise StorageError(f"Database error creating short URL: {e}", e) from e
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Database error creating short URL: {e}", e) from e

    async def _bounded(self, operation: Awaitable[T], description: str) -> T:
        if self.operation_timeout is None:
            return await operation
        try:
            return await asyncio.wait_for(operation, timeout=self.operation_timeout)
        except asyncio.TimeoutError as e:
            raise StorageError(
                f"Database operation timed out after {self.operation_timeout}s while {description}",
                e,
            ) from e
