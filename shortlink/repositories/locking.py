"""Mutual exclusion for repositories that are not safe to share.

SerializedRepository wraps another repository and lets only one call run
at a time. The lock covers a single find_by_code or insert call and is
released as soon as that call returns or raises.
"""

import asyncio

from shortlink.models.short_url import ShortUrl
from shortlink.repositories.base import ShortUrlRepository


class SerializedRepository(ShortUrlRepository):
    """Repository wrapper that serializes every call through an asyncio.Lock."""

    def __init__(self, inner: ShortUrlRepository):
        self.inner = inner
        self._lock = asyncio.Lock()

    async def find_by_code(self, code: str) -> ShortUrl:
        async with self._lock:
            return await self.inner.find_by_code(code)

    async def insert(self, short_url: ShortUrl) -> None:
        async with self._lock:
            await self.inner.insert(short_url)

    async def close(self) -> None:
        await self.inner.close()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @property
    def backend_name(self) -> str:
        return self.inner.backend_name
