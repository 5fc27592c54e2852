"""In-memory short URL repository.

Keeps entities in a plain list for the lifetime of the process. Useful for
tests and for running the service without a database. The list is not a
concurrent data structure: callers that share one instance between tasks
must serialize access, e.g. with SerializedRepository.
"""

from typing import List

from shortlink.core.exceptions import (
    ShortCodeAlreadyExistsError,
    ShortCodeNotUniqueError,
    ShortUrlNotFoundError,
)
from shortlink.models.short_url import ShortUrl
from shortlink.repositories.base import ShortUrlRepository


class InMemoryShortUrlRepository(ShortUrlRepository):
    """Repository backed by an ordered list held in memory."""

    def __init__(self):
        self._urls: List[ShortUrl] = []

    async def find_by_code(self, code: str) -> ShortUrl:
        matches = [url for url in self._urls if url.short == code]
        if not matches:
            raise ShortUrlNotFoundError(code)
        if len(matches) > 1:
            raise ShortCodeNotUniqueError(code, len(matches))
        return matches[0]

    async def insert(self, short_url: ShortUrl) -> None:
        if any(url.code == short_url.code for url in self._urls):
            raise ShortCodeAlreadyExistsError(short_url.short)
        self._urls.append(short_url)

    def all(self) -> List[ShortUrl]:
        """Return the stored entities in insertion order."""
        return list(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    @property
    def backend_name(self) -> str:
        return "memory"
