"""Test utilities for URL shortener tests."""

import random
import string
from typing import Optional

from shortlink.core.exceptions import StorageError
from shortlink.models.short_url import ShortUrl
from shortlink.repositories.base import ShortUrlRepository


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8).lower()}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def create_test_short_url(code: Optional[str] = None, target: Optional[str] = None) -> ShortUrl:
    """Build a valid ShortUrl with random values for anything not given."""
    return ShortUrl.create(code or random_string(6), target or random_url())


class FailingRepository(ShortUrlRepository):
    """Repository whose backend is always down."""

    def __init__(self):
        self.calls = 0

    async def find_by_code(self, code: str) -> ShortUrl:
        self.calls += 1
        raise StorageError("connection refused", ConnectionRefusedError("connection refused"))

    async def insert(self, short_url: ShortUrl) -> None:
        self.calls += 1
        raise StorageError("connection refused", ConnectionRefusedError("connection refused"))
