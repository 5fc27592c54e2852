"""Repository layer for the URL shortener.

This module provides the repository capability and its backends, following
the Repository pattern so the service layer never touches storage directly.
"""

from shortlink.repositories.base import ShortUrlRepository
from shortlink.repositories.locking import SerializedRepository
from shortlink.repositories.memory import InMemoryShortUrlRepository
from shortlink.repositories.sql import SqlShortUrlRepository

__all__ = [
    # Capability
    "ShortUrlRepository",

    # Backends
    "InMemoryShortUrlRepository",
    "SqlShortUrlRepository",
    "SerializedRepository",
]
