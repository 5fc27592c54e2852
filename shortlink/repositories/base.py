"""Base repository definition for the URL shortener.

This module provides the ShortUrlRepository abstract class, the storage
capability the service layer depends on. Any backend that implements it
can be swapped in without touching the services.
"""

from abc import ABC, abstractmethod

from shortlink.models.short_url import ShortUrl


class ShortUrlRepository(ABC):
    """
    Storage capability for short URLs.

    Implementations must raise only the exceptions from
    shortlink.core.exceptions; backend errors are wrapped in StorageError.
    """

    @abstractmethod
    async def find_by_code(self, code: str) -> ShortUrl:
        """
        Find the short URL stored under a code.

        The code is matched exactly, including case.

        Args:
            code: The short code to look up

        Returns:
            ShortUrl: The stored entity

        Raises:
            ShortUrlNotFoundError: If nothing is stored under the code
            StorageError: On backend failures
        """

    @abstractmethod
    async def insert(self, short_url: ShortUrl) -> None:
        """
        Store a short URL unless its code is already taken.

        The check for an existing code and the write happen atomically as
        far as callers can tell.

        Args:
            short_url: The entity to store

        Raises:
            ShortCodeAlreadyExistsError: If the code is already stored
            StorageError: On backend failures
        """

    async def close(self) -> None:
        """Release any resources held by the backend."""
        return None

    @property
    def backend_name(self) -> str:
        return type(self).__name__
