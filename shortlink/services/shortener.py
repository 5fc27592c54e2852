"""URL shortening service for the URL shortener application.

This module implements the two use cases of the service: creating a short
URL from caller input and resolving a short code to its target. Both work
against whichever ShortUrlRepository is injected and pass every error
through unchanged.
"""

from shortlink.models.short_url import ShortUrl
from shortlink.repositories.base import ShortUrlRepository


async def create_short_url(
    repository: ShortUrlRepository,
    code_raw: str,
    target_raw: str,
) -> ShortUrl:
    """
    Validate caller input, build a short URL and store it.

    Args:
        repository: Repository to store the short URL in
        code_raw: The requested short code
        target_raw: The URL the code should redirect to

    Returns:
        ShortUrl: The stored entity, with its canonical target

    Raises:
        InvalidCodeError: If the code is rejected
        InvalidTargetUrlError: If the target is not an absolute URL
        ShortCodeAlreadyExistsError: If the code is already in use
        StorageError: On backend failures
    """
    short_url = ShortUrl.create(code_raw, target_raw)
    await repository.insert(short_url)
    return short_url


async def resolve_short_url(repository: ShortUrlRepository, code_raw: str) -> ShortUrl:
    """
    Look up the short URL stored under a code.

    Args:
        repository: Repository to search
        code_raw: The short code as typed by the user

    Returns:
        ShortUrl: The stored entity

    Raises:
        ShortUrlNotFoundError: If no short URL uses this code
        StorageError: On backend failures
    """
    return await repository.find_by_code(code_raw)


class ShortUrlService:
    """
    Service for URL shortening business logic.

    Binds the use cases to one repository so they can be handed around as
    a single dependency.
    """

    def __init__(self, repository: ShortUrlRepository):
        """
        Initialize the URL shortening service.

        Args:
            repository: Repository for short URL storage
        """
        self.repository = repository

    async def create_short_url(self, code_raw: str, target_raw: str) -> ShortUrl:
        """Create and store a short URL. See create_short_url()."""
        return await create_short_url(self.repository, code_raw, target_raw)

    async def resolve_short_url(self, code_raw: str) -> ShortUrl:
        """Resolve a short code. See resolve_short_url()."""
        return await resolve_short_url(self.repository, code_raw)
