"""Exceptions for the URL shortener core.

This module contains the exception hierarchy shared by the domain models,
the repositories and the service layer. Every failure the core can produce
is one of these types; backend-specific exceptions are wrapped in
StorageError before they cross the repository boundary.
"""

from enum import Enum
from typing import Optional


class ShortenerError(Exception):
    """Base exception for all shortener errors."""
    pass


class InvalidCodeReason(str, Enum):
    """Why a raw string was rejected as a short code."""
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_CHARACTERS = "invalid_characters"


class InvalidInputError(ShortenerError):
    """Caller input failed validation."""
    pass


class InvalidCodeError(InvalidInputError):
    """The short code does not meet requirements."""

    # Set by each concrete subclass
    reason: Optional[InvalidCodeReason] = None

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)


class ShortCodeTooShortError(InvalidCodeError):
    """The short code is shorter than the minimum length."""

    reason = InvalidCodeReason.TOO_SHORT


class ShortCodeTooLongError(InvalidCodeError):
    """The short code exceeds the maximum length."""

    reason = InvalidCodeReason.TOO_LONG


class ShortCodeInvalidCharactersError(InvalidCodeError):
    """The short code contains characters outside the unreserved set."""

    reason = InvalidCodeReason.INVALID_CHARACTERS


class InvalidTargetUrlError(InvalidInputError):
    """The target URL is malformed or not absolute."""

    def __init__(self, target: str, diagnostic: str):
        self.target = target
        self.diagnostic = diagnostic
        super().__init__(f"Invalid target URL '{target}': {diagnostic}")


class RepositoryError(ShortenerError):
    """Base exception for errors raised by a repository."""
    pass


class ShortUrlNotFoundError(RepositoryError):
    """No short URL is stored under the requested code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short URL with code '{code}' not found")


class ShortCodeAlreadyExistsError(RepositoryError):
    """A short URL with the same code is already stored."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short URL with code '{code}' already exists")


class StorageError(RepositoryError):
    """The storage backend failed.

    The backend's own exception is kept on ``original`` (and as the
    ``__cause__`` when raised with ``from``) so it can be inspected, but
    callers only ever have to handle this type.
    """

    def __init__(self, message: str, original: Optional[BaseException] = None):
        self.original = original
        super().__init__(message)


class StorageCorruptionError(StorageError):
    """A stored row no longer forms a valid short URL."""
    pass


class ShortCodeNotUniqueError(StorageError):
    """More than one stored short URL shares a code.

    The insert path is supposed to make this impossible, so seeing it
    means the repository itself is broken.
    """

    def __init__(self, code: str, count: int):
        self.code = code
        self.count = count
        super().__init__(f"Found {count} short URLs with code '{code}', expected at most one")
