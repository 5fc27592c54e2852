"""Short code value type.

A ShortCode is the token a user types after the host name to reach a
target URL. Instances can only be obtained through ShortCode.parse, so
holding one means the string has already been validated.
"""

import string
from typing import Any

from shortlink.core.exceptions import (
    ShortCodeInvalidCharactersError,
    ShortCodeTooLongError,
    ShortCodeTooShortError,
)


class ShortCode:
    """A validated, immutable short code.

    Codes are 1 to 64 characters drawn from the unreserved URL characters
    of RFC 3986 section 2.3. They are compared exactly; no case folding or
    other normalization is applied.
    """

    MIN_LENGTH = 1
    MAX_LENGTH = 64
    ALLOWED_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-._~")

    __slots__ = ("_value",)

    def __init__(self, *args: Any, **kwargs: Any):
        raise TypeError("ShortCode cannot be constructed directly, use ShortCode.parse()")

    @classmethod
    def parse(cls, raw: str) -> "ShortCode":
        """
        Validate a raw string and wrap it as a short code.

        Length is checked before content, so an overlong string is reported
        as too long even when it also contains invalid characters.

        Args:
            raw: The candidate code

        Returns:
            ShortCode: The validated code

        Raises:
            ShortCodeTooShortError: If the string is empty
            ShortCodeTooLongError: If the string exceeds MAX_LENGTH
            ShortCodeInvalidCharactersError: If a character is not unreserved
        """
        if len(raw) < cls.MIN_LENGTH:
            raise ShortCodeTooShortError(
                raw, f"The short code must be at least {cls.MIN_LENGTH} character long"
            )
        if len(raw) > cls.MAX_LENGTH:
            raise ShortCodeTooLongError(
                raw, f"The short code exceeds {cls.MAX_LENGTH} characters"
            )
        if not cls.ALLOWED_CHARACTERS.issuperset(raw):
            raise ShortCodeInvalidCharactersError(
                raw,
                f"The short code '{raw}' contains invalid characters. "
                f"Only letters, digits and '-', '.', '_', '~' are allowed."
            )

        code = object.__new__(cls)
        object.__setattr__(code, "_value", raw)
        return code

    @classmethod
    def is_valid(cls, raw: str) -> bool:
        """Check whether a raw string would parse as a short code."""
        return (
            cls.MIN_LENGTH <= len(raw) <= cls.MAX_LENGTH
            and cls.ALLOWED_CHARACTERS.issuperset(raw)
        )

    @property
    def value(self) -> str:
        return self._value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ShortCode is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ShortCode is immutable")

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"ShortCode({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ShortCode):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def __reduce__(self):
        return (ShortCode.parse, (self._value,))
