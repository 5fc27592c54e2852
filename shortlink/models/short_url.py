"""Short URL entity.

This module defines ShortUrl, the aggregate that ties a short code to the
URL it redirects to. Entities are immutable: build new ones with
ShortUrl.create (caller input) or ShortUrl.from_stored (repository rows).
"""

import uuid
from typing import Union

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from shortlink.core.exceptions import (
    InvalidCodeError,
    InvalidTargetUrlError,
    StorageCorruptionError,
)
from shortlink.models.short_code import ShortCode

_url_adapter = TypeAdapter(AnyUrl)


def parse_target_url(raw: str) -> str:
    """
    Parse an absolute URL and return its canonical form.

    Canonicalization follows the WHATWG URL rules: the scheme and host are
    lowercased and an empty path becomes "/". Parsing a canonical URL again
    returns it unchanged.

    Args:
        raw: The URL as supplied by the caller

    Returns:
        str: The canonical URL string

    Raises:
        InvalidTargetUrlError: If the string is not a well-formed absolute URL
    """
    try:
        return str(_url_adapter.validate_python(raw))
    except PydanticValidationError as e:
        diagnostic = "; ".join(error["msg"] for error in e.errors()) or str(e)
        raise InvalidTargetUrlError(raw, diagnostic) from e


class ShortUrl(BaseModel):
    """
    A short code and the target URL it resolves to.

    The id is a random UUID assigned when the entity is first created and
    kept for the entity's lifetime, including after a round-trip through a
    repository.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    code: ShortCode
    target: str

    @field_validator("target")
    @classmethod
    def canonical_target(cls, v: str) -> str:
        return parse_target_url(v)

    @classmethod
    def create(cls, code_raw: str, target_raw: str) -> "ShortUrl":
        """
        Validate caller input and build a new short URL with a fresh id.

        Args:
            code_raw: The requested short code
            target_raw: The URL the code should redirect to

        Returns:
            ShortUrl: The new entity

        Raises:
            InvalidCodeError: If the code is rejected
            InvalidTargetUrlError: If the target is not an absolute URL
        """
        code = ShortCode.parse(code_raw)
        target = parse_target_url(target_raw)
        return cls(id=uuid.uuid4(), code=code, target=target)

    @classmethod
    def from_stored(
        cls,
        id: Union[uuid.UUID, str],
        code: str,
        target: str,
    ) -> "ShortUrl":
        """
        Rebuild a short URL from persisted fields.

        Stored values passed validation when they were written, so any
        failure here means the row was damaged after the fact.

        Args:
            id: The stored identifier
            code: The stored short code
            target: The stored canonical target URL

        Returns:
            ShortUrl: The reconstructed entity

        Raises:
            StorageCorruptionError: If any stored field no longer validates
        """
        try:
            entity_id = id if isinstance(id, uuid.UUID) else uuid.UUID(str(id))
        except ValueError as e:
            raise StorageCorruptionError(f"Stored short URL has an invalid id {id!r}", e) from e

        try:
            return cls(id=entity_id, code=ShortCode.parse(code), target=target)
        except (InvalidCodeError, InvalidTargetUrlError) as e:
            raise StorageCorruptionError(f"Stored short URL '{code}' is corrupt: {e}", e) from e

    @property
    def short(self) -> str:
        """The short code as a plain string."""
        return str(self.code)

    def __str__(self) -> str:
        return f"{self.code} -> {self.target}"
