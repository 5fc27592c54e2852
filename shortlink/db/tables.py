"""Table definitions for the relational backend.

The schema is a single table, short_urls, holding the id, the short code
and the canonical target URL. The unique index on `short` is what keeps
concurrent inserts of the same code from both succeeding.
"""
import uuid

from sqlmodel import Field, SQLModel


class ShortUrlRecord(SQLModel, table=True):
    """Row in the short_urls table."""

    __tablename__ = "short_urls"

    id: uuid.UUID = Field(primary_key=True)
    short: str = Field(
        unique=True,   # Creates the unique index used for lookups
        index=True,
        description="The short code, stored exactly as validated"
    )
    target: str = Field(
        description="Canonical absolute target URL"
    )
