"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from shortlink.models.short_url import ShortUrl


class ShortUrlCreateRequest(BaseModel):
    """Request schema for creating a short URL.

    Both fields are taken as raw strings; validation happens in the domain
    model so the HTTP layer and the core reject exactly the same input.
    """
    short: str = Field(description="The short code to register")
    target: str = Field(description="Absolute URL the code should redirect to")


class ShortUrlResponse(BaseModel):
    """Response schema for short URL information."""
    id: UUID
    short: str
    target: str

    @classmethod
    def from_entity(cls, short_url: ShortUrl) -> "ShortUrlResponse":
        return cls(id=short_url.id, short=short_url.short, target=short_url.target)


class ErrorResponse(BaseModel):
    """Response schema for API errors."""
    detail: str
    error: str
    reason: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for the health check."""
    status: str
    version: str
    environment: str
    backend: str
    database: Optional[dict] = None
