"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the repository and service instances.
"""

from fastapi import Depends, Request

from shortlink.core.config import Settings
from shortlink.repositories.base import ShortUrlRepository
from shortlink.services.shortener import ShortUrlService


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_repository(request: Request) -> ShortUrlRepository:
    """Get the repository opened by the application lifespan."""
    return request.app.state.repository


def get_shortener_service(
    repository: ShortUrlRepository = Depends(get_repository),
) -> ShortUrlService:
    """Get an instance of the URL shortening service."""
    return ShortUrlService(repository=repository)
