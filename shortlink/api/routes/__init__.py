"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shortlink.api.routes import health, redirect, shortener


def build_api_router(api_prefix: str) -> APIRouter:
    """Assemble every route under one router.

    Args:
        api_prefix: Path prefix for the JSON API (e.g. "/api")

    Returns:
        APIRouter: The combined router
    """
    api_router = APIRouter()

    # Include shortener and health routes with API prefix
    api_router.include_router(shortener.router, prefix=api_prefix)
    api_router.include_router(health.router, prefix=api_prefix)

    # Include redirect routes at the root path (no prefix)
    # This makes short URLs available directly at /{short}
    api_router.include_router(redirect.router)

    return api_router


__all__ = ["build_api_router"]
