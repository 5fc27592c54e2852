"""Service layer for the URL shortener application.

This package contains the use cases of the application. Services
orchestrate the domain models and the injected repository.
"""

from shortlink.services.shortener import ShortUrlService, create_short_url, resolve_short_url

__all__ = ["ShortUrlService", "create_short_url", "resolve_short_url"]
