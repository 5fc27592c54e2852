"""
Domain models for the URL shortener.

This module exports the short code value type and the short URL entity.
"""

from shortlink.models.short_code import ShortCode
from shortlink.models.short_url import ShortUrl, parse_target_url

__all__ = [
    "ShortCode",
    "ShortUrl",
    "parse_target_url",
]
