"""Database module for the URL shortener."""
from shortlink.db.base import (
    DatabaseHealthCheck,
    create_schema,
    drop_schema,
    get_engine,
    get_engine_config,
)
from shortlink.db.tables import ShortUrlRecord

__all__ = [
    "DatabaseHealthCheck",
    "ShortUrlRecord",
    "create_schema",
    "drop_schema",
    "get_engine",
    "get_engine_config",
]
