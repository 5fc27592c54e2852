"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class StorageBackend(str, Enum):
    SQL = "sql"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "shortlink"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Short, human-typeable links to arbitrary URLs"

    # API Configuration
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Storage
    STORAGE_BACKEND: StorageBackend = StorageBackend.SQL
    DATABASE_URL: str = "sqlite+aiosqlite:///./shortlink.db"
    DB_POOL_SIZE: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False
    DB_OPERATION_TIMEOUT: float = 10.0  # Seconds before a single repository call gives up
    DB_CREATE_SCHEMA_ON_STARTUP: bool = True

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_JSON: bool = False
    LOG_FILE: Optional[str] = None
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"

    @field_validator("LOG_LEVEL")
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper()

    @field_validator("LOG_FILE", mode="before")
    def empty_log_file_to_none(cls, v):
        """Treat an empty LOG_FILE as no file sink."""
        if v == "":
            return None
        return v

    @field_validator("API_PREFIX")
    def validate_api_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with a slash and has no trailing one."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v


# Create a singleton instance of the settings
settings = Settings()
