"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./booksphere.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 30
    DATABASE_POOL_RECYCLE_SECONDS: int = 3600

    SECRET_KEY: str = "booksphere-development-secret-key-change-me"  # noqa: S105

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Book Sphere API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Auth
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    SIGNED_URL_EXPIRY_SECONDS: int = 120

    # Delta sync
    SYNC_BUFFER_CAPACITY: int = 1000
    SYNC_BATCH_RATE_LIMIT: str = "60/minute"

    # Mood resolution
    DEFAULT_MUSIC_GENRE: str = "electronic"
    DEFAULT_MOOD_SENSITIVITY: float = 1.0
    CLAMP_OUTPUT_TEMPO: bool = False

    # Rooms
    AUTO_LEAVE_PREVIOUS_ROOM: bool = True

    @field_validator("SYNC_BUFFER_CAPACITY", mode="after")
    @classmethod
    def validate_buffer_capacity(cls, value: int) -> int:
        """Buffer capacity must allow at least one event."""
        if value < 1:
            msg = "SYNC_BUFFER_CAPACITY must be at least 1"
            raise ValueError(msg)
        return value

    @field_validator("DEFAULT_MUSIC_GENRE", mode="after")
    @classmethod
    def normalize_genre(cls, value: str) -> str:
        """Lowercase and strip the default genre."""
        return value.strip().lower()


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
