"""Registry configuration using Pydantic Settings.

Values can be provided via environment variables or fall back to the
defaults below. A ``Settings`` instance is intended to be retrieved via
``get_settings`` which caches the object for reuse across the process.

Environment variable prefix: ``SERVICE_REGISTRY_`` (e.g.
``SERVICE_REGISTRY_LOG_LEVEL``).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


class Settings(BaseSettings):
    """Runtime settings for the registries and the inspection CLI.

    Attributes map directly to environment variables using the
    ``SERVICE_REGISTRY_`` prefix (case-insensitive).
    """

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level used by setup_logging() and the CLI",
    )
    default_context: str = Field(
        default="service",
        min_length=1,
        description="Noun used in error messages when a registry is built without a context",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()
        if v_upper not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(LOG_LEVELS))}")

        return v_upper

    @field_validator("default_context", mode="before")
    @classmethod
    def strip_default_context(cls, v: str) -> str:
        """Drop surrounding whitespace from the context noun."""
        return str(v).strip()

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_REGISTRY_",
        case_sensitive=False,
        extra="ignore",  # Ignore unexpected env vars
        env_file=".env",  # Optional .env loading (if present)
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object to ensure consistent config.
    """

    return Settings()


__all__ = ["Settings", "get_settings"]
