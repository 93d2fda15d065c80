"""Application configuration using Pydantic Settings.

This module centralizes runtime configuration for the game core. Values can
be provided via environment variables (preferred) or fall back to the defaults
below. A ``Settings`` instance is intended to be retrieved via ``get_settings``
which caches the object for reuse across the process.

Environment variable prefix: ``STOCKQUEST_`` (e.g. ``STOCKQUEST_LOG_LEVEL``).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings.

    Attributes map directly to environment variables using the ``STOCKQUEST_``
    prefix (case-insensitive). For example, ``storage_dir`` <- ``STOCKQUEST_STORAGE_DIR``.
    """

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )

    # Persistence settings
    # These only affect the storage adapter handed out by get_storage_adapter().
    storage_backend: Literal["memory", "file"] = Field(
        default="memory",
        description="Storage backend: in-memory (tests, dev) or one JSON file per key",
    )  # fmt: skip
    storage_dir: Path = Field(
        default=Path(".stockquest"),
        description="Directory used by the file storage backend",
    )  # fmt: skip
    storage_prefix: str = Field(
        default="stockquest_",
        description="Prefix added to every key written by the file storage backend",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()

        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    model_config = SettingsConfigDict(
        env_prefix="STOCKQUEST_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
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
