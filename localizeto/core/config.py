"""Application configuration via Pydantic Settings.

Reads environment variables (and optional .env file) and validates them
at startup. Use ``get_settings()`` to obtain a cached singleton.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validated localizer settings sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Remote catalogue --------------------------------------------------
    LOCALIZE_API_KEY: str = ""
    LOCALIZE_BASE_URL: str = "https://localize.to/api"

    # --- Resolution ------------------------------------------------------
    LOCALIZE_LANGUAGE: str = "en"
    LOCALIZE_FALLBACK_LANGUAGE: str = ""  # empty = no fallback chain

    # --- Optional (with defaults) ----------------------------------------
    HTTP_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    @property
    def fallback_language(self) -> str | None:
        """Fallback language code, or ``None`` when not configured."""
        return self.LOCALIZE_FALLBACK_LANGUAGE or None

    # --- Validators ------------------------------------------------------
    @field_validator("LOCALIZE_BASE_URL")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("LOCALIZE_BASE_URL must start with http:// or https://")
        if v.endswith("/"):
            raise ValueError("LOCALIZE_BASE_URL must not end with /")
        return v

    @field_validator("LOCALIZE_LANGUAGE")
    @classmethod
    def _validate_language(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("LOCALIZE_LANGUAGE must not be empty")
        return v

    @field_validator("HTTP_TIMEOUT_SECONDS")
    @classmethod
    def _validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings singleton."""
    return Settings()
