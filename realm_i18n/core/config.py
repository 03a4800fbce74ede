"""Application configuration via Pydantic Settings.

Reads environment variables (and optional .env file) and validates them
at startup. Use ``get_settings()`` to obtain a cached singleton.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from realm_i18n.i18n.errors import InvalidLocaleError
from realm_i18n.i18n.locale import normalize_locale

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Validated application settings sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Required --------------------------------------------------------
    DATABASE_URL: str

    # --- Optional (with defaults) ----------------------------------------
    LOG_LEVEL: str = "INFO"
    FALLBACK_LOCALE: str = "en"
    DEFAULT_REALM: str = "master"
    DEFAULT_NAMESPACE: str = "common"

    # --- Validators ------------------------------------------------------
    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("FALLBACK_LOCALE")
    @classmethod
    def _validate_fallback_locale(cls, v: str) -> str:
        try:
            return normalize_locale(v)
        except InvalidLocaleError as exc:
            raise ValueError(f"FALLBACK_LOCALE is not a locale tag: {v!r}") from exc

    @field_validator("DEFAULT_REALM")
    @classmethod
    def _validate_realm(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("DEFAULT_REALM must not be empty")
        return v.strip()

    @field_validator("DEFAULT_NAMESPACE")
    @classmethod
    def _validate_namespace(cls, v: str) -> str:
        if not re.match(r"^[a-z][a-z0-9-]*$", v):
            raise ValueError("DEFAULT_NAMESPACE must be lower-case letters, digits or '-'")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings singleton."""
    return Settings()  # type: ignore[call-arg]
