"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads the defaults used when
building a handler context from environment variables and a `.env` file:
markup bypass, content placeholder behavior, logging level and the model
types whose dispatch plans are built at startup.

The `get_settings` function provides a cached, singleton instance of the
configuration.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """Defines all tunable parameters of docmodel-markup.

    Values come from environment variables or a `.env` file. The context
    flags are defaults only; callers of the facade may override each one per
    document.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging & runtime behavior
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    DEBUG: bool = Field(
        default=False,
        description="Enable verbose debug logging of plan builds and rendered fields",
    )

    # ---------------- Context defaults -----------------
    SKIP_MARKUP: bool = Field(
        default=False,
        description="If true, handlers return models untouched and never call the markup host",
    )
    ENABLE_CONTENT_PLACEHOLDER: bool = Field(
        default=False,
        description=(
            "If true, string fields whose trimmed value is '*content' are replaced "
            "with PLACEHOLDER_CONTENT instead of being rendered"
        ),
    )
    PLACEHOLDER_CONTENT: Optional[str] = Field(
        default="",
        description="Replacement text for '*content' placeholders",
    )

    # ---------------- Dispatch plan warm-up -----------------
    # Use Any type to prevent Pydantic Settings JSON decoding; validator converts to list[str]
    PLAN_CACHE_PRELOAD_TYPES: Any = Field(
        default_factory=list,
        description=(
            "Comma-separated dotted paths of model classes (module.Class) whose "
            "dispatch plans are built by warm_up() at startup. Empty list = lazy only."
        ),
    )

    @field_validator("PLAN_CACHE_PRELOAD_TYPES", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list of stripped strings.

        Supports both direct list input (from code/tests) and comma-separated
        string input (from environment variables). Empty strings result in
        empty list.
        """
        if isinstance(v, list):
            return [s.strip() for s in v if s.strip()]
        if isinstance(v, str):
            if not v.strip():
                return []
            return [s.strip() for s in v.split(",") if s.strip()]
        return []

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "INFO"
        return str(v).strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings (DEBUG flag wins over LOG_LEVEL)."""
    settings = settings or get_settings()
    logging.basicConfig(level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL)


__all__ = ["Settings", "get_settings", "configure_logging"]
