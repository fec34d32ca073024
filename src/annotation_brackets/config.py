"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.

The marker attribute names are not configurable: they are the contract
with stylesheets and other consumers (see marker_constants.py).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# src/annotation_brackets/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class ObserverConfig(BaseModel):
    """Reactivity driver settings."""

    # Coalescing delay between the last change signal and the pipeline run
    debounce_seconds: float = Field(default=0.1, gt=0)


class AppConfig(BaseModel):
    """Process-level runtime configuration."""

    log_dir: Path | None = None
    log_level: str = "INFO"


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``OBSERVER__DEBOUNCE_SECONDS``, ``APP__LOG_DIR``, ``APP__LOG_LEVEL``.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    observer: ObserverConfig = ObserverConfig()
    app: AppConfig = AppConfig()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()
    logger.debug(
        "Settings loaded (debounce=%.3fs, log_dir=%s)",
        settings.observer.debounce_seconds,
        settings.app.log_dir,
    )
    return settings
