"""Application configuration using Pydantic Settings."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

# __file__ is backend/dionysus/core/config.py, so go up to backend/ and add data
_DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"


def _resolve_data_dir() -> Path:
    data_dir_env = os.environ.get("DIONYSUS_DATA_DIR", "")
    if data_dir_env:
        return Path(data_dir_env)
    return _DEFAULT_DATA_DIR


def resolve_settings_file() -> Path:
    """Path of settings.json, resolved without building Settings.

    Nothing is created on disk, so lightweight readers (such as the matching
    config loader) can look for the file without side effects.
    """
    return _resolve_data_dir() / "config" / "settings.json"


def json_config_settings_source(
    settings: BaseSettings | None = None,
) -> dict[str, Any]:
    """Load settings from settings.json file.

    This source has lowest priority - env vars will override JSON values.
    Nested sections (e.g. "matching") are left for their own loaders and
    only top-level scalar keys are returned.

    Returns:
        Dictionary with setting keys (lowercase) and values from JSON file.
    """
    settings_file = resolve_settings_file()

    if not settings_file.exists():
        return {}

    try:
        with settings_file.open("r") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}

    if not isinstance(data, dict):
        return {}

    return {k.lower(): v for k, v in data.items() if not isinstance(v, dict)}


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from:
    1. JSON file (settings.json in config directory) - lowest priority
    2. .env file
    3. Environment variables - highest priority (override JSON/.env)

    All settings are prefixed with DIONYSUS_ (e.g., DIONYSUS_ENV=production).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DIONYSUS_",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources - JSON file first, then env vars.

        Priority (lowest to highest):
        1. JSON file (settings.json)
        2. .env file
        3. Environment variables
        4. Init settings (values passed to Settings())
        """
        return (  # type: ignore[return-value]
            json_config_settings_source,
            dotenv_settings,
            env_settings,
            init_settings,
        )

    # Application
    env: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Application environment (development, production, testing)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    data_dir: Path = Field(
        default_factory=lambda: _resolve_data_dir().resolve(),
        description="Base directory for application data (config, logs)",
    )

    # HTTP
    http_timeout: float = Field(
        default=15.0,
        gt=0,
        description="Timeout in seconds for review source requests",
    )

    http_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries on rate limiting (HTTP 429) and network errors",
    )

    user_agent: str = Field(
        default="Dionysus/0.1",
        description="User-Agent header sent to review sources",
    )

    # Review sources
    yelp_api_key: str = Field(
        default="",
        description="Yelp Fusion API key",
    )

    yelp_base_url: str = Field(
        default="https://api.yelp.com/v3",
        description="Yelp Fusion API base URL",
    )

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files (settings.json, etc.)."""
        return self.data_dir / "config"

    @property
    def logs_dir(self) -> Path:
        """Directory for log files (if file logging is enabled)."""
        return self.data_dir / "logs"

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.json"

    @property
    def is_debug(self) -> bool:
        """Check if running in debug/development mode."""
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.env == "testing"

    def model_post_init(self, __context: object) -> None:
        """Post-initialization: create data directories if they don't exist."""
        self.data_dir = self.data_dir.resolve()

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Creates and caches the settings instance on first call.
    The cache is cleared when reload_settings() is called.
    """
    return Settings()


def reload_settings() -> Settings:
    """Reload settings from all sources (JSON, .env, env vars).

    Clears the cache and creates a new Settings instance.
    Useful for testing or when settings change.
    """
    get_settings.cache_clear()
    return get_settings()
