"""Tests for configuration functionality."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from dionysus.core.config import (
    Settings,
    get_settings,
    reload_settings,
    resolve_settings_file,
)


def test_settings_defaults() -> None:
    """Test that settings have correct defaults."""
    settings = Settings()

    assert settings.env == "development"
    assert settings.log_level == "INFO"
    assert settings.http_timeout == 15.0
    assert settings.http_max_retries == 2
    assert settings.yelp_base_url == "https://api.yelp.com/v3"
    assert settings.is_debug is True
    assert settings.is_production is False
    assert settings.is_testing is False

    assert settings.config_dir == settings.data_dir / "config"
    assert settings.logs_dir == settings.data_dir / "logs"
    assert settings.settings_file == settings.config_dir / "settings.json"


def test_data_dir_from_env(isolated_data_dir: Path) -> None:
    """Test that DIONYSUS_DATA_DIR selects the data directory."""
    settings = get_settings()

    assert settings.data_dir == isolated_data_dir.resolve()


def test_settings_from_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that settings can be loaded from environment variables."""
    monkeypatch.setenv("DIONYSUS_ENV", "production")
    monkeypatch.setenv("DIONYSUS_HTTP_TIMEOUT", "3.5")
    monkeypatch.setenv("DIONYSUS_YELP_API_KEY", "secret")

    settings = reload_settings()

    assert settings.env == "production"
    assert settings.http_timeout == 3.5
    assert settings.yelp_api_key == "secret"
    assert settings.is_production is True
    assert settings.is_debug is False


def test_settings_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that environment variable names are case-insensitive."""
    monkeypatch.setenv("dionysus_env", "testing")

    settings = reload_settings()

    assert settings.env == "testing"
    assert settings.is_testing is True


def test_settings_from_env_file() -> None:
    """Test that settings can be loaded from .env file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        env_file = Path(tmpdir) / ".env"
        env_file.write_text(
            "DIONYSUS_ENV=testing\n"
            "DIONYSUS_LOG_LEVEL=DEBUG\n"
            "DIONYSUS_HTTP_MAX_RETRIES=5\n"
        )

        settings = Settings(_env_file=str(env_file))

        assert settings.env == "testing"
        assert settings.log_level == "DEBUG"
        assert settings.http_max_retries == 5


def test_settings_from_json_file(isolated_data_dir: Path) -> None:
    """Test that top-level keys of settings.json are loaded with lowest priority."""
    settings_file = isolated_data_dir / "config" / "settings.json"
    settings_file.write_text(
        json.dumps(
            {
                "user_agent": "Dionysus-Test/1.0",
                "http_timeout": 7,
                "matching": {"address_weight": 3.0},
            }
        )
    )

    settings = reload_settings()

    assert settings.user_agent == "Dionysus-Test/1.0"
    assert settings.http_timeout == 7.0


def test_env_vars_override_json_file(
    isolated_data_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that environment variables override settings.json."""
    settings_file = isolated_data_dir / "config" / "settings.json"
    settings_file.write_text(json.dumps({"http_timeout": 7}))
    monkeypatch.setenv("DIONYSUS_HTTP_TIMEOUT", "9")

    settings = reload_settings()

    assert settings.http_timeout == 9.0


def test_invalid_json_file_is_ignored(isolated_data_dir: Path) -> None:
    """Test that an unreadable settings.json falls back to defaults."""
    settings_file = isolated_data_dir / "config" / "settings.json"
    settings_file.write_text("{not json")

    settings = reload_settings()

    assert settings.http_timeout == 15.0


def test_settings_validation() -> None:
    """Test that field validation works."""
    with pytest.raises(ValidationError):
        Settings(env="invalid")

    with pytest.raises(ValidationError):
        Settings(http_timeout=0)

    with pytest.raises(ValidationError):
        Settings(http_max_retries=11)

    with pytest.raises(ValidationError):
        Settings(log_level="VERBOSE")


def test_get_settings_singleton() -> None:
    """Test that get_settings() returns a singleton."""
    assert get_settings() is get_settings()


def test_reload_settings_replaces_instance() -> None:
    """Test that reload_settings() creates a new instance."""
    settings1 = get_settings()
    settings2 = reload_settings()

    assert settings1 is not settings2
    assert get_settings() is settings2


def test_data_dir_creation() -> None:
    """Test that data directories are created automatically."""
    with tempfile.TemporaryDirectory() as tmpdir:
        data_dir = Path(tmpdir) / "nested" / "data"

        settings = Settings(data_dir=str(data_dir))

        assert settings.data_dir.is_dir()
        assert settings.config_dir.is_dir()
        assert settings.logs_dir.is_dir()
        assert os.path.isabs(settings.data_dir)


def test_resolve_settings_file_has_no_side_effects(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that the settings file path is resolved without creating directories."""
    fresh_dir = tmp_path / "fresh"
    monkeypatch.setenv("DIONYSUS_DATA_DIR", str(fresh_dir))

    assert resolve_settings_file() == fresh_dir / "config" / "settings.json"
    assert not fresh_dir.exists()
