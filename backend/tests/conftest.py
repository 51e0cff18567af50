"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from dionysus.core.config import reload_settings
from dionysus.core.matching import reload_matching_config


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point settings at a per-test data directory.

    Settings and matching config are cached process-wide, so both caches are
    rebuilt from the temporary directory before each test.
    """
    data_dir = tmp_path / "data"
    monkeypatch.setenv("DIONYSUS_DATA_DIR", str(data_dir))
    reload_settings()
    reload_matching_config()
    return data_dir
