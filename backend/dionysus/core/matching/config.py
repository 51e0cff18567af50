"""Matching configuration - scoring weights and thresholds."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Annotated

import structlog
from pydantic import Field, TypeAdapter, ValidationError

from dionysus.core.config import resolve_settings_file

logger = structlog.get_logger("dionysus.matching.config")


@dataclass
class MatchingConfig:
    """Configuration for place matching.

    The defaults reproduce the reference behaviour: the last 7 phone digits
    decide an exact match, and address distance counts twice as much as name
    distance in the fuzzy tie-break.
    """

    # Phone matching (area-code insensitive)
    phone_suffix_length: Annotated[int, Field(ge=1)] = 7

    # Fuzzy score weights
    name_weight: Annotated[float, Field(ge=0)] = 1.0
    address_weight: Annotated[float, Field(ge=0)] = 2.0

    # Score used for a term whose fuzzy match failed
    unmatched_score: Annotated[float, Field(ge=0)] = 1.0

    # Worst distance (0.0-1.0) still accepted as a fuzzy match
    fuzzy_threshold: Annotated[float, Field(ge=0, le=1)] = 0.6


# Default config instance
DEFAULT_CONFIG = MatchingConfig()

_config_adapter = TypeAdapter(MatchingConfig)

# Cached config instance (loaded from settings file)
_cached_config: MatchingConfig | None = None


def _read_matching_section() -> dict | None:
    settings_file = resolve_settings_file()
    if not settings_file.exists():
        return None

    try:
        with settings_file.open("r") as f:
            all_settings = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(
            "Failed to read matching settings, using defaults",
            path=str(settings_file),
            error=str(e),
        )
        return None

    matching_settings = all_settings.get("matching") if isinstance(all_settings, dict) else None
    if matching_settings is None:
        return None
    if not isinstance(matching_settings, dict):
        logger.warning(
            "Matching settings must be an object, using defaults",
            path=str(settings_file),
        )
        return None
    return matching_settings


def get_matching_config() -> MatchingConfig:
    """Get the current matching configuration.

    Loads the "matching" section of settings.json if available, otherwise
    returns defaults. Values are validated; an invalid section is logged and
    replaced by the defaults as a whole. Caches the result.

    Reading the file never builds Settings, so no directories are created.

    Returns:
        MatchingConfig instance with current settings
    """
    global _cached_config

    if _cached_config is not None:
        return _cached_config

    matching_settings = _read_matching_section()
    if matching_settings is None:
        _cached_config = DEFAULT_CONFIG
        return _cached_config

    try:
        _cached_config = _config_adapter.validate_python(matching_settings)
    except ValidationError as e:
        logger.warning(
            "Invalid matching settings, using defaults",
            errors=[
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ],
        )
        _cached_config = DEFAULT_CONFIG
    return _cached_config


def reload_matching_config() -> MatchingConfig:
    """Reload matching configuration from settings file.

    Call this after updating settings to ensure new values are used.
    """
    global _cached_config
    _cached_config = None
    return get_matching_config()
