"""Shared utility functions for Dionysus."""

from __future__ import annotations

import re

_HEX_PREFIX_RE = re.compile(r"[0-9a-fA-F]+")


def get_raw_phone_number(value: str | None) -> str | None:
    """Strip everything but decimal digits from a phone number.

    Args:
        value: Raw or formatted phone number, e.g. "(212) 555-1234"

    Returns:
        Digit string (possibly empty), or None if value is None
    """
    if value is None:
        return None
    return "".join(ch for ch in value if ch.isdecimal())


def is_non_empty_string(value: str | None) -> bool:
    """Return True if value is a string with at least one non-blank character."""
    return value is not None and value.strip() != ""


def color_from_hex(color_code: str) -> tuple[float, float, float]:
    """Convert a hex colour code to an (r, g, b) tuple in the 0.0-1.0 range.

    Surrounding whitespace and one leading "#" are ignored. Parsing stops at
    the first non-hex character; a code with no leading hex digits is black.
    """
    hex_string = color_code.strip()
    if hex_string.startswith("#"):
        hex_string = hex_string[1:]

    match = _HEX_PREFIX_RE.match(hex_string)
    color = int(match.group(0), 16) if match else 0

    r = (color >> 16) & 0xFF
    g = (color >> 8) & 0xFF
    b = color & 0xFF
    return (r / 255.0, g / 255.0, b / 255.0)


def format_distance(meters: float | None) -> str | None:
    """Format a distance as approximate human text, e.g. "~850 m" or "~1.2 km".

    Args:
        meters: Distance in meters

    Returns:
        Formatted string, or None if meters is None
    """
    if meters is None:
        return None
    if abs(meters) < 1000:
        value, unit = meters, "m"
    else:
        value, unit = meters / 1000, "km"
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"~{text} {unit}"
