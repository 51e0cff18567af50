"""Individual match criteria.

Each function evaluates a single aspect of a match (phone, postal code,
name/address similarity) so it can be tested and tuned on its own.
"""

from __future__ import annotations

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from dionysus.core.models import PlaceRecord
from dionysus.core.utils import get_raw_phone_number

from .config import MatchingConfig, get_matching_config


def match_phone(
    candidate_phone: str | None,
    reference_digits: str,
    config: MatchingConfig | None = None,
) -> bool:
    """Compare phone numbers by their trailing digits, ignoring area code.

    Args:
        candidate_phone: Phone number from candidate (raw or formatted)
        reference_digits: Reference phone number, already reduced to digits
        config: Matching configuration (if None, loads from settings file)

    Returns:
        True if the last phone_suffix_length digits are equal
    """
    if config is None:
        config = get_matching_config()

    if not reference_digits:
        return False

    candidate_digits = get_raw_phone_number(candidate_phone)
    if not candidate_digits:
        return False

    n = config.phone_suffix_length
    return candidate_digits[-n:] == reference_digits[-n:]


def postal_codes_compatible(
    candidate_postal_code: str | None,
    reference_postal_code: str | None,
) -> bool:
    """Return False only when both postal codes are present and differ."""
    if candidate_postal_code is None or reference_postal_code is None:
        return True
    return candidate_postal_code == reference_postal_code


def fuzzy_distance(
    pattern: str | None,
    text: str | None,
    config: MatchingConfig | None = None,
) -> float | None:
    """Approximate-substring distance between two strings.

    The best alignment of the shorter string inside the longer one is scored
    with rapidfuzz's partial ratio on case-folded, punctuation-free input.

    Args:
        pattern: String being looked for (e.g., candidate name)
        text: String searched in (e.g., reference name)
        config: Matching configuration (if None, loads from settings file)

    Returns:
        Distance in 0.0-1.0 (0.0 = perfect match), or None if either side is
        empty or the best alignment is worse than fuzzy_threshold
    """
    if config is None:
        config = get_matching_config()

    if not pattern or not text:
        return None

    processed_pattern = default_process(pattern)
    processed_text = default_process(text)
    if not processed_pattern or not processed_text:
        return None

    cutoff = (1.0 - config.fuzzy_threshold) * 100
    similarity = fuzz.partial_ratio(processed_pattern, processed_text, score_cutoff=cutoff)
    if similarity == 0:
        return None

    return 1.0 - similarity / 100


def matching_score(
    reference: PlaceRecord,
    candidate: PlaceRecord,
    config: MatchingConfig | None = None,
) -> float:
    """Weighted fuzzy distance between a reference place and a candidate.

    score = name_weight * name distance + address_weight * distance of the
    first address lines. A failed term counts as unmatched_score.

    Returns:
        Total distance (lower is better)
    """
    if config is None:
        config = get_matching_config()

    name_distance = fuzzy_distance(candidate.name, reference.name, config)
    address_distance = fuzzy_distance(
        candidate.first_address_line,
        reference.first_address_line,
        config,
    )

    if name_distance is None:
        name_distance = config.unmatched_score
    if address_distance is None:
        address_distance = config.unmatched_score

    return config.name_weight * name_distance + config.address_weight * address_distance
