"""Match evaluator - picks the best candidate for a reference place.

Algorithm:
    1. Return the first candidate with a matching phone number
    2. Disregard all candidates with a conflicting postal code
    3. Return the remaining candidate with the best fuzzy name/address score
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from dionysus.core.models import PlaceRecord
from dionysus.core.utils import get_raw_phone_number

from .config import MatchingConfig, get_matching_config
from .criteria import match_phone, matching_score, postal_codes_compatible

logger = structlog.get_logger("dionysus.matching")


def select_best_match(
    reference: PlaceRecord,
    candidates: Sequence[PlaceRecord],
    config: MatchingConfig | None = None,
) -> PlaceRecord | None:
    """Select the candidate that best matches the reference place.

    Candidates are expected in search-ranked order; that order breaks ties.
    The candidate sequence is never modified.

    Args:
        reference: Place to match against
        candidates: Candidate places, e.g. from a review source search
        config: Matching configuration (if None, loads from settings file)

    Returns:
        Best candidate, or None if there are no candidates or every
        candidate has a conflicting postal code
    """
    if config is None:
        config = get_matching_config()

    logger.debug(
        "Matching places",
        reference_name=reference.name,
        reference_address=reference.first_address_line,
        reference_postal_code=reference.postal_code,
        candidate_count=len(candidates),
    )

    if not candidates:
        return None

    reference_digits = get_raw_phone_number(reference.phone)
    if reference_digits:
        for candidate in candidates:
            if match_phone(candidate.phone, reference_digits, config):
                logger.debug("Matched by phone number", candidate_name=candidate.name)
                return candidate

    remaining = [
        candidate
        for candidate in candidates
        if postal_codes_compatible(candidate.postal_code, reference.postal_code)
    ]
    if not remaining:
        logger.debug(
            "No candidate with a compatible postal code",
            reference_postal_code=reference.postal_code,
        )
        return None

    # sorted() is stable, so equal scores keep search order
    ranked = sorted(remaining, key=lambda c: matching_score(reference, c, config))
    best = ranked[0]
    logger.debug("Matched by fuzzy score", candidate_name=best.name)
    return best
