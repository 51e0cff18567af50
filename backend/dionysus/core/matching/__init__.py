"""Place matching.

Reconciles a reference place against candidate places returned by a review
source search, using phone numbers, postal codes and fuzzy name/address scores.
"""

from .config import DEFAULT_CONFIG, MatchingConfig, get_matching_config, reload_matching_config
from .criteria import fuzzy_distance, match_phone, matching_score, postal_codes_compatible
from .evaluator import select_best_match

__all__ = [
    "MatchingConfig",
    "DEFAULT_CONFIG",
    "get_matching_config",
    "reload_matching_config",
    "match_phone",
    "postal_codes_compatible",
    "fuzzy_distance",
    "matching_score",
    "select_best_match",
]
