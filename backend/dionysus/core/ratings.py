"""Rating summary for a matched place.

Turns a place's score into the values a rating card shows: the score as a
percentage of the source's scale, a colour tier, the Yelp star asset, and
the price, vote count and distance texts, and the source's brand colour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from dionysus.core.models import PlaceRecord
from dionysus.core.sources.base import ReviewSource
from dionysus.core.utils import color_from_hex, format_distance

ColorTier = Literal["red", "orange", "yellow", "green"]

# (lower bound, asset) in descending order
_YELP_STAR_ASSETS: tuple[tuple[float, str], ...] = (
    (5.0, "regular_5"),
    (4.5, "regular_4_half"),
    (4.0, "regular_4"),
    (3.5, "regular_3_half"),
    (3.0, "regular_3"),
    (2.5, "regular_2_half"),
    (2.0, "regular_2"),
    (1.5, "regular_1_half"),
)


def rating_percentage(score: float, total_score: int) -> float:
    """Score as a percentage of the source's rating scale."""
    return score / float(total_score) * 100


def color_tier(percentage: float) -> ColorTier:
    """Colour tier of a rating percentage."""
    if percentage < 40:
        return "red"
    if percentage < 60:
        return "orange"
    if percentage < 80:
        return "yellow"
    return "green"


def yelp_star_asset(score: float) -> str:
    """Name of the Yelp star image asset for a 0-5 score."""
    for lower_bound, asset in _YELP_STAR_ASSETS:
        if score >= lower_bound:
            return asset
    return "regular_1"


def votes_text(num_of_scores: int | None) -> str | None:
    """E.g. "by 1 user", "by 42 users"."""
    if num_of_scores is None:
        return None
    suffix = "s" if num_of_scores > 1 else ""
    return f"by {num_of_scores} user{suffix}"


@dataclass(frozen=True)
class RatingSummary:
    """Display values of one place's rating on one review source."""

    source_name: str
    score: float
    total_score: int
    percentage: float
    color_tier: ColorTier
    score_text: str
    scale_text: str
    price_text: str
    votes_text: str | None
    star_asset: str | None
    url: str | None
    brand_color: tuple[float, float, float]
    distance_text: str | None

    @classmethod
    def from_place(cls, place: PlaceRecord, review_source: ReviewSource) -> RatingSummary:
        """Build the summary of a scored place.

        Raises:
            ValueError: If the place has no score
        """
        if place.score is None:
            raise ValueError(f"Place '{place.name}' has no score on {review_source.name}")

        percentage = rating_percentage(place.score, review_source.total_score)
        return cls(
            source_name=review_source.name,
            score=place.score,
            total_score=review_source.total_score,
            percentage=percentage,
            color_tier=color_tier(percentage),
            score_text=f"{place.score:.1f}",
            scale_text=f"/{review_source.total_score}",
            price_text="$" * place.price,
            votes_text=votes_text(place.num_of_scores),
            star_asset=yelp_star_asset(place.score) if review_source.name == "Yelp" else None,
            url=place.url,
            brand_color=color_from_hex(review_source.color_code),
            distance_text=format_distance(place.distance_meters),
        )
