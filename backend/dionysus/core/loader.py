"""Rating loader - fetches candidates from a source and matches the reference."""

from __future__ import annotations

import structlog

from dionysus.core.exceptions import FetchError
from dionysus.core.matching import MatchingConfig, select_best_match
from dionysus.core.models import PlaceRecord
from dionysus.core.ratings import RatingSummary
from dionysus.core.sources.base import PlaceSource

logger = structlog.get_logger("dionysus.loader")


class RatingLoader:
    """Loads the rating of one reference place from one review source.

    Attributes:
        source: Review source to search
        is_loading: True until a load finishes (successfully or not)
        message: User-facing message when no rating can be shown, else ""
        place: Matched place, once loaded
    """

    def __init__(self, source: PlaceSource, config: MatchingConfig | None = None) -> None:
        self.source = source
        self.config = config
        self.is_loading = True
        self.message = ""
        self.place: PlaceRecord | None = None

    def __repr__(self) -> str:
        return (
            f"RatingLoader(source={self.source.name}, is_loading={self.is_loading}, "
            f"matched={self.place is not None})"
        )

    async def load(self, reference: PlaceRecord) -> PlaceRecord | None:
        """Search the source and keep the best match for the reference.

        is_loading is cleared on every exit, including unexpected errors,
        which propagate to the caller.

        Returns:
            Matched place, or None (message explains why)
        """
        self.is_loading = True
        self.message = ""
        self.place = None

        try:
            try:
                candidates = await self.source.search(reference)
            except FetchError as e:
                logger.warning(
                    "Rating search failed",
                    source=self.source.name,
                    reference_name=reference.name,
                    error=str(e),
                )
                self.message = e.user_message
                return None

            self.place = select_best_match(reference, candidates, self.config)
            if self.place is None:
                self.message = f"No rating found on {self.source.name}."
        finally:
            self.is_loading = False

        logger.info(
            "Rating loaded",
            source=self.source.name,
            reference_name=reference.name,
            matched_name=self.place.name if self.place else None,
        )
        return self.place

    def summary(self) -> RatingSummary | None:
        """Rating summary of the matched place, if it has a score."""
        if self.place is None or self.place.score is None:
            return None
        return RatingSummary.from_place(self.place, self.source.review_source)
