"""Base classes for review sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from dionysus.core.fetch import fetch_json
from dionysus.core.models import PlaceRecord


@dataclass(frozen=True)
class ReviewSource:
    """Display configuration of a review provider.

    Attributes:
        name: Display name (e.g., "Yelp")
        logo: Image asset name of the provider logo
        total_score: Top of the provider's rating scale (e.g., 5 or 10)
        color_code: Brand colour as a hex code
    """

    name: str
    logo: str
    total_score: int
    color_code: str


class PlaceSource(ABC):
    """Abstract base class for review source search clients."""

    def __init__(self, review_source: ReviewSource, client: httpx.AsyncClient | None = None) -> None:
        """Initialize place source.

        Args:
            review_source: Display configuration of the provider
            client: Optional shared HTTP client
        """
        self.review_source = review_source
        self.client = client
        self.logger = structlog.get_logger(f"dionysus.sources.{review_source.name.lower()}")

    @property
    def name(self) -> str:
        return self.review_source.name

    @abstractmethod
    def build_search_url(self, reference: PlaceRecord) -> str:
        """Build the search URL for places resembling the reference."""

    @abstractmethod
    def authentication(self) -> str | None:
        """Authorization header value, or None if the source needs none."""

    @abstractmethod
    def parse_candidates(self, payload: Any) -> list[PlaceRecord]:
        """Turn a decoded search response into candidate places.

        Returns:
            Candidates in the order the source ranked them
        """

    async def search(self, reference: PlaceRecord) -> list[PlaceRecord]:
        """Search the source for candidates matching the reference place.

        Raises:
            FetchError: If the search request fails
        """
        url = self.build_search_url(reference)
        payload = await fetch_json(url, self.authentication(), client=self.client)
        candidates = self.parse_candidates(payload)
        self.logger.debug(
            "Search completed",
            reference_name=reference.name,
            candidate_count=len(candidates),
        )
        return candidates
