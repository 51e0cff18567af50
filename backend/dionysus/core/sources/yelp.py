"""Yelp Fusion business search."""

from __future__ import annotations

from typing import Any
from urllib import parse as urllib_parse

import httpx
from pydantic import ValidationError

from dionysus.core.config import Settings, get_settings
from dionysus.core.models import PlaceRecord

from .base import PlaceSource, ReviewSource

YELP = ReviewSource(name="Yelp", logo="yelp_logo", total_score=5, color_code="#d32323")

DEFAULT_BASE_URL = "https://api.yelp.com/v3"


class YelpSource(PlaceSource):
    """Searches Yelp businesses around a reference place."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        limit: int = 10,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(YELP, client=client)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.limit = limit

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> YelpSource:
        """Create a source from the configured API key and base URL."""
        settings = settings or get_settings()
        return cls(
            api_key=settings.yelp_api_key,
            base_url=settings.yelp_base_url,
            client=client,
        )

    def build_search_url(self, reference: PlaceRecord) -> str:
        params: dict[str, Any] = {"term": reference.name}
        if reference.latitude is not None and reference.longitude is not None:
            params["latitude"] = reference.latitude
            params["longitude"] = reference.longitude
        else:
            params["location"] = ", ".join(reference.formatted_address)
        params["limit"] = self.limit
        return f"{self.base_url}/businesses/search?{urllib_parse.urlencode(params)}"

    def authentication(self) -> str | None:
        if not self.api_key:
            return None
        return f"Bearer {self.api_key}"

    def parse_candidates(self, payload: Any) -> list[PlaceRecord]:
        if not isinstance(payload, dict):
            return []
        businesses = payload.get("businesses")
        if not isinstance(businesses, list):
            return []

        candidates = []
        for business in businesses:
            if not isinstance(business, dict):
                self.logger.debug("Skipping malformed business entry", entry=repr(business)[:100])
                continue
            try:
                candidates.append(_business_to_place(business))
            except ValidationError as e:
                self.logger.debug(
                    "Skipping invalid business entry",
                    business_id=business.get("id"),
                    errors=e.error_count(),
                )
        return candidates


def _business_to_place(business: dict[str, Any]) -> PlaceRecord:
    location = business.get("location")
    if not isinstance(location, dict):
        location = {}
    coordinates = business.get("coordinates")
    if not isinstance(coordinates, dict):
        coordinates = {}

    display_address = location.get("display_address")
    if isinstance(display_address, list):
        address = [str(line) for line in display_address if line]
    elif location.get("address1"):
        address = [str(location["address1"])]
    else:
        address = []

    price = business.get("price")

    return PlaceRecord(
        name=business.get("name") or "",
        formatted_address=address,
        phone=_optional_str(business.get("phone") or business.get("display_phone")),
        postal_code=_optional_str(location.get("zip_code")),
        score=business.get("rating"),
        num_of_scores=business.get("review_count"),
        price=min(len(price), 4) if isinstance(price, str) else 0,
        url=business.get("url"),
        distance_meters=business.get("distance"),
        latitude=coordinates.get("latitude"),
        longitude=coordinates.get("longitude"),
    )


def _optional_str(value: Any) -> str | None:
    # Some entries carry numeric zip codes or phone numbers
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value
