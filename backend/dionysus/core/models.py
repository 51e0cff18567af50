"""Pydantic models for places returned by maps and review sources."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PlaceRecord(BaseModel):
    """One place as described by a data source.

    Only name, address, phone and postal code take part in matching. The
    remaining fields carry the rating data shown for a matched place.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Display name")
    formatted_address: list[str] = Field(
        default_factory=list, description="Address lines, most specific first"
    )
    phone: str | None = Field(default=None, description="Raw or formatted phone number")
    postal_code: str | None = Field(default=None, description="Postal / ZIP code")

    # Rating data
    score: float | None = Field(default=None, description="Average rating on the source's scale")
    num_of_scores: int | None = Field(default=None, ge=0, description="Number of ratings")
    price: int = Field(default=0, ge=0, le=4, description="Price tier (number of $)")
    url: str | None = Field(default=None, description="Place page on the source")

    # Location
    distance_meters: float | None = Field(default=None, description="Distance from the user")
    latitude: float | None = Field(default=None)
    longitude: float | None = Field(default=None)

    @property
    def first_address_line(self) -> str | None:
        """First address line, or None when the address is empty."""
        if not self.formatted_address:
            return None
        return self.formatted_address[0]
