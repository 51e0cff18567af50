"""Review sources that can be searched for candidate places."""

from .base import PlaceSource, ReviewSource
from .yelp import YELP, YelpSource

__all__ = ["PlaceSource", "ReviewSource", "YELP", "YelpSource"]
