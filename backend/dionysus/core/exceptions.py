"""Exception hierarchy for Dionysus.

Fetch errors carry a user_message that is safe to show as-is in place of a
rating.
"""

from __future__ import annotations


class DionysusError(Exception):
    """Base exception for all Dionysus errors."""


class FetchError(DionysusError):
    """A review source request did not produce usable JSON."""

    user_message = "Oops! Something went wrong on search."

    def __init__(self, url: str, detail: str, status_code: int | None = None):
        self.url = url
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{detail} ({url})")


class InvalidRequestError(FetchError):
    """The request URL could not be built from the inputs."""

    user_message = "The inputs are invalid. Maybe remove from gibberish from your search term?"


class NetworkError(FetchError):
    """The request failed at the transport level."""

    user_message = "Oops! A network error occurred on search."


class ClientRequestError(FetchError):
    """The source answered with a 4xx status."""

    user_message = "Oops! A network error occurred on search... Can you check if you're online?"


class SourceUnavailableError(FetchError):
    """The source answered with a non-success status other than 4xx."""

    user_message = (
        "Oops! The site you are searching with is down... "
        "please try again later or use another site."
    )


class UnexpectedContentError(FetchError):
    """The source answered successfully but not with a JSON document."""

    user_message = "Oops! The site you are searching with returned something unexpected."
