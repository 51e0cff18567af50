"""JSON fetching for review sources with status translation and retry."""

from __future__ import annotations

import asyncio
import random
from typing import Any
from urllib import parse as urllib_parse

import httpx
import structlog

from dionysus.core.config import get_settings
from dionysus.core.exceptions import (
    ClientRequestError,
    InvalidRequestError,
    NetworkError,
    SourceUnavailableError,
    UnexpectedContentError,
)
from dionysus.core.utils import is_non_empty_string

logger = structlog.get_logger("dionysus.fetch")

# Characters allowed unescaped in a URL query, plus "%" so existing escapes survive
_URL_SAFE_CHARS = "!$&'()*+,-./:;=?@_~%"

JSON_MIME_TYPE = "application/json"


def encode_url(url: str) -> str:
    """Percent-encode characters that are not allowed in a URL query."""
    return urllib_parse.quote(url, safe=_URL_SAFE_CHARS)


def _validate_url(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidRequestError(url, f"Invalid URL: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidRequestError(url, "URL must be absolute http(s) with a host")
    return parsed


def _mime_type(response: httpx.Response) -> str:
    content_type = response.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


def _raise_for_status(response: httpx.Response, url: str) -> None:
    status_code = response.status_code
    if 200 <= status_code <= 299:
        return
    if 400 <= status_code <= 499:
        raise ClientRequestError(url, f"HTTP {status_code}", status_code=status_code)
    raise SourceUnavailableError(url, f"HTTP {status_code}", status_code=status_code)


async def fetch_json(
    url: str,
    authentication: str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    max_retries: int | None = None,
) -> Any:
    """Fetch a JSON document from a review source.

    Args:
        url: Request URL; characters not allowed in a query are percent-encoded
        authentication: Authorization header value, sent only if non-blank
        client: Optional shared client (a temporary one is created otherwise)
        timeout: Request timeout in seconds (default from settings)
        max_retries: Retries on HTTP 429 and network errors (default from settings)

    Returns:
        Decoded JSON document

    Raises:
        InvalidRequestError: URL is not a valid absolute http(s) URL
        NetworkError: Transport failure (after retries)
        ClientRequestError: 4xx response
        SourceUnavailableError: Any other non-2xx response
        UnexpectedContentError: Successful response that is not JSON
    """
    settings = get_settings()
    if timeout is None:
        timeout = settings.http_timeout
    if max_retries is None:
        max_retries = settings.http_max_retries

    encoded_url = encode_url(url)
    logger.debug("Loading URL", url=encoded_url)
    request_url = _validate_url(encoded_url)

    headers = {
        "User-Agent": settings.user_agent,
        "Accept": JSON_MIME_TYPE,
    }
    if is_non_empty_string(authentication):
        headers["Authorization"] = authentication  # type: ignore[assignment]

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=timeout)

    try:
        response = await _get_with_retry(
            client, request_url, headers, timeout, max_retries, encoded_url
        )
    finally:
        if owns_client:
            await client.aclose()

    if _mime_type(response) != JSON_MIME_TYPE:
        logger.warning(
            "Unexpected content type",
            url=encoded_url,
            content_type=response.headers.get("content-type"),
        )
        raise UnexpectedContentError(encoded_url, "Response is not JSON")

    try:
        return response.json()
    except ValueError as e:
        raise UnexpectedContentError(encoded_url, f"Malformed JSON: {e}") from e


async def _get_with_retry(
    client: httpx.AsyncClient,
    request_url: httpx.URL,
    headers: dict[str, str],
    timeout: float,
    max_retries: int,
    url_for_error: str,
) -> httpx.Response:
    """GET with exponential backoff on rate limiting and network errors."""
    for attempt in range(max_retries + 1):
        try:
            response = await client.get(request_url, headers=headers, timeout=timeout)
        except httpx.RequestError as e:
            if attempt < max_retries:
                wait_time = 2**attempt
                logger.warning(
                    "Network error, retrying",
                    error=str(e),
                    attempt=attempt + 1,
                    wait_seconds=wait_time,
                )
                await asyncio.sleep(wait_time)
                continue
            logger.warning("Network error", url=url_for_error, error=str(e))
            raise NetworkError(url_for_error, str(e)) from e

        if response.status_code == 429 and attempt < max_retries:
            # Exponential backoff plus random 0-50% jitter
            base_wait = 2**attempt
            wait_time = base_wait + random.uniform(0, base_wait * 0.5)
            logger.warning(
                "Rate limited, retrying",
                status_code=response.status_code,
                attempt=attempt + 1,
                wait_seconds=wait_time,
            )
            await asyncio.sleep(wait_time)
            continue

        if not 200 <= response.status_code <= 299:
            logger.warning(
                "A network error occurred when loading URL",
                url=url_for_error,
                status_code=response.status_code,
            )
        _raise_for_status(response, url_for_error)
        return response

    raise RuntimeError("Unexpected exit from retry loop")
