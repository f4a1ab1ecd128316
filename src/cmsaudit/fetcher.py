"""
HTTP fetcher for JSON APIs.

Shared by the Contentful scanner and the SmugMug album fetcher.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base exception for fetch errors."""

    pass


class FetchTimeoutError(FetchError):
    """Exception raised when fetch times out."""

    pass


@dataclass
class JSONFetchResult:
    """Decoded response from a JSON endpoint."""

    url: str  # Final URL after redirects
    status_code: int
    headers: dict[str, str]
    data: Any
    fetch_time_ms: int

    @property
    def success(self) -> bool:
        """Check if the fetch was successful (2xx status)."""
        return 200 <= self.status_code < 300


class JSONFetcher:
    """
    Fetches and decodes JSON documents.

    Uses httpx for HTTP requests and follows redirects. Errors are returned
    as messages rather than raised, so callers decide how to report them.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the JSON fetcher.

        Args:
            user_agent: Custom User-Agent header (optional)
            headers: Extra headers sent with every request
            transport: httpx transport override (used by tests)
        """
        self.user_agent = user_agent or "cmsaudit/1.0"
        self.headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        if headers:
            self.headers.update(headers)
        self.transport = transport

    async def fetch(
        self, url: str, params: dict[str, Any] | None = None, timeout: int = 30000
    ) -> tuple[JSONFetchResult | None, str | None]:
        """
        Fetch a URL and decode its JSON body.

        Args:
            url: The URL to fetch
            params: Query string parameters
            timeout: Timeout in milliseconds

        Returns:
            Tuple of (JSONFetchResult, None) on success, or (None, error_message) on failure
        """
        start_time = asyncio.get_running_loop().time()

        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=timeout / 1000.0,
                headers=self.headers,
                transport=self.transport,
            ) as client:
                response = await client.get(url, params=params)

            fetch_time_ms = int((asyncio.get_running_loop().time() - start_time) * 1000)
            logger.debug(
                "GET %s -> %d in %dms", response.url, response.status_code, fetch_time_ms
            )
            logger.debug("Raw response: %s", response.text)

            try:
                data = json.loads(response.text)
            except ValueError as e:
                return None, f"Invalid JSON: {str(e)}"

            result = JSONFetchResult(
                url=str(response.url),
                status_code=response.status_code,
                headers=dict(response.headers),
                data=data,
                fetch_time_ms=fetch_time_ms,
            )
            return result, None

        except httpx.TimeoutException:
            return None, f"Timeout after {timeout}ms"
        except httpx.HTTPError as e:
            return None, f"HTTP error: {str(e)}"
