"""
SmugMug album metadata fetcher.

Reads album details from the public `api/v2` JSON endpoint. The response
shape is not documented, so both the album object and its fields are
looked up through lists of alternative key names.
"""

import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from .config import SmugMugConfig
from .fetcher import JSONFetcher
from .models import AlbumMetadata

logger = logging.getLogger(__name__)

# Paths to the album object, tried in order
ALBUM_PATHS = [
    ("Response", "Album"),
    ("Album",),
    ("response", "album"),
    ("album",),
    ("data",),
]

# Alternative key names for each metadata field, tried in order
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "title": ("Title", "Name", "title", "name"),
    "description": ("Description", "description"),
    "keywords": ("Keywords", "keywords"),
    "image_count": ("ImageCount", "imageCount", "image_count"),
    "created": ("Date", "created", "date"),
    "modified": ("LastUpdated", "lastUpdated", "modified"),
    "privacy": ("Privacy", "privacy"),
    "web_uri": ("WebUri", "webUri", "web_uri"),
    "album_key": ("AlbumKey", "albumKey", "album_key", "Key", "key"),
    "url_name": ("UrlName", "urlName", "url_name"),
    "allow_downloads": ("AllowDownloads", "allowDownloads", "allow_downloads"),
    "password": ("Password", "password"),
}


def build_album_url(identifier: str, api_host: str = "api.smugmug.com") -> str:
    """
    Build the API URL for an album ID or a SmugMug gallery URL.

    Gallery URLs keep their host and get `/api/v2` prefixed to the path.

    Raises:
        ValueError: If the identifier is empty or the URL has no host
    """
    identifier = identifier.strip()
    if not identifier:
        raise ValueError("Album identifier must be a non-empty string")

    if identifier.startswith("http"):
        parsed = urlparse(identifier)
        if not parsed.hostname:
            raise ValueError(f"URL has no host: {identifier}")
        return f"https://{parsed.hostname}/api/v2{parsed.path}"

    return f"https://{api_host}/api/v2/album/{identifier}"


def find_album(response: Any) -> dict[str, Any] | None:
    """Locate the album object in a decoded API response."""
    if not isinstance(response, dict):
        return None

    for path in ALBUM_PATHS:
        node: Any = response
        for key in path:
            node = node.get(key) if isinstance(node, dict) else None
        if node:
            return node

    return None


def _first(album: dict[str, Any], name: str, default: Any = "") -> Any:
    for key in FIELD_KEYS[name]:
        value = album.get(key)
        if value:
            return value
    return default


def extract_metadata(album: dict[str, Any], response: dict[str, Any]) -> AlbumMetadata:
    """
    Build AlbumMetadata from an album object.

    Args:
        album: Album object found by find_album()
        response: Full decoded response, kept for debugging

    Returns:
        AlbumMetadata with empty strings, 0 or False for missing fields
    """
    try:
        image_count = int(_first(album, "image_count", 0))
    except (TypeError, ValueError):
        image_count = 0

    return AlbumMetadata(
        title=str(_first(album, "title")),
        description=str(_first(album, "description")),
        keywords=str(_first(album, "keywords")),
        image_count=image_count,
        created=str(_first(album, "created")),
        modified=str(_first(album, "modified")),
        privacy=str(_first(album, "privacy")),
        web_uri=str(_first(album, "web_uri")),
        album_key=str(_first(album, "album_key")),
        url_name=str(_first(album, "url_name")),
        allow_downloads=bool(_first(album, "allow_downloads", False)),
        password_protected=bool(_first(album, "password", False)),
        raw_response=response,
    )


class SmugMugFetcher:
    """
    Fetches album metadata from SmugMug.

    Uses the unauthenticated JSON API, so only public albums resolve.
    """

    def __init__(
        self,
        config: SmugMugConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the album fetcher.

        Args:
            config: SmugMug settings (defaults are used if omitted)
            transport: httpx transport override (used by tests)
        """
        self.config = config or SmugMugConfig()
        self.fetcher = JSONFetcher(user_agent=self.config.user_agent, transport=transport)

    async def fetch(
        self, identifier: str, timeout: int | None = None
    ) -> tuple[AlbumMetadata | None, str | None]:
        """
        Fetch metadata for an album.

        Args:
            identifier: Album key (e.g. "SJT3DX") or gallery URL
            timeout: Timeout in milliseconds (defaults to the configured value)

        Returns:
            Tuple of (AlbumMetadata, None) on success, or (None, error_message) on failure
        """
        if timeout is None:
            timeout = self.config.timeout * 1000

        try:
            url = build_album_url(identifier, self.config.api_host)
        except ValueError as e:
            return None, f"Invalid input: {str(e)}"

        logger.info("Fetching album metadata from %s", url)
        result, error = await self.fetcher.fetch(url, timeout=timeout)

        if result is None:
            error = error or "Unknown error"
            if error.startswith("Timeout"):
                return None, "Request timeout"
            if error.startswith("Invalid JSON"):
                return None, f"Failed to parse response: {error}"
            return None, f"Request failed: {error}"

        if not result.success:
            logger.warning("SmugMug returned HTTP %d for %s", result.status_code, url)

        album = find_album(result.data)
        if album is None:
            keys = list(result.data.keys()) if isinstance(result.data, dict) else []
            return None, (
                "Could not find album data in response. "
                f"Available response keys: {', '.join(keys) or 'none'}"
            )

        return extract_metadata(album, result.data), None
