"""
Contentful scanner for entries with empty titles.

Queries the Content Management API for entries and content types, and
selects entries whose `title` field or display field has no value.
"""

import asyncio
import logging
from typing import Any

import httpx

from .config import ContentfulConfig
from .fetcher import FetchError, FetchTimeoutError, JSONFetcher
from .models import EntryMetadata, is_empty_value, parse_field_value

logger = logging.getLogger(__name__)


class ContentfulError(FetchError):
    """Exception raised when the Contentful API returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class ContentfulScanner:
    """
    Finds Contentful entries with an empty title or display field.

    An entry is reported when its `title` field is empty, or when the field
    its content type uses as display field is empty (or the content type
    has no display field at all).
    """

    def __init__(
        self,
        config: ContentfulConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the scanner.

        Args:
            config: Contentful connection settings
            transport: httpx transport override (used by tests)
        """
        self.config = config
        self.fetcher = JSONFetcher(
            headers={"Authorization": f"Bearer {config.management_token}"},
            transport=transport,
        )

    @property
    def environment_url(self) -> str:
        return (
            f"{self.config.api_url}/spaces/{self.config.space_id}"
            f"/environments/{self.config.environment}"
        )

    def scan(self, content_type: str | None = None) -> list[EntryMetadata]:
        """
        Run a scan synchronously.

        Convenience method that wraps scan_async.
        """
        return asyncio.run(self.scan_async(content_type))

    async def scan_async(self, content_type: str | None = None) -> list[EntryMetadata]:
        """
        Scan the environment for entries with empty title or display fields.

        Args:
            content_type: Only scan entries of this content type (optional)

        Returns:
            Matching entries in API order

        Raises:
            FetchTimeoutError: If a request times out
            ContentfulError: If a request fails or returns an error
        """
        entries = await self.fetch_entries(content_type)
        display_fields = await self.fetch_display_fields()

        matches = []
        for item in entries:
            metadata = self._to_metadata(item, display_fields)
            if is_empty_value(metadata.title) or is_empty_value(metadata.display_field_value):
                matches.append(metadata)

        logger.info("%d of %d entries have empty title or display fields", len(matches), len(entries))
        return matches

    async def fetch_entries(self, content_type: str | None = None) -> list[dict[str, Any]]:
        """
        Fetch all entries, following `skip`/`limit` pagination.

        Args:
            content_type: Only fetch entries of this content type (optional)

        Returns:
            Raw entry objects
        """
        params: dict[str, Any] = {}
        if content_type:
            params["content_type"] = content_type

        return await self._get_all("/entries", params)

    async def fetch_display_fields(self) -> dict[str, str | None]:
        """
        Fetch content types and their display field names.

        Returns:
            Mapping of content type ID to display field name (None if unset)
        """
        items = await self._get_all("/content_types", {})
        return {item["sys"]["id"]: item.get("displayField") or None for item in items}

    async def _get_all(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Collect every item of a collection endpoint page by page."""
        params = {**params, "limit": self.config.page_size}

        items: list[dict[str, Any]] = []
        while True:
            params["skip"] = len(items)
            page = await self._get(path, params)

            page_items = page.get("items") or []
            items.extend(page_items)
            total = page.get("total", len(items))
            logger.debug("Fetched %d/%d items from %s", len(items), total, path)

            if not page_items or len(items) >= total:
                break

        return items

    def _to_metadata(
        self, item: dict[str, Any], display_fields: dict[str, str | None]
    ) -> EntryMetadata:
        entry_sys = item.get("sys", {})
        fields = item.get("fields") or {}
        content_type = entry_sys.get("contentType", {}).get("sys", {}).get("id", "")
        display_field_name = display_fields.get(content_type)

        return EntryMetadata(
            entry_id=entry_sys.get("id", ""),
            content_type=content_type,
            updated_at=entry_sys.get("updatedAt", ""),
            title=parse_field_value(fields.get("title")),
            display_field_name=display_field_name,
            display_field_value=(
                parse_field_value(fields.get(display_field_name)) if display_field_name else None
            ),
            field_names=list(fields.keys()),
        )

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        timeout_ms = self.config.timeout * 1000
        result, error = await self.fetcher.fetch(
            self.environment_url + path, params=dict(params), timeout=timeout_ms
        )

        if result is None:
            if error and error.startswith("Timeout"):
                raise FetchTimeoutError(error)
            raise ContentfulError(error or "Unknown error")

        if not result.success:
            message = ""
            if isinstance(result.data, dict):
                message = result.data.get("message") or result.data.get("sys", {}).get("id", "")
            raise ContentfulError(
                f"HTTP {result.status_code}: {message or 'Request failed'}",
                status_code=result.status_code,
            )

        if not isinstance(result.data, dict):
            raise ContentfulError(f"Unexpected response from {path}")

        return result.data
