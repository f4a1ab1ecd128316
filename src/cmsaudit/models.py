"""
Core data models for the Contentful audit utilities.

All models are plain data structures shared by the CSV reconciler,
the Contentful scanner, the CSV exporter and the SmugMug fetcher.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class PlainText:
    """A field value stored as a single, non-localized string."""

    text: str

    def display_text(self) -> str:
        return self.text

    def is_empty(self) -> bool:
        return self.text == ""

    def to_json(self) -> Any:
        return self.text


@dataclass(frozen=True)
class Localized:
    """
    A field value keyed by locale code (e.g. {"en-US": "Home"}).

    Locale order is the order the API returned them in.
    """

    values: Mapping[str, str]

    # Holds a read-only mapping, which cannot be hashed
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def display_text(self) -> str:
        """Return the first non-empty locale value, or an empty string."""
        for value in self.values.values():
            if value:
                return value
        return ""

    def is_empty(self) -> bool:
        return all(not value for value in self.values.values())

    def to_json(self) -> Any:
        return dict(self.values)


FieldValue = Union[PlainText, Localized]


def parse_field_value(raw: Any) -> FieldValue | None:
    """
    Convert a raw JSON field value into a FieldValue.

    Strings become PlainText, objects become Localized. Other values
    (rich text, links, numbers) are kept as compact JSON text, except falsy
    ones such as 0, False or [] which carry no text and become empty.

    Args:
        raw: Value as decoded from the API response

    Returns:
        FieldValue, or None if the field is missing
    """
    if raw is None:
        return None

    if isinstance(raw, dict):
        return Localized({locale: _locale_text(value) for locale, value in raw.items()})

    if isinstance(raw, str):
        return PlainText(raw)

    if not raw:
        return PlainText("")

    return PlainText(json.dumps(raw, separators=(",", ":"), ensure_ascii=False))


def _locale_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if not value:
        return ""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def extract_display_text(value: FieldValue | None) -> str:
    """Human-readable text of a field value (empty string when missing)."""
    if value is None:
        return ""
    return value.display_text()


def is_empty_value(value: FieldValue | None) -> bool:
    """Check whether a field value is missing or holds no text in any locale."""
    return value is None or value.is_empty()


@dataclass(frozen=True)
class Row:
    """
    One record of an "empty titles" CSV export.

    Fields are positional in the CSV, in the order declared here.
    """

    entry_id: str
    display_field_name: str
    display_field_value: str
    title_field_value: str
    content_type: str
    available_fields: str
    last_updated: str  # ISO 8601 or empty


Snapshot = list[Row]


@dataclass(frozen=True)
class FieldChange:
    """Before and after values of one tracked field."""

    before: str
    after: str


@dataclass(frozen=True)
class ChangeSetEntry:
    """
    Tracked field changes for a single entry between two snapshots.

    Only the display field value and the title field value are tracked, so
    `changes` holds one or two items and is read-only once constructed.
    """

    entry_id: str
    content_type: str
    changes: Mapping[str, FieldChange]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self):
        if not self.changes:
            raise ValueError(f"ChangeSetEntry for {self.entry_id} has no changes")
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))


@dataclass(frozen=True)
class EntryMetadata:
    """
    A Contentful entry whose title or display field is empty.

    `title` and `display_field_value` keep the locale structure of the API.
    """

    entry_id: str
    content_type: str
    updated_at: str
    title: FieldValue | None
    display_field_name: str | None
    display_field_value: FieldValue | None
    field_names: list[str] = field(default_factory=list)

    __hash__ = None  # type: ignore[assignment]

    @property
    def title_json(self) -> str:
        """Compact JSON text of the title value, empty when missing."""
        if self.title is None:
            return ""
        return json.dumps(self.title.to_json(), separators=(",", ":"), ensure_ascii=False)

    @property
    def display_text(self) -> str:
        return extract_display_text(self.display_field_value)


@dataclass
class AlbumMetadata:
    """
    Metadata for one SmugMug album.

    `raw_response` keeps the decoded JSON body for debugging.
    """

    title: str
    description: str
    keywords: str
    image_count: int
    created: str
    modified: str
    privacy: str
    web_uri: str
    album_key: str
    url_name: str
    allow_downloads: bool
    password_protected: bool
    raw_response: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def description_text(self) -> str:
        """Album description with any HTML markup removed."""
        if not self.description:
            return ""
        soup = BeautifulSoup(self.description, "html.parser")
        return " ".join(soup.get_text(separator=" ").split())

    def to_dict(self) -> dict:
        """
        Convert metadata to dictionary for serialization.

        Used for JSON output in the CLI.
        """
        return {
            "title": self.title,
            "description": self.description,
            "keywords": self.keywords,
            "image_count": self.image_count,
            "created": self.created,
            "modified": self.modified,
            "privacy": self.privacy,
            "web_uri": self.web_uri,
            "album_key": self.album_key,
            "url_name": self.url_name,
            "allow_downloads": self.allow_downloads,
            "password_protected": self.password_protected,
            "raw_response": self.raw_response,
        }
