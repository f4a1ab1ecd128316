"""
Contentful audit utilities.

Finds Contentful entries with empty titles, diffs edited CSV exports of
them, and reads SmugMug album metadata. Designed to be reusable outside the
CLI; the reconciler works on in-memory text only.
"""

from .contentful import ContentfulError, ContentfulScanner
from .exporter import export_entries_csv
from .models import (
    AlbumMetadata,
    ChangeSetEntry,
    EntryMetadata,
    FieldChange,
    FieldValue,
    Localized,
    PlainText,
    Row,
    Snapshot,
    extract_display_text,
    parse_field_value,
)
from .reconciler import SnapshotDiffer, parse_snapshot, reconcile, render_report, tokenize_line
from .smugmug import SmugMugFetcher

__all__ = [
    # Models
    "Row",
    "Snapshot",
    "FieldChange",
    "ChangeSetEntry",
    "FieldValue",
    "PlainText",
    "Localized",
    "EntryMetadata",
    "AlbumMetadata",
    "extract_display_text",
    "parse_field_value",
    # CSV reconciler
    "tokenize_line",
    "parse_snapshot",
    "reconcile",
    "render_report",
    "SnapshotDiffer",
    # Integrations
    "ContentfulScanner",
    "ContentfulError",
    "SmugMugFetcher",
    "export_entries_csv",
]
