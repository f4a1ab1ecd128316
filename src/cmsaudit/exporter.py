"""
CSV export of scanned entries.

The column order matches the Row layout read by the reconciler, so an
export can be edited by hand and diffed against the untouched copy.
"""

import csv
import io
import re

from .models import EntryMetadata

CSV_HEADERS = [
    "Entry ID",
    "Display Field Name",
    "Display Field Value",
    "Title Field Value",
    "Content Type",
    "Available Fields",
    "Last Updated",
]

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def single_line(value: str) -> str:
    """Replace line breaks with spaces; the reconciler reads one row per line."""
    return _LINE_BREAKS.sub(" ", value)


def entry_to_columns(entry: EntryMetadata) -> list[str]:
    return [
        entry.entry_id,
        entry.display_field_name or "",
        entry.display_text,
        entry.title_json,
        entry.content_type,
        "; ".join(entry.field_names),
        entry.updated_at,
    ]


def export_entries_csv(entries: list[EntryMetadata]) -> str:
    """
    Render entries as CSV text.

    Values containing commas or quotes are quoted; line breaks inside values
    are flattened to spaces so every entry stays on one line.

    Args:
        entries: Entries returned by the Contentful scanner

    Returns:
        CSV text with a header line, one line per entry
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(CSV_HEADERS)
    for entry in entries:
        writer.writerow([single_line(column) for column in entry_to_columns(entry)])

    return output.getvalue()
