"""
CSV reconciler for "empty titles" exports.

Parses two CSV snapshots, lines rows up by entry ID and reports edits to the
display field value and title field value. Everything here works on
in-memory text; reading and writing files is left to the caller.
"""

import logging

from .models import ChangeSetEntry, FieldChange, Row, Snapshot

logger = logging.getLogger(__name__)

ROW_FIELD_COUNT = 7

# Tracked fields, in report order
TRACKED_FIELDS = ("display_field_value", "title_field_value")

NO_CHANGES_MESSAGE = "No changes detected between the CSV files."


def tokenize_line(line: str) -> list[str]:
    """
    Split one CSV line into fields.

    A field may be wrapped in double quotes, inside which commas are literal
    and a doubled quote stands for one quote character. Quoted fields may
    not span lines.

    Args:
        line: A single line of CSV text

    Returns:
        Fields with quoting removed; always one more than the number of
        commas outside quotes
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]

        if char == '"':
            if in_quotes and line[i + 1 : i + 2] == '"':
                # Escaped quote
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

        i += 1

    fields.append("".join(current))
    return fields


def parse_snapshot(text: str) -> Snapshot:
    """
    Parse an exported CSV file into rows.

    The first line is a header and is skipped. Lines with fewer than seven
    fields are dropped without raising.

    Args:
        text: Full CSV file content

    Returns:
        Rows in file order
    """
    lines = text.strip().split("\n")
    rows: Snapshot = []

    for line_number, line in enumerate(lines[1:], start=2):
        columns = tokenize_line(line.rstrip("\r"))

        if len(columns) < ROW_FIELD_COUNT:
            logger.debug(
                "Skipping line %d: %d fields, expected %d",
                line_number,
                len(columns),
                ROW_FIELD_COUNT,
            )
            continue

        rows.append(Row(*columns[:ROW_FIELD_COUNT]))

    return rows


class SnapshotDiffer:
    """
    Compares an original snapshot against an edited copy of it.

    Only entries present in both snapshots are compared; rows added to the
    edited snapshot are ignored. When the original snapshot repeats an entry
    ID, the last occurrence is used.
    """

    tracked_fields = TRACKED_FIELDS

    def compare(self, original: Snapshot, edited: Snapshot) -> list[ChangeSetEntry]:
        """
        Find tracked field edits between two snapshots.

        Args:
            original: Rows from the original export
            edited: Rows from the edited export

        Returns:
            One ChangeSetEntry per edited entry, in edited snapshot order
        """
        original_by_id = {row.entry_id: row for row in original}
        entries: list[ChangeSetEntry] = []

        for edited_row in edited:
            original_row = original_by_id.get(edited_row.entry_id)
            if original_row is None:
                logger.debug("Entry %s not in original snapshot, ignoring", edited_row.entry_id)
                continue

            changes = self._compare_rows(original_row, edited_row)
            if changes:
                entries.append(
                    ChangeSetEntry(
                        entry_id=edited_row.entry_id,
                        content_type=edited_row.content_type,
                        changes=changes,
                    )
                )

        return entries

    def _compare_rows(self, original: Row, edited: Row) -> dict[str, FieldChange]:
        changes: dict[str, FieldChange] = {}

        for name in self.tracked_fields:
            before = getattr(original, name)
            after = getattr(edited, name)
            if before != after:
                changes[name] = FieldChange(before=before, after=after)

        return changes


def reconcile(original: Snapshot, edited: Snapshot) -> list[ChangeSetEntry]:
    """Shortcut for SnapshotDiffer().compare(original, edited)."""
    return SnapshotDiffer().compare(original, edited)


def render_report(entries: list[ChangeSetEntry]) -> str:
    """
    Format reconciliation results as a plain-text report.

    Values are written as-is, without escaping.

    Args:
        entries: Output of reconcile()

    Returns:
        Report text
    """
    if not entries:
        return NO_CHANGES_MESSAGE

    lines = [f"Found {len(entries)} entries with changes:", ""]

    for i, entry in enumerate(entries, 1):
        lines.append(f"{i}. Entry ID: {entry.entry_id}")
        lines.append(f"   Content Type: {entry.content_type}")

        display_change = entry.changes.get("display_field_value")
        if display_change:
            lines.append("   Display Field Value:")
            lines.append(f'     Before: "{display_change.before}"')
            lines.append(f'     After:  "{display_change.after}"')

        # Title values are JSON text already
        title_change = entry.changes.get("title_field_value")
        if title_change:
            lines.append("   Title Field Value:")
            lines.append(f"     Before: {title_change.before}")
            lines.append(f"     After:  {title_change.after}")

        lines.append("")

    return "\n".join(lines) + "\n"
