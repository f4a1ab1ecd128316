"""
Unit tests for the CSV exporter.
"""

from cmsaudit.exporter import CSV_HEADERS, export_entries_csv, single_line
from cmsaudit.models import EntryMetadata, Localized, PlainText
from cmsaudit.reconciler import parse_snapshot


def make_entry(**overrides):
    values = dict(
        entry_id="5KsDBWseXY6QegucYAoacS",
        content_type="page",
        updated_at="2025-08-06T10:00:00.000Z",
        title=Localized({"en-US": ""}),
        display_field_name="internalName",
        display_field_value=Localized({"en-US": "Home, sweet home"}),
        field_names=["internalName", "title", "slug"],
    )
    values.update(overrides)
    return EntryMetadata(**values)


class TestSingleLine:
    """Tests for single_line."""

    def test_plain_value(self):
        """Test that values without line breaks are unchanged."""
        assert single_line("hello, world") == "hello, world"

    def test_line_breaks(self):
        """Test that every line break style becomes one space."""
        assert single_line("a\nb\r\nc\rd") == "a b c d"


class TestExportEntriesCSV:
    """Tests for export_entries_csv."""

    def test_header_only(self):
        """Test export of no entries."""
        assert export_entries_csv([]) == ",".join(CSV_HEADERS) + "\n"

    def test_columns(self):
        """Test column values and quoting of one exported entry."""
        lines = export_entries_csv([make_entry()]).splitlines()

        assert len(lines) == 2
        assert lines[1] == (
            '5KsDBWseXY6QegucYAoacS,internalName,"Home, sweet home",'
            '"{""en-US"":""""}",page,internalName; title; slug,2025-08-06T10:00:00.000Z'
        )

    def test_missing_display_field(self):
        """Test export of an entry whose content type has no display field."""
        entry = make_entry(display_field_name=None, display_field_value=None, title=None)
        columns = export_entries_csv([entry]).splitlines()[1].split(",")

        assert columns[1] == ""
        assert columns[2] == ""
        assert columns[3] == ""

    def test_multiline_display_value_stays_on_one_row(self):
        """Test that a display value with line breaks survives a parse."""
        entry = make_entry(display_field_value=PlainText("line1\nline2\r\nline3"))

        text = export_entries_csv([entry])
        rows = parse_snapshot(text)

        assert len(text.splitlines()) == 2
        assert len(rows) == 1
        assert rows[0].entry_id == "5KsDBWseXY6QegucYAoacS"
        assert rows[0].display_field_value == "line1 line2 line3"

    def test_export_parses_back_to_rows(self):
        """Test that exported text is read back with the same field meaning."""
        entries = [
            make_entry(),
            make_entry(entry_id="2", title=PlainText('say "hi"'), display_field_value=None),
        ]

        rows = parse_snapshot(export_entries_csv(entries))

        assert len(rows) == 2
        assert rows[0].entry_id == "5KsDBWseXY6QegucYAoacS"
        assert rows[0].display_field_name == "internalName"
        assert rows[0].display_field_value == "Home, sweet home"
        assert rows[0].title_field_value == '{"en-US":""}'
        assert rows[0].content_type == "page"
        assert rows[0].available_fields == "internalName; title; slug"
        assert rows[1].title_field_value == '"say \\"hi\\""'
        assert rows[1].display_field_value == ""
