"""
Unit tests for core data models.
"""

import dataclasses
from collections.abc import Hashable

import pytest

from cmsaudit.models import (
    AlbumMetadata,
    ChangeSetEntry,
    EntryMetadata,
    FieldChange,
    Localized,
    PlainText,
    Row,
    extract_display_text,
    is_empty_value,
    parse_field_value,
)


def make_album(**overrides):
    values = dict(
        title="Summer",
        description="",
        keywords="",
        image_count=0,
        created="",
        modified="",
        privacy="Public",
        web_uri="",
        album_key="abc",
        url_name="Summer",
        allow_downloads=False,
        password_protected=False,
    )
    values.update(overrides)
    return AlbumMetadata(**values)


class TestParseFieldValue:
    """Tests for parse_field_value."""

    def test_missing_value(self):
        """Test that None stays None."""
        assert parse_field_value(None) is None

    def test_plain_string(self):
        """Test that strings become PlainText."""
        assert parse_field_value("Home") == PlainText("Home")

    def test_localized_mapping(self):
        """Test that objects become Localized with locale order kept."""
        value = parse_field_value({"en-US": "Home", "de-DE": "Start"})

        assert isinstance(value, Localized)
        assert list(value.values.items()) == [("en-US", "Home"), ("de-DE", "Start")]

    def test_non_string_locale_values(self):
        """Test that non-string locale values are kept as JSON text."""
        value = parse_field_value({"en-US": {"nodeType": "document"}, "fr": None})

        assert value.values["en-US"] == '{"nodeType":"document"}'
        assert value.values["fr"] == ""

    def test_non_string_scalar(self):
        """Test that numbers are kept as JSON text."""
        assert parse_field_value(42) == PlainText("42")

    @pytest.mark.parametrize("raw", [0, False, [], 0.0])
    def test_falsy_scalar_is_empty(self, raw):
        """Test that falsy non-string values carry no text."""
        value = parse_field_value(raw)

        assert value == PlainText("")
        assert is_empty_value(value) is True

    def test_falsy_locale_values(self):
        """Test that falsy locale values are empty and other values stay JSON."""
        value = parse_field_value({"en-US": 0, "de-DE": False, "fr": [], "it": [1]})

        assert value.values["en-US"] == ""
        assert value.values["de-DE"] == ""
        assert value.values["fr"] == ""
        assert value.values["it"] == "[1]"


class TestExtractDisplayText:
    """Tests for extract_display_text and is_empty_value."""

    def test_plain_text(self):
        """Test that plain text is returned as-is."""
        assert extract_display_text(PlainText("Home")) == "Home"

    def test_localized_first_non_empty(self):
        """Test that the first non-empty locale value is used."""
        value = Localized({"en-US": "", "de-DE": "Start", "fr": "Accueil"})

        assert extract_display_text(value) == "Start"

    def test_localized_all_empty(self):
        """Test that an all-empty mapping gives an empty string."""
        assert extract_display_text(Localized({"en-US": ""})) == ""

    def test_missing(self):
        """Test that a missing value gives an empty string."""
        assert extract_display_text(None) == ""

    def test_is_empty_value(self):
        """Test emptiness across variants."""
        assert is_empty_value(None) is True
        assert is_empty_value(PlainText("")) is True
        assert is_empty_value(Localized({})) is True
        assert is_empty_value(Localized({"en-US": "", "de-DE": ""})) is True
        assert is_empty_value(Localized({"en-US": "", "de-DE": "x"})) is False
        assert is_empty_value(PlainText("x")) is False

    def test_localized_is_read_only(self):
        """Test that Localized values cannot be changed after creation."""
        source = {"en-US": "Home"}
        value = Localized(source)
        source["en-US"] = "Changed"

        assert value.values["en-US"] == "Home"
        with pytest.raises(TypeError):
            value.values["en-US"] = "Other"  # type: ignore[index]

    def test_localized_is_not_hashable(self):
        """Test that Localized does not advertise a hash it cannot compute."""
        value = Localized({"en-US": "Home"})

        assert not isinstance(value, Hashable)
        with pytest.raises(TypeError):
            hash(value)


class TestRow:
    """Tests for Row model."""

    def test_row_is_immutable(self):
        """Test that rows cannot be modified."""
        row = Row("1", "name", "value", '"t"', "page", "name", "")

        with pytest.raises(dataclasses.FrozenInstanceError):
            row.entry_id = "2"  # type: ignore[misc]

    def test_row_is_hashable(self):
        """Test that rows, which hold only strings, can still be hashed."""
        row = Row("1", "name", "value", "", "page", "name", "")

        assert hash(row) == hash(Row("1", "name", "value", "", "page", "name", ""))


class TestChangeSetEntry:
    """Tests for ChangeSetEntry model."""

    def test_changes_are_read_only(self):
        """Test that the changes mapping cannot be modified."""
        entry = ChangeSetEntry(
            entry_id="1",
            content_type="page",
            changes={"display_field_value": FieldChange("a", "b")},
        )

        with pytest.raises(TypeError):
            entry.changes["title_field_value"] = FieldChange("c", "d")  # type: ignore[index]

    def test_empty_changes_rejected(self):
        """Test that an entry without changes cannot be built."""
        with pytest.raises(ValueError, match="no changes"):
            ChangeSetEntry(entry_id="1", content_type="page", changes={})

    def test_not_hashable(self):
        """Test that change set entries are not usable as dict keys."""
        entry = ChangeSetEntry(
            entry_id="1",
            content_type="page",
            changes={"display_field_value": FieldChange("a", "b")},
        )

        assert not isinstance(entry, Hashable)
        with pytest.raises(TypeError):
            hash(entry)


class TestEntryMetadata:
    """Tests for EntryMetadata model."""

    def test_title_json_localized(self):
        """Test compact JSON for a localized title."""
        entry = EntryMetadata(
            entry_id="1",
            content_type="page",
            updated_at="2025-08-06T10:00:00Z",
            title=Localized({"en-US": ""}),
            display_field_name="internalName",
            display_field_value=Localized({"en-US": "Home"}),
        )

        assert entry.title_json == '{"en-US":""}'
        assert entry.display_text == "Home"

    def test_title_json_missing(self):
        """Test that a missing title exports as an empty string."""
        entry = EntryMetadata(
            entry_id="1",
            content_type="page",
            updated_at="",
            title=None,
            display_field_name=None,
            display_field_value=None,
        )

        assert entry.title_json == ""
        assert entry.display_text == ""
        assert entry.field_names == []

    def test_not_hashable(self):
        """Test that entry metadata does not advertise a hash."""
        entry = EntryMetadata(
            entry_id="1",
            content_type="page",
            updated_at="",
            title=None,
            display_field_name=None,
            display_field_value=None,
        )

        assert not isinstance(entry, Hashable)


class TestAlbumMetadata:
    """Tests for AlbumMetadata model."""

    def test_description_text_strips_html(self):
        """Test that HTML markup is removed from the description."""
        album = make_album(description="<p>Beach <b>day</b></p>\n<p>2024</p>")

        assert album.description_text == "Beach day 2024"

    def test_description_text_empty(self):
        """Test that an empty description stays empty."""
        assert make_album().description_text == ""

    def test_to_dict(self):
        """Test dictionary conversion for JSON output."""
        data = make_album(image_count=12, raw_response={"Album": {}}).to_dict()

        assert data["title"] == "Summer"
        assert data["image_count"] == 12
        assert data["password_protected"] is False
        assert data["raw_response"] == {"Album": {}}
