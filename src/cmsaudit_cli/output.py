"""
Terminal output formatter for CLI.

Handles all display logic - no business logic, just presentation.
"""

import json

from cmsaudit.models import AlbumMetadata, EntryMetadata


def _json_or_empty(value) -> str:
    if value is None:
        return "(empty)"
    return json.dumps(value.to_json(), ensure_ascii=False)


def print_scan_results(entries: list[EntryMetadata], content_type: str | None = None) -> None:
    """
    Print scanned entries one block at a time.

    Args:
        entries: Entries with empty title or display fields
        content_type: Content type filter used for the scan (optional)
    """
    type_filter = f" {content_type}" if content_type else ""

    for i, entry in enumerate(entries, 1):
        print(f"{i}. Entry ID: {entry.entry_id}")
        print(f"   Content Type: {entry.content_type}")
        print(f"   Last Updated: {entry.updated_at}")
        print(f"   Title Field Value: {_json_or_empty(entry.title)}")

        if entry.display_field_name:
            print(f"   Display Field (Entry Title): {entry.display_field_name}")
            print(f"   Display Field Value: {_json_or_empty(entry.display_field_value)}")
        else:
            print("   Display Field (Entry Title): Not set")

        print(f"   Available Fields: {', '.join(entry.field_names)}")
        print()

    if not entries:
        print(f"No{type_filter} entries found with empty title or display fields.")


def print_album_metadata(metadata: AlbumMetadata) -> None:
    """
    Print album metadata followed by its JSON form.

    Args:
        metadata: Metadata returned by SmugMugFetcher
    """
    print("Album Metadata:")
    print("=" * 15)
    print(f"Title: {metadata.title}")
    print(f"Description: {metadata.description_text or 'None'}")
    print(f"Keywords: {metadata.keywords or 'None'}")
    print(f"Image Count: {metadata.image_count}")
    print(f"Created: {metadata.created}")
    print(f"Modified: {metadata.modified}")
    print(f"Privacy: {metadata.privacy}")
    print(f"Web URI: {metadata.web_uri}")
    print(f"Album Key: {metadata.album_key}")
    print(f"URL Name: {metadata.url_name}")
    print(f"Allow Downloads: {metadata.allow_downloads}")
    print(f"Password Protected: {metadata.password_protected}")

    print("\nRaw metadata object:")
    print(json.dumps(metadata.to_dict(), indent=2, ensure_ascii=False))


def album_error_hint(error: str) -> str | None:
    """Suggest a fix for a SmugMug fetch error, if one applies."""
    if error.startswith("Invalid input"):
        return "Please provide a valid SmugMug album ID or URL"
    if error.startswith("Request failed"):
        return "Network error - check your internet connection"
    if "timeout" in error.lower():
        return "Request timed out - the album might not be publicly accessible"
    return None
