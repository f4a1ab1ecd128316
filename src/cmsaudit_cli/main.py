"""
CLI main entry point for the Contentful audit utilities.

Thin wrapper around the cmsaudit package - no business logic here.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from cmsaudit.config import ConfigError, load_settings
from cmsaudit.contentful import ContentfulError, ContentfulScanner
from cmsaudit.exporter import export_entries_csv
from cmsaudit.fetcher import FetchError
from cmsaudit.reconciler import parse_snapshot, reconcile, render_report
from cmsaudit.smugmug import SmugMugFetcher
from cmsaudit.storage import FileStorage, StorageError

from .output import album_error_hint, print_album_metadata, print_scan_results


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Audit Contentful entries with empty titles and related metadata.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s scan
  %(prog)s scan blogPost --csv -o ./exports
  %(prog)s csv-diff empty-titles-2025-08-06.csv empty-titles-edited.csv
  %(prog)s smugmug https://yoursite.smugmug.com/Album-Name
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Find entries with an empty title or display field",
    )
    scan_parser.add_argument(
        "content_type",
        nargs="?",
        default=None,
        help="Only scan entries of this content type (optional)",
    )
    scan_parser.add_argument(
        "--csv",
        action="store_true",
        help="Save results as a CSV file instead of printing them",
    )
    scan_parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=".",
        help="Directory to save output files (default: current directory)",
    )

    diff_parser = subparsers.add_parser(
        "csv-diff",
        help="Report edited display/title values between two CSV exports",
    )
    diff_parser.add_argument("original_file", type=str, help="CSV export as downloaded")
    diff_parser.add_argument("edited_file", type=str, help="Edited copy of the CSV export")
    diff_parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=".",
        help="Directory to save the report (default: current directory)",
    )
    diff_parser.add_argument(
        "--no-save",
        action="store_true",
        help="Print the report without saving it",
    )

    smugmug_parser = subparsers.add_parser(
        "smugmug",
        help="Fetch metadata for a public SmugMug album",
    )
    smugmug_parser.add_argument("album", type=str, help="Album ID or gallery URL")
    smugmug_parser.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=None,
        help="Request timeout in seconds (default: 10)",
    )

    return parser.parse_args(argv)


def read_csv_file(input_file: str) -> str:
    """
    Read a CSV export.

    Args:
        input_file: Path to input file

    Returns:
        File content

    Raises:
        SystemExit: If file cannot be read
    """
    file_path = Path(input_file)

    if not file_path.exists():
        print(f"Error: File '{input_file}' not found", file=sys.stderr)
        sys.exit(1)

    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file {input_file}: {e}", file=sys.stderr)
        sys.exit(1)


def run_scan(args: argparse.Namespace) -> None:
    try:
        config = load_settings().require_contentful()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    type_filter = f" {args.content_type}" if args.content_type else ""
    print(f"Scanning Contentful space for{type_filter} entries with empty title or display fields...\n")

    scanner = ContentfulScanner(config)
    try:
        entries = scanner.scan(args.content_type)
    except FetchError as e:
        print(f"Error scanning Contentful space: {e}", file=sys.stderr)
        if isinstance(e, ContentfulError) and e.not_found:
            print(
                "Please check your CONTENTFUL_SPACE_ID and CONTENTFUL_MANAGEMENT_TOKEN",
                file=sys.stderr,
            )
        sys.exit(1)

    print(f"Found {len(entries)}{type_filter} entries with empty title or display fields:\n")

    if not args.csv:
        print_scan_results(entries, args.content_type)
        return

    storage = FileStorage(output_directory=args.output_dir)
    try:
        output_path = storage.save_csv(export_entries_csv(entries))
    except StorageError as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    print(f"CSV file saved as: {output_path}")
    print(f"File contains {len(entries)} entries")


def run_csv_diff(args: argparse.Namespace) -> None:
    original_text = read_csv_file(args.original_file)
    edited_text = read_csv_file(args.edited_file)

    print("Comparing CSV files:")
    print(f"  Original: {args.original_file}")
    print(f"  Edited:   {args.edited_file}\n")

    original_rows = parse_snapshot(original_text)
    edited_rows = parse_snapshot(edited_text)

    print(f"Original file: {len(original_rows)} entries")
    print(f"Edited file:   {len(edited_rows)} entries\n")

    report = render_report(reconcile(original_rows, edited_rows))
    print(report)

    if args.no_save:
        return

    storage = FileStorage(output_directory=args.output_dir)
    try:
        output_path = storage.save_report(report)
    except StorageError as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Report saved to: {output_path}")


def run_smugmug(args: argparse.Namespace) -> None:
    settings = load_settings()
    fetcher = SmugMugFetcher(settings.smugmug)

    is_url = args.album.startswith("http")
    display_text = args.album if is_url else f"Album ID: {args.album}"
    print(f"Fetching metadata for SmugMug album: {display_text}\n")

    timeout = args.timeout * 1000 if args.timeout else None
    metadata, error = asyncio.run(fetcher.fetch(args.album, timeout=timeout))

    if error or metadata is None:
        error = error or "Unknown error"
        print(f"Error fetching album metadata: {error}", file=sys.stderr)
        hint = album_error_hint(error)
        if hint:
            print(hint, file=sys.stderr)
        sys.exit(1)

    print_album_metadata(metadata)


COMMANDS = {
    "scan": run_scan,
    "csv-diff": run_csv_diff,
    "smugmug": run_smugmug,
}


def main(argv: list[str] | None = None) -> None:
    """
    Main CLI entry point.

    Parses arguments, configures logging and dispatches to the subcommand.
    """
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    COMMANDS[args.command](args)


if __name__ == "__main__":
    main()
