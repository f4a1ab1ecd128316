"""
Storage layer for writing reports and CSV exports to disk.

File names carry a timestamp so repeated runs never overwrite each other.
"""

from datetime import datetime, timezone
from pathlib import Path


class StorageError(Exception):
    """Base exception for storage errors."""

    pass


def timestamp_slug(moment: datetime | None = None) -> str:
    """
    ISO 8601 UTC timestamp that is safe to use in file names.

    Example: 2025-08-06T14-03-27-512Z
    """
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


class FileStorage:
    """
    File-based storage for CLI output.

    Writes plain-text change reports and CSV exports into one directory.
    """

    def __init__(self, output_directory: str = "."):
        """
        Initialize file storage.

        Args:
            output_directory: Directory to save output files (default: current directory)
        """
        self.output_directory = Path(output_directory)
        self.output_directory.mkdir(parents=True, exist_ok=True)

    def save_report(self, report: str, output_path: str | None = None) -> str:
        """
        Save a change report.

        Args:
            report: Report text from render_report()
            output_path: Optional file name. If not provided, generates one.

        Returns:
            Path to the saved file

        Raises:
            StorageError: If the file cannot be written
        """
        if output_path is None:
            output_path = f"update-report-{timestamp_slug()}.txt"
        return self._write(output_path, report)

    def save_csv(self, csv_text: str, output_path: str | None = None) -> str:
        """
        Save an "empty titles" CSV export.

        Args:
            csv_text: CSV text from export_entries_csv()
            output_path: Optional file name. If not provided, generates one.

        Returns:
            Path to the saved file

        Raises:
            StorageError: If the file cannot be written
        """
        if output_path is None:
            output_path = f"empty-titles-{timestamp_slug()}.csv"
        return self._write(output_path, csv_text)

    def _write(self, output_path: str, content: str) -> str:
        output_file_path = self.output_directory / output_path

        try:
            with open(output_file_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise StorageError(f"Failed to save {output_file_path}: {str(e)}")

        return str(output_file_path)
