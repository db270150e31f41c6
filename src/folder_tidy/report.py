"""
Report output for organize runs.

This module is responsible for:
- Rendering one console line per processed entry
- Creating CSV reports of all operations
- Streaming writes to keep memory low
- Recording timestamps, paths, category and status for each entry
- Generating summary statistics
"""

import csv
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, TextIO, Union

from .types import ActionKind, EntryResult, OrganizeReport, Outcome, ReportEntry, ReportStatus

logger = logging.getLogger(__name__)

# CSV column headers in order
REPORT_COLUMNS = [
    "timestamp",
    "status",
    "category",
    "source_path",
    "dest_path",
    "message",
]

# Width of the bracketed label in console lines
LABEL_WIDTH = 12


def _relative_dest(result: EntryResult, target_dir: Optional[str]) -> str:
    dest = result.action.dest_path or ""
    if target_dir:
        try:
            return os.path.relpath(dest, target_dir)
        except ValueError:
            # Different drives on Windows
            return dest
    return dest


def format_result_line(result: EntryResult, target_dir: Optional[str] = None) -> str:
    """
    Format a single result as one console line.

    Examples:
        [Images      ] photo.jpg -> Images/photo.jpg
        [SKIP DIR    ] data
        [FAILED      ] a.txt: PermissionError: ...

    Args:
        result: The EntryResult to render
        target_dir: If given, destinations are shown relative to it

    Returns:
        The formatted line (dry-run lines are prefixed with "[DRY RUN] ")
    """
    name = result.entry.name

    if result.outcome == Outcome.FAILED:
        return f"[{'FAILED':<{LABEL_WIDTH}}] {name}: {result.reason}"

    if result.action.kind == ActionKind.SKIP_DIRECTORY:
        return f"[{'SKIP DIR':<{LABEL_WIDTH}}] {name}"

    if result.action.kind == ActionKind.SKIP_ALREADY_ORGANIZED:
        return f"[{'SKIP':<{LABEL_WIDTH}}] {name} (already in {result.action.category})"

    line = f"[{result.action.category:<{LABEL_WIDTH}}] {name} -> {_relative_dest(result, target_dir)}"
    if result.outcome == Outcome.PLANNED:
        line = f"[DRY RUN] {line}"
    return line


def _result_message(result: EntryResult) -> str:
    if result.outcome == Outcome.FAILED:
        return result.reason
    if result.action.kind == ActionKind.SKIP_DIRECTORY:
        return "Directory left in place"
    if result.action.kind == ActionKind.SKIP_ALREADY_ORGANIZED:
        return f"Already in {result.action.category}"

    dest_name = os.path.basename(result.action.dest_path or "")
    verb = "Would move" if result.outcome == Outcome.PLANNED else "Moved"
    if result.was_renamed:
        return f"{verb} (renamed from {result.entry.name} to {dest_name})"
    return verb


class ReportWriter:
    """
    Streaming CSV report writer for organize results.

    Writes entries incrementally as they are recorded.
    """

    def __init__(self, report_path: Union[str, Path]):
        """
        Initialize the report writer.

        Args:
            report_path: Path where the CSV report will be written
        """
        self.report_path = Path(report_path)

        self._file: Optional[TextIO] = None
        self._writer = None
        self._row_count = 0
        self._stats: Dict[str, int] = {}

    def __enter__(self):
        """Context manager entry - opens the file."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - closes the file."""
        self.close()
        return False

    def open(self) -> None:
        """Open the report file for writing."""
        if self._file is not None:
            return  # Already open

        # Ensure parent directory exists
        self.report_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Opening report file: {self.report_path}")
        self._file = open(self.report_path, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file, quoting=csv.QUOTE_MINIMAL)

        self._writer.writerow(REPORT_COLUMNS)

    def close(self) -> None:
        """Close the report file."""
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None
            logger.info(
                f"Report closed: {self._row_count} rows written to {self.report_path}"
            )

    def _ensure_open(self) -> None:
        """Ensure file is open, open if not."""
        if self._file is None:
            self.open()

    def _get_timestamp(self) -> str:
        """Get current timestamp in ISO format."""
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def write_parameters(self, params: Dict[str, str]) -> None:
        """
        Write run parameters as rows with status "PARAMETER".

        Args:
            params: Dictionary of parameter names to values
        """
        self._ensure_open()

        timestamp = self._get_timestamp()
        for key, value in params.items():
            if value:  # Only write non-empty values
                self._writer.writerow([timestamp, "PARAMETER", "", "", "", f"{key}={value}"])
                self._row_count += 1

        self._writer.writerow([timestamp, "PARAMETER", "", "", "", "--- END PARAMETERS ---"])
        self._row_count += 1
        self._file.flush()

    def write_entry(self, entry: ReportEntry) -> None:
        """
        Write a single report entry to the CSV.

        Args:
            entry: The ReportEntry to write
        """
        self._ensure_open()

        self._writer.writerow([
            entry.timestamp,
            entry.status,
            entry.category,
            entry.source_path,
            entry.dest_path,
            entry.message,
        ])
        self._row_count += 1
        self._stats[entry.status] = self._stats.get(entry.status, 0) + 1

    def write_result(self, result: EntryResult, timestamp: Optional[str] = None) -> None:
        """
        Write an EntryResult to the report.

        Args:
            result: The EntryResult to record
            timestamp: Optional timestamp (defaults to current time)
        """
        entry = ReportEntry(
            timestamp=timestamp or self._get_timestamp(),
            status=ReportStatus.from_result(result).value,
            category=result.action.category or "",
            source_path=result.entry.path,
            dest_path=result.action.dest_path or "",
            message=_result_message(result),
        )
        self.write_entry(entry)

    def get_stats(self) -> Dict[str, int]:
        """Get a copy of the status -> count mapping of written entries."""
        return dict(self._stats)

    def get_summary(self) -> str:
        """
        Get a human-readable summary of the report.

        Returns:
            Formatted summary string
        """
        lines = [f"Report Summary ({self._row_count} total entries):"]

        moved = self._stats.get("MOVED", 0) + self._stats.get("MOVED_RENAMED", 0)
        planned = self._stats.get("PLANNED", 0) + self._stats.get("PLANNED_RENAMED", 0)

        if moved > 0:
            lines.append(f"  Moved: {moved}")
            if self._stats.get("MOVED_RENAMED", 0):
                lines.append(f"    (renamed: {self._stats['MOVED_RENAMED']})")

        if planned > 0:
            lines.append(f"  Would move (dry run): {planned}")
            if self._stats.get("PLANNED_RENAMED", 0):
                lines.append(f"    (would rename: {self._stats['PLANNED_RENAMED']})")

        skipped = (
            self._stats.get("SKIPPED_DIRECTORY", 0) +
            self._stats.get("SKIPPED_ORGANIZED", 0)
        )
        if skipped > 0:
            lines.append(f"  Skipped: {skipped}")

        if self._stats.get("FAILED", 0):
            lines.append(f"  Failed: {self._stats['FAILED']}")

        return "\n".join(lines)


def write_report(
    report: OrganizeReport,
    report_path: Union[str, Path],
    params: Optional[Dict[str, str]] = None
) -> ReportWriter:
    """
    Write a complete CSV report for an organize run.

    Args:
        report: The OrganizeReport to record
        report_path: Path for the CSV report
        params: Optional run parameters written before the results

    Returns:
        The ReportWriter used (for accessing stats)
    """
    with ReportWriter(report_path) as writer:
        if params:
            writer.write_parameters(params)

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        for result in report:
            writer.write_result(result, timestamp)

        logger.info(writer.get_summary())
        return writer
