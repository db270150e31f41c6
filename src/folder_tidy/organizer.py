"""
File organizer for sorting the files of a directory into category folders.

This module is responsible for:
- Classifying each file of the target directory by extension
- Moving files into <target>/<Category>/
- Handling name collisions with " (1)", " (2)", etc. suffixes
- Supporting dry-run mode (no filesystem changes at all)
- Ensuring idempotency (directories and already-sorted files are skipped)
- Catching and recording per-file errors without aborting the batch
- Logging all operations
- Returning an ordered report for display and CSV output
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Set, Tuple, Union

from .categories import classify
from .scanner import (
    DirectoryNotFoundError,
    NotADirectoryTargetError,
    OrganizerError,
    scan_entries,
)
from .types import (
    ActionKind,
    EntryResult,
    FileEntry,
    OrganizeReport,
    Outcome,
    PlannedAction,
    ReportStatus,
)
from .utils import normalize_path, safe_move

__all__ = [
    "CollisionError",
    "DirectoryNotFoundError",
    "FileOrganizer",
    "NotADirectoryTargetError",
    "OrganizerError",
    "move_file",
    "organize",
    "plan_action",
    "resolve_destination",
]

# Upper bound on " (n)" suffixes tried for one file
MAX_COLLISION_ATTEMPTS = 10000

logger = logging.getLogger(__name__)


class CollisionError(Exception):
    """Raised when no free destination name can be found for a file."""
    pass


def resolve_destination(
    dest_dir: Union[str, Path],
    file_name: str,
    claimed: Optional[Set[str]] = None
) -> str:
    """
    Resolve a unique destination path for a file.

    If the target path already exists (or is in claimed), inserts " (1)",
    " (2)", etc. before the extension until a free name is found:
    "report.txt" -> "report (1).txt", "README" -> "README (1)".

    Args:
        dest_dir: The category folder the file goes into
        file_name: The original file name
        claimed: Optional set of names already claimed in this session
                 (for tracking pending moves in dry-run)

    Returns:
        The full destination path (unique, may have suffix)

    Raises:
        CollisionError: If no free name is found within MAX_COLLISION_ATTEMPTS
    """
    dest_dir_str = os.fspath(dest_dir)
    claimed = claimed or set()

    def _is_free(name: str) -> bool:
        return name not in claimed and not os.path.lexists(os.path.join(dest_dir_str, name))

    if _is_free(file_name):
        return os.path.join(dest_dir_str, file_name)

    stem, suffix = os.path.splitext(file_name)
    for counter in range(1, MAX_COLLISION_ATTEMPTS + 1):
        candidate = f"{stem} ({counter}){suffix}"
        if _is_free(candidate):
            return os.path.join(dest_dir_str, candidate)

    raise CollisionError(
        f"Could not find unique name for '{file_name}' "
        f"after {MAX_COLLISION_ATTEMPTS} attempts"
    )


def _same_dir(a: str, b: str) -> bool:
    return os.path.normcase(os.path.normpath(a)) == os.path.normcase(os.path.normpath(b))


def plan_action(
    entry: FileEntry,
    target_dir: Union[str, Path],
    claimed: Optional[Set[str]] = None
) -> PlannedAction:
    """
    Decide what to do with a single entry.

    Args:
        entry: The scanned entry
        target_dir: The directory being organized
        claimed: Names already claimed in the entry's category folder

    Returns:
        PlannedAction (SKIP_DIRECTORY, SKIP_ALREADY_ORGANIZED or MOVE)

    Raises:
        CollisionError: If the destination name cannot be disambiguated
    """
    if entry.is_dir:
        return PlannedAction(kind=ActionKind.SKIP_DIRECTORY, source_path=entry.path)

    category = classify(entry.extension)
    dest_dir = os.path.join(os.fspath(target_dir), category)

    if _same_dir(os.path.dirname(entry.path), dest_dir):
        return PlannedAction(
            kind=ActionKind.SKIP_ALREADY_ORGANIZED,
            source_path=entry.path,
            category=category,
        )

    return PlannedAction(
        kind=ActionKind.MOVE,
        source_path=entry.path,
        category=category,
        dest_path=resolve_destination(dest_dir, entry.name, claimed),
    )


def move_file(
    src_path: Union[str, Path],
    dest_path: Union[str, Path],
    dry_run: bool = False
) -> Tuple[Outcome, str]:
    """
    Move a single file into its category folder.

    Creates the category folder when needed. Never overwrites: if the
    destination exists by the time the move runs, the move fails.

    Args:
        src_path: Source file path
        dest_path: Destination file path
        dry_run: If True, report the move without touching the filesystem

    Returns:
        Tuple of (Outcome, message)
    """
    src_str = os.fspath(src_path)
    dest_str = os.fspath(dest_path)

    if dry_run:
        logger.info(f"[DRY RUN] Moving: {src_str} -> {dest_str}")
        return Outcome.PLANNED, f"Would move to {dest_str}"

    dest_parent = os.path.dirname(dest_str)
    try:
        os.makedirs(dest_parent, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create category folder {dest_parent}: {e}")
        return Outcome.FAILED, f"Cannot create category folder: {e}"

    logger.info(f"Moving: {src_str} -> {dest_str}")
    success, message = safe_move(src_str, dest_str)

    if success:
        return Outcome.SUCCESS, message

    logger.error(f"Move failed: {src_str} -> {dest_str}: {message}")
    return Outcome.FAILED, message


class FileOrganizer:
    """
    Sorts the files of one directory into category subfolders.

    Supports dry-run mode for previewing operations and handles
    naming collisions by appending numeric suffixes.
    """

    def __init__(self, target_dir: Union[str, Path], dry_run: bool = False):
        """
        Initialize the organizer.

        Args:
            target_dir: The directory whose files will be sorted
            dry_run: If True, simulate moves without actually performing them
        """
        self.target_dir = normalize_path(target_dir)
        self.dry_run = dry_run

        # Names claimed during this session, per category folder
        # (keeps dry-run destinations identical to a live run)
        self._claimed: Dict[str, Set[str]] = {}

        # Statistics
        self._stats: Dict[ReportStatus, int] = {status: 0 for status in ReportStatus}

    def _claimed_for(self, category: str) -> Set[str]:
        return self._claimed.setdefault(category, set())

    def _failed(self, entry: FileEntry, action: PlannedAction, reason: str) -> EntryResult:
        return EntryResult(entry=entry, action=action, outcome=Outcome.FAILED, reason=reason)

    def process_entry(self, entry: FileEntry) -> EntryResult:
        """
        Classify, plan and apply (or simulate) the move of one entry.

        Errors are recorded in the result, never raised.

        Args:
            entry: The scanned entry

        Returns:
            EntryResult describing the outcome
        """
        category = None if entry.is_dir else classify(entry.extension)
        claimed = self._claimed_for(category) if category else None

        try:
            action = plan_action(entry, self.target_dir, claimed)
        except (CollisionError, OSError) as e:
            logger.error(f"Cannot resolve destination for {entry.path}: {e}")
            action = PlannedAction(
                kind=ActionKind.MOVE, source_path=entry.path, category=category
            )
            result = self._failed(entry, action, str(e))
            self._stats[ReportStatus.from_result(result)] += 1
            return result

        if action.kind == ActionKind.SKIP_DIRECTORY:
            logger.debug(f"Skipping directory: {entry.path}")
            result = EntryResult(entry=entry, action=action, outcome=Outcome.SKIPPED)
        elif action.kind == ActionKind.SKIP_ALREADY_ORGANIZED:
            logger.debug(f"Already in {action.category}: {entry.path}")
            result = EntryResult(entry=entry, action=action, outcome=Outcome.SKIPPED)
        else:
            dest_name = os.path.basename(action.dest_path)
            claimed.add(dest_name)

            outcome, message = move_file(action.source_path, action.dest_path, self.dry_run)
            if outcome == Outcome.FAILED:
                claimed.discard(dest_name)
                result = self._failed(entry, action, message)
            else:
                result = EntryResult(entry=entry, action=action, outcome=outcome)

        self._stats[ReportStatus.from_result(result)] += 1
        return result

    def organize(self) -> OrganizeReport:
        """
        Sort every file of the target directory into its category folder.

        Returns:
            OrganizeReport with one result per scanned entry, in scan order

        Raises:
            DirectoryNotFoundError: If the target directory doesn't exist
            NotADirectoryTargetError: If the target is not a directory
        """
        entries = scan_entries(self.target_dir)

        report = OrganizeReport(target_dir=self.target_dir, dry_run=self.dry_run)
        total = len(entries)
        logger.info(f"Processing {total} entries{' (dry run)' if self.dry_run else ''}...")

        for entry in entries:
            report.add(self.process_entry(entry))

        counts = report.counts()
        logger.info(
            f"Completed: {total} processed, {counts['success']} moved, "
            f"{counts['planned']} planned, {counts['skipped']} skipped, "
            f"{counts['failed']} failed"
        )
        return report

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about processed entries.

        Returns:
            Dictionary mapping report status values to counts
        """
        return {status.value: count for status, count in self._stats.items()}

    def get_summary(self) -> str:
        """
        Get a human-readable summary of processed entries.

        Returns:
            Formatted summary string
        """
        stats = self.get_stats()
        total = sum(stats.values())

        lines = [f"Organize Summary ({total} total):"]

        if self.dry_run:
            lines.append(f"  Would move: {stats['PLANNED'] + stats['PLANNED_RENAMED']}")
            if stats["PLANNED_RENAMED"]:
                lines.append(f"    (with rename: {stats['PLANNED_RENAMED']})")
        else:
            lines.append(f"  Moved: {stats['MOVED'] + stats['MOVED_RENAMED']}")
            if stats["MOVED_RENAMED"]:
                lines.append(f"    (with rename: {stats['MOVED_RENAMED']})")

        skipped = stats["SKIPPED_DIRECTORY"] + stats["SKIPPED_ORGANIZED"]
        if skipped:
            lines.append(f"  Skipped: {skipped}")
            if stats["SKIPPED_DIRECTORY"]:
                lines.append(f"    (directories: {stats['SKIPPED_DIRECTORY']})")
            if stats["SKIPPED_ORGANIZED"]:
                lines.append(f"    (already organized: {stats['SKIPPED_ORGANIZED']})")

        if stats["FAILED"]:
            lines.append(f"  Failed: {stats['FAILED']}")

        return "\n".join(lines)


def organize(target_dir: Union[str, Path], dry_run: bool = False) -> OrganizeReport:
    """
    Sort the files of target_dir into category subfolders.

    Args:
        target_dir: Directory to organize
        dry_run: If True, only report what would happen

    Returns:
        OrganizeReport with one result per entry

    Raises:
        DirectoryNotFoundError: If target_dir doesn't exist
        NotADirectoryTargetError: If target_dir is not a directory
    """
    return FileOrganizer(target_dir, dry_run=dry_run).organize()
