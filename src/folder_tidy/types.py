"""
Type definitions and data classes for the folder tidy application.

This module defines:
- FileEntry: Data class for a scanned directory entry (name + extension + path)
- ActionKind: Enum for what the organizer decided to do with an entry
- PlannedAction: Data class describing the decision for one entry
- Outcome: Enum for how applying an action ended
- EntryResult: Data class tying an entry, its action and its outcome together
- OrganizeReport: Ordered results of one organize run
- ReportStatus: Enum for CSV report status values
- ReportEntry: Data class for CSV report rows
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


@dataclass(frozen=True, slots=True)
class FileEntry:
    """
    Represents an entry discovered while scanning the target directory.

    Attributes:
        name: The entry's basename (e.g., "photo.jpg")
        extension: Lowercase extension without the dot (e.g., "jpg"), may be ""
        path: The full absolute path to the entry
        is_dir: Whether the entry is a directory
    """
    name: str
    extension: str
    path: str
    is_dir: bool = False


class ActionKind(Enum):
    """What the organizer decided to do with an entry."""
    MOVE = "move"
    SKIP_DIRECTORY = "skip_directory"
    SKIP_ALREADY_ORGANIZED = "skip_already_organized"


@dataclass(frozen=True)
class PlannedAction:
    """Decision for a single entry."""
    kind: ActionKind
    source_path: str
    category: Optional[str] = None
    dest_path: Optional[str] = None


class Outcome(Enum):
    """Outcome of applying a planned action."""
    SUCCESS = "success"    # Moved
    FAILED = "failed"      # Filesystem error, see reason
    PLANNED = "planned"    # Would move (dry run)
    SKIPPED = "skipped"    # Directory or already organized


@dataclass
class EntryResult:
    """Result of processing one entry."""
    entry: FileEntry
    action: PlannedAction
    outcome: Outcome
    reason: str = ""

    @property
    def was_renamed(self) -> bool:
        """True when the destination name differs from the original name."""
        if self.action.dest_path is None:
            return False
        return os.path.basename(self.action.dest_path) != self.entry.name


@dataclass
class OrganizeReport:
    """Ordered results of one organize run."""
    target_dir: str
    dry_run: bool
    results: List[EntryResult] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def add(self, result: EntryResult) -> None:
        self.results.append(result)

    def _with_outcome(self, outcome: Outcome) -> List[EntryResult]:
        return [r for r in self.results if r.outcome == outcome]

    @property
    def moved(self) -> List[EntryResult]:
        return self._with_outcome(Outcome.SUCCESS)

    @property
    def planned(self) -> List[EntryResult]:
        return self._with_outcome(Outcome.PLANNED)

    @property
    def failed(self) -> List[EntryResult]:
        return self._with_outcome(Outcome.FAILED)

    @property
    def skipped(self) -> List[EntryResult]:
        return self._with_outcome(Outcome.SKIPPED)

    def counts(self) -> Dict[str, int]:
        """
        Count results by outcome.

        Returns:
            Dictionary mapping outcome values to counts (all outcomes present)
        """
        counts = {outcome.value: 0 for outcome in Outcome}
        for result in self.results:
            counts[result.outcome.value] += 1
        return counts


class ReportStatus(Enum):
    """Status values for CSV report (human-readable)."""
    MOVED = "MOVED"                          # Moved successfully
    MOVED_RENAMED = "MOVED_RENAMED"          # Moved with rename due to collision
    PLANNED = "PLANNED"                      # Would move (dry run)
    PLANNED_RENAMED = "PLANNED_RENAMED"      # Would move with rename (dry run)
    SKIPPED_DIRECTORY = "SKIPPED_DIRECTORY"  # Entry is a directory
    SKIPPED_ORGANIZED = "SKIPPED_ORGANIZED"  # Already in its category folder
    FAILED = "FAILED"                        # Operation failed

    @classmethod
    def from_result(cls, result: EntryResult) -> "ReportStatus":
        """Convert an EntryResult to a ReportStatus."""
        if result.outcome == Outcome.FAILED:
            return cls.FAILED
        if result.outcome == Outcome.SKIPPED:
            if result.action.kind == ActionKind.SKIP_DIRECTORY:
                return cls.SKIPPED_DIRECTORY
            return cls.SKIPPED_ORGANIZED
        if result.outcome == Outcome.PLANNED:
            return cls.PLANNED_RENAMED if result.was_renamed else cls.PLANNED
        return cls.MOVED_RENAMED if result.was_renamed else cls.MOVED


@dataclass
class ReportEntry:
    """Entry for the CSV report."""
    timestamp: str
    status: str
    category: str
    source_path: str
    dest_path: str
    message: str
