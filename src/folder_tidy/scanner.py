"""
Directory scanner for listing the entries of the target directory.

This module is responsible for:
- Checking that the target exists and is a directory
- Listing its immediate entries using os.scandir (no recursion)
- Recording each entry's name, extension, path and directory flag
"""

import logging
import os
from pathlib import Path
from typing import List, Union

from .categories import extension_of
from .types import FileEntry
from .utils import normalize_path

logger = logging.getLogger(__name__)


class OrganizerError(Exception):
    """Base error for conditions that abort a whole organize run."""
    pass


class DirectoryNotFoundError(OrganizerError, FileNotFoundError):
    """Raised when the target directory does not exist."""
    pass


class NotADirectoryTargetError(OrganizerError, NotADirectoryError):
    """Raised when the target path exists but is not a directory."""
    pass


def check_target(target_dir: Union[str, Path]) -> str:
    """
    Validate the target directory.

    Args:
        target_dir: Directory to organize

    Returns:
        The normalized absolute path of the target

    Raises:
        DirectoryNotFoundError: If target_dir doesn't exist
        NotADirectoryTargetError: If target_dir is not a directory
    """
    target = normalize_path(target_dir)

    if not os.path.exists(target):
        raise DirectoryNotFoundError(f"Directory not found: {target}")

    if not os.path.isdir(target):
        raise NotADirectoryTargetError(f"Not a directory: {target}")

    return target


def scan_entries(target_dir: Union[str, Path]) -> List[FileEntry]:
    """
    List the immediate entries of a directory.

    Symlinks to directories count as directories; symlinks to files (and
    dangling links) count as files. Hidden entries are included.

    Args:
        target_dir: The directory to scan

    Returns:
        List of FileEntry objects sorted by name

    Raises:
        DirectoryNotFoundError: If target_dir doesn't exist
        NotADirectoryTargetError: If target_dir is not a directory
    """
    target = check_target(target_dir)

    logger.info(f"Scanning entries under: {target}")

    entries: List[FileEntry] = []
    with os.scandir(target) as it:
        for dir_entry in it:
            try:
                is_dir = dir_entry.is_dir()
            except OSError as e:
                logger.warning(f"Cannot determine type of {dir_entry.path}: {e}")
                is_dir = False

            entries.append(FileEntry(
                name=dir_entry.name,
                extension="" if is_dir else extension_of(dir_entry.name),
                path=os.path.join(target, dir_entry.name),
                is_dir=is_dir,
            ))

    entries.sort(key=lambda e: e.name)

    dirs_count = sum(1 for e in entries if e.is_dir)
    logger.info(
        f"Scan complete: {len(entries) - dirs_count} files, "
        f"{dirs_count} directories"
    )
    return entries
