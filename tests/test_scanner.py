"""
Unit tests for the directory scanner.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

from folder_tidy.scanner import (
    DirectoryNotFoundError,
    NotADirectoryTargetError,
    OrganizerError,
    check_target,
    scan_entries,
)
from folder_tidy.types import FileEntry


class TestCheckTarget:
    """Tests for check_target function."""

    def test_existing_directory(self):
        """Returns the normalized absolute path."""
        with tempfile.TemporaryDirectory() as tmp:
            assert check_target(tmp) == os.path.normpath(os.path.abspath(tmp))

    def test_missing_directory_raises(self):
        """Missing target raises DirectoryNotFoundError."""
        with tempfile.TemporaryDirectory() as tmp:
            with pytest.raises(DirectoryNotFoundError):
                check_target(Path(tmp) / "nonexistent")

    def test_file_raises(self):
        """A file target raises NotADirectoryTargetError."""
        with tempfile.TemporaryDirectory() as tmp:
            file_path = Path(tmp) / "file.txt"
            file_path.write_text("content")

            with pytest.raises(NotADirectoryTargetError):
                check_target(file_path)

    def test_errors_share_base_and_builtins(self):
        """Precondition errors derive from OrganizerError and the builtins."""
        assert issubclass(DirectoryNotFoundError, OrganizerError)
        assert issubclass(DirectoryNotFoundError, FileNotFoundError)
        assert issubclass(NotADirectoryTargetError, OrganizerError)
        assert issubclass(NotADirectoryTargetError, NotADirectoryError)


class TestScanEntries:
    """Tests for scan_entries function."""

    def test_scan_empty_directory(self):
        """Returns empty list for empty directory."""
        with tempfile.TemporaryDirectory() as tmp:
            assert scan_entries(tmp) == []

    def test_scan_files_and_dirs(self):
        """Lists files and directories, flagging directories."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "photo.JPG").write_text("x")
            (base / "data").mkdir()

            entries = {e.name: e for e in scan_entries(tmp)}

            assert set(entries) == {"photo.JPG", "data"}
            assert entries["photo.JPG"].extension == "jpg"
            assert entries["photo.JPG"].is_dir is False
            assert entries["data"].is_dir is True
            assert entries["data"].extension == ""

    def test_scan_is_not_recursive(self):
        """Entries inside subdirectories are not listed."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "sub").mkdir()
            (base / "sub" / "inner.txt").write_text("x")

            names = [e.name for e in scan_entries(tmp)]
            assert names == ["sub"]

    def test_scan_returns_absolute_paths(self):
        """Entry paths are absolute and inside the target."""
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "a.txt").write_text("x")

            entry = scan_entries(tmp)[0]
            assert os.path.isabs(entry.path)
            assert os.path.dirname(entry.path) == check_target(tmp)

    def test_scan_sorted_by_name(self):
        """Entries come back in name order."""
        with tempfile.TemporaryDirectory() as tmp:
            for name in ["c.txt", "a.txt", "b.txt"]:
                (Path(tmp) / name).write_text("x")

            assert [e.name for e in scan_entries(tmp)] == ["a.txt", "b.txt", "c.txt"]

    def test_hidden_files_included(self):
        """Dotfiles are listed like any other file."""
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / ".hidden").write_text("x")

            entries = scan_entries(tmp)
            assert entries == [FileEntry(
                name=".hidden",
                extension="",
                path=os.path.join(check_target(tmp), ".hidden"),
                is_dir=False,
            )]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlinks(self):
        """Links to directories count as directories, links to files as files."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "real_dir").mkdir()
            (base / "real.txt").write_text("x")
            os.symlink(base / "real_dir", base / "dir_link")
            os.symlink(base / "real.txt", base / "file_link.txt")
            os.symlink(base / "missing", base / "dangling")

            entries = {e.name: e for e in scan_entries(tmp)}

            assert entries["dir_link"].is_dir is True
            assert entries["file_link.txt"].is_dir is False
            assert entries["dangling"].is_dir is False

    def test_scan_nonexistent_raises(self):
        """Raises DirectoryNotFoundError for missing target."""
        with pytest.raises(DirectoryNotFoundError):
            scan_entries("/nonexistent/path/that/does/not/exist")
