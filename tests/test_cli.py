"""
Tests for the command-line interface.
"""

import csv
import os
import tempfile
from pathlib import Path

import pytest

from folder_tidy import __version__
import folder_tidy.cli as cli_mod
from folder_tidy.cli import (
    EXIT_BAD_TARGET,
    EXIT_INTERRUPTED,
    EXIT_OK,
    create_parser,
    main,
)


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.path == Path(".")
        assert args.dry_run is False
        assert args.report is None
        assert args.verbose == 0

    def test_short_dry_run(self):
        args = create_parser().parse_args(["-d", "/some/dir"])
        assert args.dry_run is True
        assert args.path == Path("/some/dir")

    def test_long_dry_run(self):
        assert create_parser().parse_args(["--dry-run"]).dry_run is True

    def test_verbosity_counts(self):
        assert create_parser().parse_args(["-vv"]).verbose == 2

    @pytest.mark.parametrize("flag", ["-V", "--version"])
    def test_version(self, flag, capsys):
        with pytest.raises(SystemExit) as exc:
            main([flag])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help(self, flag, capsys):
        with pytest.raises(SystemExit) as exc:
            main([flag])
        assert exc.value.code == 0
        assert "--dry-run" in capsys.readouterr().out


class TestMain:
    """Tests for the main entry point."""

    def test_live_run(self, capsys):
        """Moves files and prints one line per entry."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "photo.jpg").write_text("x")
            (base / "notes.txt").write_text("y")
            (base / "data").mkdir()

            code = main([str(base)])

            out = capsys.readouterr().out
            assert code == EXIT_OK
            assert (base / "Images" / "photo.jpg").exists()
            assert f"photo.jpg -> {os.path.join('Images', 'photo.jpg')}" in out
            assert f"notes.txt -> {os.path.join('Documents', 'notes.txt')}" in out
            assert "[SKIP DIR    ] data" in out
            assert "Done. 2 files moved, 1 skipped." in out

    def test_dry_run(self, capsys):
        """Dry run prints the plan and changes nothing."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "photo.jpg").write_text("x")

            code = main([str(base), "--dry-run"])

            out = capsys.readouterr().out
            assert code == EXIT_OK
            assert "DRY RUN" in out
            assert "[DRY RUN] [Images      ] photo.jpg" in out
            assert "1 files would be moved" in out
            assert os.listdir(base) == ["photo.jpg"]

    def test_banner_precedes_results(self, capsys):
        """The banner is printed before any entry line."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "photo.jpg").write_text("x")

            main([str(base), "-d"])

            lines = capsys.readouterr().out.splitlines()
            assert lines[0] == f"Target: {os.path.normpath(os.path.abspath(base))}"
            assert lines[1].startswith("Mode:   DRY RUN")
            assert lines.index("-" * 41) < next(
                i for i, line in enumerate(lines) if "photo.jpg" in line
            )

    def test_banner_shown_before_interrupted_run(self, capsys, monkeypatch):
        """The banner is already out when the run is cancelled."""
        def interrupted(self):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli_mod.FileOrganizer, "organize", interrupted)
        with tempfile.TemporaryDirectory() as tmp:
            code = main([tmp])

            captured = capsys.readouterr()
            assert code == EXIT_INTERRUPTED
            assert captured.out.startswith("Target: ")
            assert "cancelled" in captured.err

    def test_default_is_current_directory(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "song.mp3").write_text("x")
            monkeypatch.chdir(base)

            assert main([]) == EXIT_OK
            assert (base / "Audio" / "song.mp3").exists()

    def test_missing_directory(self, capsys):
        """Missing target prints one diagnostic and exits non-zero."""
        with tempfile.TemporaryDirectory() as tmp:
            code = main([str(Path(tmp) / "nope")])

            captured = capsys.readouterr()
            assert code == EXIT_BAD_TARGET != EXIT_OK
            assert "Directory not found" in captured.err
            assert captured.out == ""

    def test_not_a_directory(self, capsys):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x")

            code = main([str(target)])

            assert code == EXIT_BAD_TARGET
            assert "Not a directory" in capsys.readouterr().err
            assert target.read_text() == "x"

    def test_entry_failures_still_exit_zero(self, capsys):
        """Per-file failures are reported but do not change the exit code."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "Others").write_text("blocks the Others folder")
            (base / "notes.txt").write_text("x")

            code = main([str(base)])

            out = capsys.readouterr().out
            assert code == EXIT_OK
            assert "[FAILED      ] Others:" in out
            assert "1 failed" in out

    def test_writes_csv_report(self, capsys):
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp) / "target"
            base.mkdir()
            (base / "a.txt").write_text("x")
            report_path = Path(tmp) / "out" / "tidy.csv"

            code = main([str(base), "--report", str(report_path)])

            assert code == EXIT_OK
            assert f"Report saved to: {report_path}" in capsys.readouterr().out
            with open(report_path, newline="", encoding="utf-8") as f:
                rows = [r for r in csv.DictReader(f) if r["status"] != "PARAMETER"]
            assert len(rows) == 1
            assert rows[0]["status"] == "MOVED"
            assert rows[0]["category"] == "Documents"
