"""
Command-line interface for the folder tidy application.

This module is responsible for:
- Parsing command-line arguments using argparse
- Configuring logging based on verbosity level
- Running the organizer on the resolved target directory
- Displaying one line per entry and a final summary
- Optionally writing a CSV report
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from . import __version__, PRODUCT_NAME, PRODUCT_DESCRIPTION
from .organizer import FileOrganizer, OrganizerError
from .report import format_result_line, write_report
from .scanner import check_target
from .types import OrganizeReport

logger = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_BAD_TARGET = 1
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="folder-tidy",
        description=f"""
{PRODUCT_NAME} - {PRODUCT_DESCRIPTION}

Moves every file of a directory into a subfolder named after its type
(Images, Documents, Videos, Audio, Archives, Code, ...). Files with an
unknown or missing extension go to Others. Subfolders are left in place.
        """.strip(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Organize the current directory
  %(prog)s

  # Preview what would happen in Downloads
  %(prog)s ~/Downloads --dry-run

  # Organize and keep a CSV record of every move
  %(prog)s ~/Downloads --report tidy.csv

Notes:
  - Existing files are never overwritten: "a.txt" becomes "a (1).txt"
  - Running twice in a row makes no further changes
        """
    )

    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path("."),
        help="Directory to organize (default: current directory)"
    )

    parser.add_argument(
        "-d", "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Preview changes without moving files"
    )

    parser.add_argument(
        "-r", "--report",
        type=Path,
        default=None,
        metavar="CSV_FILE",
        help="Also write a CSV report of the run to CSV_FILE"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (-v for INFO, -vv for DEBUG)"
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def get_run_parameters(args: argparse.Namespace) -> Dict[str, str]:
    """
    Get run parameters as a dictionary for traceability.

    Args:
        args: Parsed command-line arguments

    Returns:
        Dictionary of parameter names to values
    """
    return {
        "version": __version__,
        "timestamp": datetime.now().isoformat(),
        "target": str(args.path.resolve()),
        "dry_run": str(args.dry_run),
    }


def print_banner(target: str, dry_run: bool) -> None:
    """Print startup banner with configuration."""
    print(f"Target: {target}")
    if dry_run:
        print("Mode:   DRY RUN (no changes will be made)")
    print("-" * 41)


def print_results(report: OrganizeReport) -> None:
    """Print one line per entry of the report."""
    for result in report:
        print(format_result_line(result, report.target_dir))


def print_summary(report: OrganizeReport) -> None:
    """Print final counts."""
    counts = report.counts()
    print("-" * 41)

    if report.dry_run:
        parts: List[str] = [f"{counts['planned']} files would be moved"]
    else:
        parts = [f"{counts['success']} files moved"]
    parts.append(f"{counts['skipped']} skipped")
    if counts["failed"]:
        parts.append(f"{counts['failed']} failed")

    print(f"Done. {', '.join(parts)}.")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for a completed run, non-zero if the target is unusable)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    logger.info(f"{PRODUCT_NAME} v{__version__}")
    logger.debug(f"Arguments: {args}")

    try:
        target = check_target(args.path)
    except OrganizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(str(e))
        return EXIT_BAD_TARGET

    print_banner(target, args.dry_run)

    organizer = FileOrganizer(target, dry_run=args.dry_run)

    try:
        report = organizer.organize()
    except OrganizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(str(e))
        return EXIT_BAD_TARGET
    except OSError as e:
        print(f"Error reading directory: {e}", file=sys.stderr)
        logger.error(f"Cannot read {args.path}: {e}")
        return EXIT_BAD_TARGET
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        return EXIT_INTERRUPTED

    print_results(report)
    print_summary(report)
    logger.info(organizer.get_summary())

    if args.report is not None:
        try:
            write_report(report, args.report, get_run_parameters(args))
        except OSError as e:
            print(f"Warning: could not write report {args.report}: {e}", file=sys.stderr)
            logger.error(f"Report write failed: {e}")
        else:
            print(f"Report saved to: {args.report}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
