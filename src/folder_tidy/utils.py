"""
Filesystem helpers shared by the scanner and the organizer.
"""

import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Tuple, Union

logger = logging.getLogger(__name__)

# Prefix for the temporary file used by cross-volume copies
PARTIAL_PREFIX = ".folder-tidy-partial-"


def normalize_path(path: Union[str, Path]) -> str:
    """
    Return an absolute, normalized string form of a path.

    Symlinks are not resolved, so a link keeps its own location.
    """
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def _make_partial(dest_dir: str, name: str) -> str:
    """Create an empty temporary file in dest_dir under a name nobody else holds."""
    fd, partial = tempfile.mkstemp(dir=dest_dir, prefix=PARTIAL_PREFIX, suffix="-" + name)
    os.close(fd)
    return partial


def _copy_then_delete(src: str, dest: str) -> Tuple[bool, str]:
    """
    Move a file across volumes.

    The file is copied to a fresh temporary file next to the destination,
    checked, renamed into place, and only then is the source removed. Only
    the temporary file created here is ever written to or removed.
    """
    dest_dir = os.path.dirname(dest)
    partial = None

    try:
        partial = _make_partial(dest_dir, os.path.basename(dest))

        if os.path.islink(src):
            # A link is recreated, not copied through its target
            link_target = os.readlink(src)
            link_path, partial = partial, None
            os.remove(link_path)
            # Fails rather than replaces if the name was taken meanwhile
            os.symlink(link_target, link_path)
            partial = link_path
        else:
            shutil.copy2(src, partial)

            src_size = os.path.getsize(src)
            copied_size = os.path.getsize(partial)
            if src_size != copied_size:
                raise OSError(
                    f"Copy incomplete: {copied_size} of {src_size} bytes written"
                )

        if os.path.lexists(dest):
            raise FileExistsError(errno.EEXIST, "Destination appeared during copy", dest)
        os.rename(partial, dest)
    except OSError as e:
        logger.error(f"Cross-volume copy failed: {src} -> {dest}: {e}")
        if partial is not None:
            try:
                os.remove(partial)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove partial copy {partial}: {cleanup_error}")
        return False, f"Copy failed: {e}"

    try:
        os.remove(src)
    except OSError as e:
        logger.warning(f"Copied but could not remove source {src}: {e}")
        return False, f"Copied to {dest} but could not remove source: {e}"

    return True, "Moved successfully (copied across volumes)"


def safe_move(src: Union[str, Path], dest: Union[str, Path]) -> Tuple[bool, str]:
    """
    Move a single file without ever overwriting the destination.

    Tries an atomic rename first. If source and destination are on different
    volumes, falls back to copy-verify-delete.

    Args:
        src: Source file path
        dest: Destination file path (must not exist)

    Returns:
        Tuple of (success, message)
    """
    src_str = os.fspath(src)
    dest_str = os.fspath(dest)

    if os.path.lexists(dest_str):
        return False, f"Destination already exists: {dest_str}"

    try:
        os.rename(src_str, dest_str)
        return True, "Moved successfully"
    except OSError as e:
        if e.errno != errno.EXDEV:
            return False, f"{type(e).__name__}: {e}"

    logger.debug(f"Rename crossed volumes, copying instead: {src_str} -> {dest_str}")
    return _copy_then_delete(src_str, dest_str)
