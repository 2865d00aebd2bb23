# =============================================================================
# Import File Sources
# =============================================================================
# Reads the raw text of an import file chosen by the user, either picked from
# a dialog/command line or dropped onto the window as a list of paths.
#
# Only a single plain .txt file is accepted. Anything else is reported as a
# FileAccessError so the caller can show a blocking notice.
# =============================================================================

import logging
from collections.abc import Iterable
from pathlib import Path

from flaremail.core import FileAccessError


logger = logging.getLogger(__name__)

IMPORT_SUFFIX = ".txt"


def is_text_file(path: str | Path) -> bool:
    """True if the path has a .txt suffix (case-insensitive)."""
    return str(path).lower().endswith(IMPORT_SUFFIX)


def pick_text_file(paths: Iterable[str | Path]) -> Path:
    """
    Choose the import file from a drag-and-drop path list.

    Args:
        paths: Dropped paths in the order the platform reported them.

    Returns:
        The first .txt path.

    Raises:
        FileAccessError: If no path was dropped or none is a .txt file.
    """
    paths = list(paths)
    if not paths:
        raise FileAccessError("No file was dropped")

    for path in paths:
        if is_text_file(path):
            return Path(path)

    raise FileAccessError("Please drop a .txt file")


def read_import_file(path: str | Path) -> str:
    """
    Read an import file as UTF-8 text.

    Args:
        path: Path to a .txt file.

    Returns:
        The file contents.

    Raises:
        FileAccessError: If the path is not a .txt file or cannot be read.
    """
    path = Path(path)
    if not is_text_file(path):
        raise FileAccessError(f"Not a .txt file: {path}")

    try:
        # utf-8-sig so files saved by Windows editors lose their BOM
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read import file {path}: {e}")
        raise FileAccessError(f"Failed to read file: {path}") from e
