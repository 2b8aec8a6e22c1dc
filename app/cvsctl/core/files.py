"""Filesystem helpers used alongside cvs operations.

Existence checks, renames and deletes of working-copy files. The cvs
integration layer itself only passes path strings around.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileOperationError(Exception):
    """Raised when a rename or delete fails."""


def check_file_exists(path: str) -> bool:
    """Check whether a path exists on disk."""
    return Path(path).exists()


def rename_file(old_path: str, new_path: str) -> None:
    """Rename a file.

    Args:
        old_path: Current path.
        new_path: Target path.

    Raises:
        FileOperationError: If the rename fails.
    """
    try:
        Path(old_path).rename(new_path)
    except OSError as e:
        msg = f"Cannot rename {old_path} to {new_path}: {e}"
        raise FileOperationError(msg) from e
    logger.info("Renamed %s to %s", old_path, new_path)


def delete_file(path: str) -> None:
    """Delete a single file.

    Args:
        path: File to delete.

    Raises:
        FileOperationError: If the file is missing, is a directory, or
            cannot be removed.
    """
    try:
        Path(path).unlink()
    except OSError as e:
        msg = f"Cannot delete {path}: {e}"
        raise FileOperationError(msg) from e
    logger.info("Deleted %s", path)
