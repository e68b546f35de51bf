"""Create directories and files on demand."""

import asyncio
import logging
import os

from dirwalk.paths import to_path_string
from dirwalk.types import EntityType, PathType, get_entity_type

logger = logging.getLogger(__name__)


def _check_existing(path: str, expected: EntityType) -> bool:
    """Return whether ``path`` exists with the expected type; False if it is missing.

    Raises:
        FileExistsError: If the path exists with another type. Symlinks are not
            followed, so a symlink is never the expected type.
    """
    try:
        entity_type = get_entity_type(os.lstat(path))
    except FileNotFoundError:
        return False
    if entity_type is not expected:
        raise FileExistsError(f"Unable to ensure the {expected.value} {path} exists, path is a {entity_type.value}")
    return True


def ensure_dir(path: PathType) -> None:
    """Ensure a directory exists, creating it and any missing parents.

    Args:
        path: Directory path.

    Raises:
        FileExistsError: If the path exists and is not a directory.

    Example:
        >>> import os, tempfile
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     ensure_dir(os.path.join(tmp, "a", "b"))
        ...     os.path.isdir(os.path.join(tmp, "a", "b"))
        True
    """
    path_str = to_path_string(path)
    if _check_existing(path_str, EntityType.DIRECTORY):
        return
    logger.debug("Creating directory %s", path_str)
    os.makedirs(path_str, exist_ok=True)
    _check_existing(path_str, EntityType.DIRECTORY)


def ensure_file(path: PathType) -> None:
    """Ensure a file exists, creating an empty one and any missing parent directories.

    An existing file is left untouched.

    Args:
        path: File path.

    Raises:
        FileExistsError: If the path (or one of its parents) exists with the wrong type.
    """
    path_str = to_path_string(path)
    if _check_existing(path_str, EntityType.FILE):
        return
    parent = os.path.dirname(path_str)
    if parent and not os.path.isdir(parent):
        ensure_dir(parent)
    logger.debug("Creating file %s", path_str)
    # Append mode never truncates a file created concurrently
    with open(path_str, "ab"):
        pass
    _check_existing(path_str, EntityType.FILE)


async def ensure_dir_async(path: PathType) -> None:
    """Asynchronous counterpart of ``ensure_dir``."""
    await asyncio.to_thread(ensure_dir, path)


async def ensure_file_async(path: PathType) -> None:
    """Asynchronous counterpart of ``ensure_file``."""
    await asyncio.to_thread(ensure_file, path)
