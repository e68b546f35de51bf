"""Existence checks for paths."""

import asyncio
import os

from dirwalk.paths import to_path_string
from dirwalk.types import EntityType, PathType, get_entity_type


def exist(path: PathType, is_directory: bool = False, is_file: bool = False, is_readable: bool = False) -> bool:
    """Test whether a path exists.

    Symlinks are followed, so a symlink to a directory passes ``is_directory`` and a
    dangling symlink does not exist. Checking and then acting on the same path is racy;
    prefer performing the operation and handling its error.

    Args:
        path: Path to test.
        is_directory: Also require the path to be a directory.
        is_file: Also require the path to be a regular file.
        is_readable: Also require the path to be readable by the current user.

    Returns:
        True if the path exists and passes every requested check.

    Raises:
        ValueError: If both ``is_directory`` and ``is_file`` are set.
        PermissionError: If the path cannot be inspected.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     exist(tmp, is_directory=True), exist(tmp, is_file=True)
        (True, False)
    """
    if is_directory and is_file:
        raise ValueError("is_directory and is_file are mutually exclusive")

    path_str = to_path_string(path)
    try:
        status = os.stat(path_str)
    except (FileNotFoundError, NotADirectoryError):
        return False

    entity_type = get_entity_type(status)
    if is_directory and entity_type is not EntityType.DIRECTORY:
        return False
    if is_file and entity_type is not EntityType.FILE:
        return False
    if is_readable and not os.access(path_str, os.R_OK):
        return False
    return True


async def exist_async(
    path: PathType, is_directory: bool = False, is_file: bool = False, is_readable: bool = False
) -> bool:
    """Asynchronous counterpart of ``exist``."""
    return await asyncio.to_thread(exist, path, is_directory, is_file, is_readable)
