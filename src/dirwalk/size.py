"""Disk usage of a path, counting every entry below a directory."""

import asyncio
import os

from dirwalk.paths import to_path_string
from dirwalk.types import EntityType, PathType, get_entity_type
from dirwalk.walker.config import WalkConfig
from dirwalk.walker.walker import walk, walk_async

_EXTRA_CONFIG = WalkConfig(extra_info=True)


def get_size(path: PathType) -> int:
    """Get the size of a path in bytes.

    The path is not followed if it is a symlink. For a directory the result is its
    own size plus the size of every entry found below it.

    Args:
        path: Path to measure.

    Returns:
        The size in bytes.

    Raises:
        FileNotFoundError: If the path does not exist.
    """
    path_str = to_path_string(path)
    status = os.lstat(path_str)
    result = status.st_size
    if get_entity_type(status) is EntityType.DIRECTORY:
        result += sum(entry.size for entry in walk(path_str, _EXTRA_CONFIG))
    return result


async def get_size_async(path: PathType) -> int:
    """Asynchronous counterpart of ``get_size``."""
    path_str = to_path_string(path)
    status = await asyncio.to_thread(os.lstat, path_str)
    result = status.st_size
    if get_entity_type(status) is EntityType.DIRECTORY:
        async for entry in await walk_async(path_str, _EXTRA_CONFIG):
            result += entry.size
    return result
