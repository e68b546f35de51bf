import os
import stat
from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntityType(str, Enum):
    """Enumeration of entity types reported by the filesystem.

    This enum is used to categorize the raw status of a path, before any symlink
    target resolution takes place.

    Attributes:
        DIRECTORY: Directory
        FILE: Regular file
        SYMLINK: Symbolic link (target not resolved)
        UNKNOWN: Anything else (device, FIFO, socket, ...)
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    UNKNOWN = "unknown"


def get_entity_type(status: Union[os.stat_result, "os.DirEntry[str]"]) -> EntityType:
    """Classify a status record into exactly one entity type.

    The predicates are checked in the order directory, file, symlink, so that an
    inconsistent status source never downgrades a directory to a plain file.

    Args:
        status: Either an ``os.stat_result`` (usually from ``os.lstat``) or an
            ``os.DirEntry`` from ``os.scandir``. Directory entries are inspected
            without following symlinks.

    Returns:
        The first matching entity type, or ``EntityType.UNKNOWN``.

    Example:
        >>> import os, tempfile
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     get_entity_type(os.lstat(tmp))
        <EntityType.DIRECTORY: 'directory'>
    """
    if isinstance(status, os.stat_result):
        mode = status.st_mode
        if stat.S_ISDIR(mode):
            return EntityType.DIRECTORY
        if stat.S_ISREG(mode):
            return EntityType.FILE
        if stat.S_ISLNK(mode):
            return EntityType.SYMLINK
        return EntityType.UNKNOWN

    if status.is_dir(follow_symlinks=False):
        return EntityType.DIRECTORY
    if status.is_file(follow_symlinks=False):
        return EntityType.FILE
    if status.is_symlink():
        return EntityType.SYMLINK
    return EntityType.UNKNOWN
