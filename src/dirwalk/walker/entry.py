"""Entry records produced by the directory walker."""

import os
import stat
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class WalkEntry:
    """A single filesystem object encountered during a walk.

    Entries are immutable snapshots; they hold no reference to the filesystem and are
    never updated after creation. Exactly one of ``is_directory``, ``is_file``,
    ``is_symlink_directory`` and ``is_symlink_file`` is true.

    Attributes:
        name (str): Leaf component of the path.
        path_absolute (str): Absolute path, as reached through any symlinked directory.
        path_absolute_real (str): Canonical absolute path with every symlink resolved.
        path_relative (str): Path relative to the walk root, mirroring ``path_absolute``.
        path_relative_real (str): Real path relative to the walk root. Equal to
            ``path_absolute_real`` when the real location cannot be expressed relative
            to the root (for example on another drive).
        is_directory (bool): Whether the entry is a real directory.
        is_file (bool): Whether the entry is a regular file.
        is_symlink_directory (bool): Whether the entry is a symlink to a directory.
        is_symlink_file (bool): Whether the entry is a symlink to a file, or a dangling
            symlink.
        via_symlink_directory (bool): Whether any ancestor directory (the root
            included) was reached through a symlink.

    Example:
        >>> entry = WalkEntry("a.txt", "/r/a.txt", "/r/a.txt", "a.txt", "a.txt", is_file=True)
        >>> entry.is_file, entry.is_directory
        (True, False)
    """

    name: str
    path_absolute: str
    path_absolute_real: str
    path_relative: str
    path_relative_real: str
    is_directory: bool = False
    is_file: bool = False
    is_symlink_directory: bool = False
    is_symlink_file: bool = False
    via_symlink_directory: bool = False

    @property
    def is_symlink(self) -> bool:
        """Whether the entry itself is a symlink, whatever its target is."""
        return self.is_symlink_directory or self.is_symlink_file


def _timestamp(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


@dataclass(frozen=True)
class WalkEntryExtra(WalkEntry):
    """A walk entry together with the extended status of the entry itself.

    The status is taken with ``os.lstat`` on ``path_absolute``, so symlink entries
    describe the link, not its target.

    Attributes:
        size (int): Size in bytes.
        atime (datetime): Last access time (UTC).
        mtime (datetime): Last modification time (UTC).
        ctime (datetime): Last status change time on POSIX, creation time on Windows (UTC).
        birthtime (Optional[datetime]): Creation time, where the platform reports it.
        uid (int): Owning user identifier.
        gid (int): Owning group identifier.
        mode (int): Permission and type bits.
        dev (int): Identifier of the device holding the entry.
        ino (int): Inode number.
        rdev (Optional[int]): Device identifier for special files.
        nlink (int): Number of hard links.
        blksize (Optional[int]): Preferred I/O block size.
        blocks (Optional[int]): Number of allocated 512-byte blocks.
        is_block_device (bool): Whether the entry is a block device.
        is_char_device (bool): Whether the entry is a character device.
        is_fifo (bool): Whether the entry is a FIFO.
        is_socket (bool): Whether the entry is a socket.
    """

    size: int = 0
    atime: Optional[datetime] = None
    mtime: Optional[datetime] = None
    ctime: Optional[datetime] = None
    birthtime: Optional[datetime] = None
    uid: int = 0
    gid: int = 0
    mode: int = 0
    dev: int = 0
    ino: int = 0
    rdev: Optional[int] = None
    nlink: int = 0
    blksize: Optional[int] = None
    blocks: Optional[int] = None
    is_block_device: bool = False
    is_char_device: bool = False
    is_fifo: bool = False
    is_socket: bool = False

    @classmethod
    def from_stat(cls, entry: WalkEntry, status: os.stat_result) -> "WalkEntryExtra":
        """Combine a basic entry with the ``lstat`` result of its path.

        Args:
            entry: The basic entry.
            status: Status of ``entry.path_absolute``, not following symlinks.

        Returns:
            A new extended entry.
        """
        basic = {field.name: getattr(entry, field.name) for field in fields(WalkEntry)}
        mode = status.st_mode
        return cls(
            **basic,
            size=status.st_size,
            atime=_timestamp(status.st_atime),
            mtime=_timestamp(status.st_mtime),
            ctime=_timestamp(status.st_ctime),
            birthtime=_timestamp(getattr(status, "st_birthtime", None)),
            uid=status.st_uid,
            gid=status.st_gid,
            mode=mode,
            dev=status.st_dev,
            ino=status.st_ino,
            rdev=getattr(status, "st_rdev", None),
            nlink=status.st_nlink,
            blksize=getattr(status, "st_blksize", None),
            blocks=getattr(status, "st_blocks", None),
            is_block_device=stat.S_ISBLK(mode),
            is_char_device=stat.S_ISCHR(mode),
            is_fifo=stat.S_ISFIFO(mode),
            is_socket=stat.S_ISSOCK(mode),
        )
