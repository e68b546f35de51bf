"""Comparison of files, symlinks and directory trees."""

import asyncio
import logging
import os
from dataclasses import dataclass
from itertools import zip_longest
from typing import Dict, List, Tuple

from dirwalk.io.chunked_file_reader import ChunkedFileReader
from dirwalk.paths import to_path_string
from dirwalk.types import EntityType, PathType, get_entity_type
from dirwalk.walker.config import WalkConfig
from dirwalk.walker.entry import WalkEntry
from dirwalk.walker.walker import walk, walk_async

logger = logging.getLogger(__name__)

_EXTRA_CONFIG = WalkConfig(extra_info=True)


@dataclass(frozen=True)
class DirectoryComparison:
    """Differences between an old and a new directory tree.

    Every list holds ``path_relative`` values, sorted.

    Attributes:
        created: Paths only present in the new tree.
        modified: Paths present in both trees whose type or content differs.
        removed: Paths only present in the old tree.
    """

    created: List[str]
    modified: List[str]
    removed: List[str]

    @property
    def has_changes(self) -> bool:
        return bool(self.created or self.modified or self.removed)


def compare_files_are_different(path_a: PathType, path_b: PathType) -> bool:
    """Return whether two files differ in content.

    The files are read side by side in equal-size chunks, stopping at the first
    difference.

    Example:
        >>> import pathlib, tempfile
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     a, b = pathlib.Path(tmp) / "a", pathlib.Path(tmp) / "b"
        ...     _ = a.write_bytes(b"same")
        ...     _ = b.write_bytes(b"same")
        ...     compare_files_are_different(a, b)
        False
    """
    with open(to_path_string(path_a), "rb") as file_a, open(to_path_string(path_b), "rb") as file_b:
        chunks = zip_longest(
            ChunkedFileReader(file_a, reduce_chunks=True),
            ChunkedFileReader(file_b, reduce_chunks=True),
        )
        return any(chunk_a != chunk_b for chunk_a, chunk_b in chunks)


def compare_symlinks_are_different(path_a: PathType, path_b: PathType) -> bool:
    """Return whether two symlinks have different target text. Targets are not resolved."""
    return os.readlink(to_path_string(path_a)) != os.readlink(to_path_string(path_b))


async def compare_files_are_different_async(path_a: PathType, path_b: PathType) -> bool:
    """Asynchronous counterpart of ``compare_files_are_different``."""
    return await asyncio.to_thread(compare_files_are_different, path_a, path_b)


async def compare_symlinks_are_different_async(path_a: PathType, path_b: PathType) -> bool:
    """Asynchronous counterpart of ``compare_symlinks_are_different``."""
    return await asyncio.to_thread(compare_symlinks_are_different, path_a, path_b)


def _check_directory(path: str, parameter: str, status: os.stat_result) -> None:
    if get_entity_type(status) is not EntityType.DIRECTORY:
        raise NotADirectoryError(f"Path {path} (parameter {parameter}) is not a directory")


def _index(entries: List[WalkEntry]) -> Dict[str, WalkEntry]:
    return {entry.path_relative: entry for entry in entries}


def _classify(
    old_entries: List[WalkEntry], new_entries: List[WalkEntry]
) -> Tuple[List[str], List[Tuple[WalkEntry, WalkEntry]], List[str], List[str]]:
    """Split two walks into created paths, pairs to inspect, type changes and removed paths."""
    old_index = _index(old_entries)
    new_index = _index(new_entries)
    created = sorted(path for path in new_index if path not in old_index)
    removed = sorted(path for path in old_index if path not in new_index)
    pending: List[Tuple[WalkEntry, WalkEntry]] = []
    retyped: List[str] = []
    for path, old_entry in old_index.items():
        new_entry = new_index.get(path)
        if new_entry is None:
            continue
        if old_entry.is_directory and new_entry.is_directory:
            continue
        if (
            (old_entry.is_file and new_entry.is_file)
            or (old_entry.is_symlink_directory and new_entry.is_symlink_directory)
            or (old_entry.is_symlink_file and new_entry.is_symlink_file)
        ):
            pending.append((old_entry, new_entry))
        else:
            retyped.append(path)
    return created, pending, retyped, removed


def _is_modified(old_entry: WalkEntry, new_entry: WalkEntry) -> bool:
    if old_entry.is_file:
        return compare_files_are_different(old_entry.path_absolute, new_entry.path_absolute)
    return compare_symlinks_are_different(old_entry.path_absolute, new_entry.path_absolute)


def compare_directories(old_path: PathType, new_path: PathType) -> DirectoryComparison:
    """Compare two directory trees.

    Both trees are walked with extra info and matched by ``path_relative``.
    Directories present in both trees are never reported as modified; files are
    modified when their bytes differ, symlinks when their target text differs, and
    any path whose entry type changed is modified.

    Args:
        old_path: Root of the old tree.
        new_path: Root of the new tree.

    Returns:
        A ``DirectoryComparison`` with sorted path lists.

    Raises:
        NotADirectoryError: If either root is not a real directory.
        FileNotFoundError: If either root does not exist.
    """
    old_str = to_path_string(old_path)
    new_str = to_path_string(new_path)
    _check_directory(old_str, "old_path", os.lstat(old_str))
    _check_directory(new_str, "new_path", os.lstat(new_str))
    logger.debug("Comparing directories %s and %s", old_str, new_str)

    created, pending, retyped, removed = _classify(
        list(walk(old_str, _EXTRA_CONFIG)), list(walk(new_str, _EXTRA_CONFIG))
    )
    modified = retyped + [new_entry.path_relative for old_entry, new_entry in pending if _is_modified(old_entry, new_entry)]
    return DirectoryComparison(created=created, modified=sorted(modified), removed=removed)


async def compare_directories_async(old_path: PathType, new_path: PathType) -> DirectoryComparison:
    """Asynchronous counterpart of ``compare_directories``."""
    old_str = to_path_string(old_path)
    new_str = to_path_string(new_path)
    old_status, new_status = await asyncio.gather(
        asyncio.to_thread(os.lstat, old_str), asyncio.to_thread(os.lstat, new_str)
    )
    _check_directory(old_str, "old_path", old_status)
    _check_directory(new_str, "new_path", new_status)
    logger.debug("Comparing directories %s and %s", old_str, new_str)

    old_entries = [entry async for entry in await walk_async(old_str, _EXTRA_CONFIG)]
    new_entries = [entry async for entry in await walk_async(new_str, _EXTRA_CONFIG)]
    created, pending, retyped, removed = _classify(old_entries, new_entries)
    modified = list(retyped)
    for old_entry, new_entry in pending:
        if await asyncio.to_thread(_is_modified, old_entry, new_entry):
            modified.append(new_entry.path_relative)
    return DirectoryComparison(created=created, modified=sorted(modified), removed=removed)
