"""Content hashing of files, symlinks and whole directory trees.

A directory hash folds every entry below the directory into one digest: each entry
contributes a ``relative/path=digest`` line, the lines are sorted by path and joined
with newlines, and the resulting text is hashed. Directories contribute a fixed
sentinel digest, files the digest of their bytes and symlinks the digest of their
link target text, so the result depends only on the tree's content and layout, not
on where the tree lives.

Example:
    >>> import tempfile, pathlib
    >>> with tempfile.TemporaryDirectory() as a, tempfile.TemporaryDirectory() as b:
    ...     _ = (pathlib.Path(a) / "x.txt").write_text("same")
    ...     _ = (pathlib.Path(b) / "x.txt").write_text("same")
    ...     get_hash(a) == get_hash(b)
    True
"""

import asyncio
import hashlib
import logging
import os
from typing import Dict, Iterable, Tuple

from dirwalk.exceptions import DuplicateEntryError, UnknownEntityTypeError
from dirwalk.io.chunked_file_reader import ChunkedFileReader
from dirwalk.paths import to_path_string
from dirwalk.types import EntityType, PathType, get_entity_type
from dirwalk.walker.entry import WalkEntry
from dirwalk.walker.walker import walk, walk_async

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha512"


def _new_hasher(algorithm: str) -> "hashlib._Hash":
    try:
        return hashlib.new(algorithm)
    except ValueError as e:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}") from e


def _hexdigest(hasher: "hashlib._Hash") -> str:
    if hasher.digest_size == 0:
        # Variable length digests (shake_*) need an explicit length
        return hasher.hexdigest(64)  # type: ignore[call-arg]
    return hasher.hexdigest()


def directory_sentinel(algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the digest placeholder used for directory entries.

    Example:
        >>> directory_sentinel("md5")
        '--------------------------------'
    """
    return "-" * len(_hexdigest(_new_hasher(algorithm)))


def hash_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    hasher = _new_hasher(algorithm)
    hasher.update(data)
    return _hexdigest(hasher)


def hash_file(path: PathType, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hash the content of a file, reading it in chunks."""
    hasher = _new_hasher(algorithm)
    with open(to_path_string(path), "rb") as f:
        for chunk in ChunkedFileReader(f):
            hasher.update(chunk)
    return _hexdigest(hasher)


def hash_symlink(path: PathType, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hash the target text of a symlink, without resolving it."""
    return hash_bytes(os.fsencode(os.readlink(to_path_string(path))), algorithm)


def _entry_key(entry: WalkEntry) -> str:
    return entry.path_relative.replace(os.sep, "/")


def combine_digests(digests: Iterable[Tuple[str, str]], algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Fold ``(relative_path, digest)`` pairs into a single digest.

    Args:
        digests: Pairs of relative path and digest. Paths must be unique.
        algorithm: Name of a ``hashlib`` algorithm.

    Returns:
        The hex digest of the sorted ``path=digest`` lines joined with newlines.

    Raises:
        DuplicateEntryError: If a relative path appears twice.
    """
    collected: Dict[str, str] = {}
    for path, digest in digests:
        if path in collected:
            raise DuplicateEntryError(path, collected[path])
        collected[path] = digest
    raw = "\n".join(f"{path}={collected[path]}" for path in sorted(collected))
    return hash_bytes(raw.encode("utf-8"), algorithm)


def _entry_digest(entry: WalkEntry, algorithm: str, sentinel: str) -> str:
    if entry.is_directory:
        return sentinel
    if entry.is_file:
        return hash_file(entry.path_absolute, algorithm)
    if entry.is_symlink_directory or entry.is_symlink_file:
        return hash_symlink(entry.path_absolute, algorithm)
    raise UnknownEntityTypeError(entry.path_absolute)


def hash_directory(path: PathType, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hash a directory tree; see the module documentation for the layout."""
    sentinel = directory_sentinel(algorithm)
    return combine_digests(
        ((_entry_key(entry), _entry_digest(entry, algorithm, sentinel)) for entry in walk(path)),
        algorithm,
    )


async def hash_directory_async(path: PathType, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Asynchronous counterpart of ``hash_directory``."""
    sentinel = directory_sentinel(algorithm)
    digests = []
    async for entry in await walk_async(path):
        if entry.is_directory:
            digests.append((_entry_key(entry), sentinel))
        else:
            digests.append((_entry_key(entry), await asyncio.to_thread(_entry_digest, entry, algorithm, sentinel)))
    return combine_digests(digests, algorithm)


def get_hash(path: PathType, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Get the hash of a path.

    The path itself is not followed if it is a symlink: a symlink is hashed by its
    target text.

    Args:
        path: Directory, file or symlink to hash.
        algorithm: Name of a ``hashlib`` algorithm. Defaults to ``sha512``.

    Returns:
        The lower-case hex digest.

    Raises:
        ValueError: If the algorithm is not supported.
        UnknownEntityTypeError: If the path (or an entry below it) is neither a
            directory, a file nor a symlink.
        DuplicateEntryError: If the walk reported a relative path twice.
    """
    path_str = to_path_string(path)
    _new_hasher(algorithm)
    entity_type = get_entity_type(os.lstat(path_str))
    logger.debug("Hashing %s %s with %s", entity_type.value, path_str, algorithm)
    if entity_type is EntityType.DIRECTORY:
        return hash_directory(path_str, algorithm)
    if entity_type is EntityType.FILE:
        return hash_file(path_str, algorithm)
    if entity_type is EntityType.SYMLINK:
        return hash_symlink(path_str, algorithm)
    raise UnknownEntityTypeError(path_str)


async def get_hash_async(path: PathType, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Asynchronous counterpart of ``get_hash``; returns the same digest."""
    path_str = to_path_string(path)
    _new_hasher(algorithm)
    entity_type = get_entity_type(await asyncio.to_thread(os.lstat, path_str))
    logger.debug("Hashing %s %s with %s", entity_type.value, path_str, algorithm)
    if entity_type is EntityType.DIRECTORY:
        return await hash_directory_async(path_str, algorithm)
    if entity_type is EntityType.FILE:
        return await asyncio.to_thread(hash_file, path_str, algorithm)
    if entity_type is EntityType.SYMLINK:
        return await asyncio.to_thread(hash_symlink, path_str, algorithm)
    raise UnknownEntityTypeError(path_str)
