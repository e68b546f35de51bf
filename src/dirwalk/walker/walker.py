"""Directory tree walker with blocking and asyncio execution modes.

The traversal itself is written once, as a generator that never touches the
filesystem: it yields ``_Request`` values describing the filesystem call it needs,
receives the result (or the raised exception) back, and yields the ``WalkEntry``
values it produces. Two small drivers execute the requests, one calling the
filesystem directly and one awaiting each call through ``asyncio.to_thread``, so
both modes share entry construction, filtering, descent and permission handling.

Pending directories are kept on an explicit stack of frames instead of the call
stack, so deep trees do not grow the interpreter stack. Each frame owns one
directory listing, and every listing still open is closed when the walk ends, fails
or is abandoned by the caller.

Example:
    >>> import tempfile, pathlib
    >>> with tempfile.TemporaryDirectory() as tmp:
    ...     (pathlib.Path(tmp) / "b").mkdir()
    ...     (pathlib.Path(tmp) / "b" / "c.txt").write_text("hello")
    ...     sorted(entry.path_relative for entry in walk(tmp))
    5
    ['b', 'b/c.txt']
"""

import asyncio
import errno
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Generator, Iterator, List, NamedTuple, Optional, Tuple, Union

from dirwalk.exceptions import SymlinkTraversalError, UnknownEntityTypeError
from dirwalk.paths import resolve_absolute
from dirwalk.types import EntityType, PathType, get_entity_type
from dirwalk.walker.config import WalkConfig
from dirwalk.walker.entry import WalkEntry, WalkEntryExtra
from dirwalk.walker.entry_filter import is_entry_yieldable

logger = logging.getLogger(__name__)

Child = Tuple[str, EntityType]


class _Operation(Enum):
    LIST = "list"
    NEXT = "next"
    REALPATH = "realpath"
    STAT = "stat"
    LSTAT = "lstat"


class _Request(NamedTuple):
    operation: _Operation
    target: Any


Program = Generator[Union[_Request, WalkEntry], Any, Any]


class _ScandirListing:
    """Streaming listing holding one open directory handle."""

    def __init__(self, path: str) -> None:
        self._iterator = os.scandir(path)

    def next_child(self) -> Optional[Child]:
        dir_entry = next(self._iterator, None)
        if dir_entry is None:
            return None
        return dir_entry.name, get_entity_type(dir_entry)

    def close(self) -> None:
        self._iterator.close()


class _ListingSnapshot:
    """Listing read in full up front; holds no handle."""

    def __init__(self, children: List[Child]) -> None:
        self._children = iter(children)

    def next_child(self) -> Optional[Child]:
        return next(self._children, None)

    def close(self) -> None:
        pass


Listing = Union[_ScandirListing, _ListingSnapshot]


def _read_listing(path: str) -> _ListingSnapshot:
    with os.scandir(path) as iterator:
        return _ListingSnapshot([(dir_entry.name, get_entity_type(dir_entry)) for dir_entry in iterator])


@dataclass
class _Frame:
    listing: Listing
    segments: Tuple[str, ...]
    depth: int
    via_symlink_directory: bool
    entry: Optional[WalkEntry]


def _relative_to_root(path: str, root: str) -> str:
    try:
        return os.path.relpath(path, root)
    except ValueError:
        # Different drive, there is no relative form
        return path


def _is_dangling(error: OSError) -> bool:
    return isinstance(error, (FileNotFoundError, NotADirectoryError)) or error.errno == errno.ELOOP


def _check_root(root: str, config: WalkConfig) -> Program:
    """Validate the walk root; returns whether it was reached through a symlink."""
    status = yield _Request(_Operation.LSTAT, root)
    root_type = get_entity_type(status)
    if root_type is EntityType.DIRECTORY:
        return False
    if root_type is EntityType.SYMLINK:
        target_status = yield _Request(_Operation.STAT, root)
        if get_entity_type(target_status) is EntityType.DIRECTORY:
            if not config.walk_symlink_directories:
                raise SymlinkTraversalError(root)
            return True
    raise NotADirectoryError(f"Root path is not a directory: {root}")


def _resolve_symlink_target(path_absolute: str, path_absolute_real: str) -> Program:
    try:
        status = yield _Request(_Operation.STAT, path_absolute_real)
    except OSError as error:
        if isinstance(error, PermissionError) or not _is_dangling(error):
            raise
        # The link itself must still be readable to be reported
        yield _Request(_Operation.LSTAT, path_absolute)
        logger.debug("Dangling symlink treated as symlink file: %s", path_absolute)
        return EntityType.FILE
    return get_entity_type(status)


def _resolve_entry(root: str, frame: _Frame, name: str, entity_type: EntityType) -> Program:
    path_relative = os.path.join(*frame.segments, name)
    path_absolute = os.path.join(root, path_relative)
    path_absolute_real = yield _Request(_Operation.REALPATH, path_absolute)

    is_symlink_directory = False
    is_symlink_file = False
    if entity_type is EntityType.SYMLINK:
        target_type = yield from _resolve_symlink_target(path_absolute, path_absolute_real)
        is_symlink_directory = target_type is EntityType.DIRECTORY
        is_symlink_file = target_type is EntityType.FILE
        if not (is_symlink_directory or is_symlink_file):
            raise UnknownEntityTypeError(path_absolute)
    elif entity_type is EntityType.UNKNOWN:
        raise UnknownEntityTypeError(path_absolute)

    return WalkEntry(
        name=name,
        path_absolute=path_absolute,
        path_absolute_real=path_absolute_real,
        path_relative=path_relative,
        path_relative_real=_relative_to_root(path_absolute_real, root),
        is_directory=entity_type is EntityType.DIRECTORY,
        is_file=entity_type is EntityType.FILE,
        is_symlink_directory=is_symlink_directory,
        is_symlink_file=is_symlink_file,
        via_symlink_directory=frame.via_symlink_directory,
    )


def _should_descend(entry: WalkEntry, config: WalkConfig, depth_current: int) -> bool:
    walkable = entry.is_directory or (entry.is_symlink_directory and config.walk_symlink_directories)
    return walkable and config.can_descend(depth_current)


def _report_denied(config: WalkConfig, entry: WalkEntry, error: PermissionError) -> None:
    logger.debug("Permission denied, skipping %s: %s", entry.path_absolute, error)
    handler = config.permission_policy.handler
    if handler is not None:
        handler(entry)


def _traverse(root: str, config: WalkConfig, via_symlink_root: bool) -> Program:
    """Walk the tree below an already validated root."""
    stack: List[_Frame] = []
    try:
        listing = yield _Request(_Operation.LIST, root)
        stack.append(_Frame(listing, (), 0, via_symlink_root, None))

        while stack:
            frame = stack[-1]
            try:
                child = yield _Request(_Operation.NEXT, frame.listing)
                if child is None:
                    stack.pop().listing.close()
                    continue

                entry = yield from _resolve_entry(root, frame, *child)

                if is_entry_yieldable(entry, config):
                    if config.extra_info:
                        status = yield _Request(_Operation.LSTAT, entry.path_absolute)
                        yield WalkEntryExtra.from_stat(entry, status)
                    else:
                        yield entry

                if not _should_descend(entry, config, frame.depth):
                    continue

                try:
                    child_listing = yield _Request(_Operation.LIST, entry.path_absolute)
                except PermissionError as error:
                    if not config.permission_policy.absorbs(error):
                        raise
                    _report_denied(config, entry, error)
                    continue

                stack.append(
                    _Frame(
                        listing=child_listing,
                        segments=frame.segments + (entry.name,),
                        depth=frame.depth + 1,
                        via_symlink_directory=frame.via_symlink_directory or entry.is_symlink_directory,
                        entry=entry,
                    )
                )
            except PermissionError as error:
                # Failures inside a sub-directory are attributed to that sub-directory
                if frame.entry is None or not config.permission_policy.absorbs(error):
                    raise
                stack.pop().listing.close()
                _report_denied(config, frame.entry, error)
    finally:
        for frame in stack:
            frame.listing.close()


_BLOCKING_OPERATIONS = {
    _Operation.REALPATH: os.path.realpath,
    _Operation.STAT: os.stat,
    _Operation.LSTAT: os.lstat,
}


def _execute_sync(request: _Request) -> Any:
    if request.operation is _Operation.LIST:
        return _ScandirListing(request.target)
    if request.operation is _Operation.NEXT:
        return request.target.next_child()
    return _BLOCKING_OPERATIONS[request.operation](request.target)


async def _execute_async(request: _Request) -> Any:
    if request.operation is _Operation.LIST:
        return await asyncio.to_thread(_read_listing, request.target)
    if request.operation is _Operation.NEXT:
        # Snapshots are already in memory
        return request.target.next_child()
    return await asyncio.to_thread(_BLOCKING_OPERATIONS[request.operation], request.target)


def _complete_sync(program: Program) -> Any:
    """Run a program that produces no entries and return its result."""
    value: Any = None
    error: Optional[Exception] = None
    while True:
        try:
            request = program.throw(error) if error is not None else program.send(value)
        except StopIteration as stop:
            return stop.value
        value, error = None, None
        try:
            value = _execute_sync(request)
        except Exception as e:
            error = e


async def _complete_async(program: Program) -> Any:
    """Asynchronous counterpart of ``_complete_sync``."""
    value: Any = None
    error: Optional[Exception] = None
    while True:
        try:
            request = program.throw(error) if error is not None else program.send(value)
        except StopIteration as stop:
            return stop.value
        value, error = None, None
        try:
            value = await _execute_async(request)
        except Exception as e:
            error = e


def _drive_sync(program: Program) -> Iterator[WalkEntry]:
    value: Any = None
    error: Optional[Exception] = None
    try:
        while True:
            try:
                item = program.throw(error) if error is not None else program.send(value)
            except StopIteration:
                return
            value, error = None, None
            if isinstance(item, WalkEntry):
                yield item
                continue
            try:
                value = _execute_sync(item)
            except Exception as e:
                error = e
    finally:
        program.close()


async def _drive_async(program: Program) -> AsyncIterator[WalkEntry]:
    value: Any = None
    error: Optional[Exception] = None
    try:
        while True:
            try:
                item = program.throw(error) if error is not None else program.send(value)
            except StopIteration:
                return
            value, error = None, None
            if isinstance(item, WalkEntry):
                yield item
                continue
            try:
                value = await _execute_async(item)
            except Exception as e:
                error = e
    finally:
        program.close()


def walk(root: PathType, config: Optional[WalkConfig] = None) -> Iterator[WalkEntry]:
    """Walk a directory tree and lazily yield an entry for each object found.

    The root is validated before this function returns; entries are produced as the
    returned iterator is consumed. The order within a directory is the order of the
    underlying directory listing and is not guaranteed. Abandoning the iterator closes
    every directory handle it holds.

    Args:
        root: Root directory, as a path, path-like object or ``file:`` URI.
        config: Walk options. Defaults to ``WalkConfig()``.

    Returns:
        An iterator of ``WalkEntry`` values, or ``WalkEntryExtra`` values when
        ``config.extra_info`` is set.

    Raises:
        FileNotFoundError: If the root does not exist.
        NotADirectoryError: If the root is not a directory or a symlink to one.
        SymlinkTraversalError: If the root is a symlink directory and
            ``config.walk_symlink_directories`` is False.
        PermissionError: While iterating, if a directory cannot be read and the
            permission policy does not absorb it.
        UnknownEntityTypeError: While iterating, if an entry cannot be classified.
    """
    config = config or WalkConfig()
    root_path = os.path.normpath(resolve_absolute(root))
    via_symlink_root = _complete_sync(_check_root(root_path, config))
    logger.debug("Walking %s (depth=%s)", root_path, config.depth)
    return _drive_sync(_traverse(root_path, config, via_symlink_root))


async def walk_async(root: PathType, config: Optional[WalkConfig] = None) -> AsyncIterator[WalkEntry]:
    """Validate the root, then return an async iterator walking the tree.

    Awaiting this coroutine performs the same root validation as ``walk`` and fails
    before anything is iterated. The returned iterator yields the same entries as
    ``walk`` for the same tree and configuration. Each filesystem call runs through
    ``asyncio.to_thread``; a directory listing is read and its handle closed within a
    single call.

    Args:
        root: Root directory, as a path, path-like object or ``file:`` URI.
        config: Walk options. Defaults to ``WalkConfig()``.

    Returns:
        An async iterator of ``WalkEntry`` values, or ``WalkEntryExtra`` values when
        ``config.extra_info`` is set.

    Raises:
        FileNotFoundError: If the root does not exist.
        NotADirectoryError: If the root is not a directory or a symlink to one.
        SymlinkTraversalError: If the root is a symlink directory and
            ``config.walk_symlink_directories`` is False.

    Example:
        >>> import asyncio, tempfile
        >>> async def names(path):
        ...     return [entry.name async for entry in await walk_async(path)]
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     asyncio.run(names(tmp))
        []
    """
    config = config or WalkConfig()
    root_path = os.path.normpath(resolve_absolute(root))
    via_symlink_root = await _complete_async(_check_root(root_path, config))
    logger.debug("Walking %s asynchronously (depth=%s)", root_path, config.depth)
    return _drive_async(_traverse(root_path, config, via_symlink_root))
