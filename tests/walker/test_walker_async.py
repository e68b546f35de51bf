"""Unit tests for the asyncio directory walker."""

import os

import pytest

from dirwalk.exceptions import SymlinkTraversalError
from dirwalk.walker.config import WalkConfig
from dirwalk.walker.entry import WalkEntryExtra
from dirwalk.walker.permission_action import PermissionPolicy
from dirwalk.walker.walker import walk, walk_async


async def collect(root, config=None):
    return [entry async for entry in await walk_async(root, config)]


def relative_paths(entries):
    return sorted(entry.path_relative.replace(os.sep, "/") for entry in entries)


@pytest.mark.asyncio
async def test_walk_async_defaults(sample_tree):
    entries = await collect(sample_tree)
    assert relative_paths(entries) == ["a.txt", "b", "b/c.txt"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "config",
    [
        WalkConfig(),
        WalkConfig(depth=0),
        WalkConfig(include_directories=False),
        WalkConfig(extensions=["txt"]),
        WalkConfig(matches=[r"^b"]),
        WalkConfig(skips=[r"c\.txt$"]),
    ],
)
async def test_walk_async_matches_walk(sample_tree, config):
    (sample_tree / "b" / "d").mkdir()
    (sample_tree / "b" / "d" / "e.md").touch()
    assert set(await collect(sample_tree, config)) == set(walk(sample_tree, config))


@pytest.mark.asyncio
async def test_walk_async_matches_walk_with_symlinks(symlink_tree):
    config = WalkConfig(walk_symlink_directories=True)
    assert set(await collect(symlink_tree, config)) == set(walk(symlink_tree, config))


@pytest.mark.asyncio
async def test_walk_async_extra_info(sample_tree):
    entries = await collect(sample_tree, WalkConfig(extra_info=True))
    assert all(isinstance(entry, WalkEntryExtra) for entry in entries)
    assert sum(entry.size for entry in entries if entry.is_file) == 15


@pytest.mark.asyncio
async def test_walk_async_root_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        await collect(tmp_path / "missing")


@pytest.mark.asyncio
async def test_walk_async_root_is_file(sample_tree):
    with pytest.raises(NotADirectoryError):
        await collect(sample_tree / "a.txt")


@pytest.mark.asyncio
async def test_walk_async_symlink_root_rejected(symlink_tree):
    with pytest.raises(SymlinkTraversalError):
        await collect(symlink_tree / "link_dir")


@pytest.mark.asyncio
async def test_walk_async_early_exit(sample_tree):
    entries = await walk_async(sample_tree)
    async for entry in entries:
        assert entry.name in ("a.txt", "b", "c.txt")
        break
    await entries.aclose()


@pytest.mark.asyncio
async def test_walk_async_permission_callback(locked_tree):
    denied = []
    config = WalkConfig(permission_policy=PermissionPolicy.callback(denied.append))

    entries = await collect(locked_tree, config)

    assert relative_paths(entries) == ["a.txt", "b", "b/c.txt", "locked"]
    assert [entry.name for entry in denied] == ["locked"]


@pytest.mark.asyncio
async def test_walk_async_permission_error_raises(locked_tree):
    with pytest.raises(PermissionError):
        await collect(locked_tree)


@pytest.mark.asyncio
async def test_walk_async_root_error_before_iteration(tmp_path):
    with pytest.raises(FileNotFoundError):
        await walk_async(tmp_path / "missing")


@pytest.mark.asyncio
async def test_walk_async_injected_denial_callback(sample_tree, deny_listing):
    (sample_tree / "b" / "inner").mkdir()
    (sample_tree / "e").mkdir()
    (sample_tree / "e" / "f.txt").touch()
    deny_listing(sample_tree / "b" / "inner", sample_tree / "e")
    denied = []
    config = WalkConfig(permission_policy=PermissionPolicy.callback(denied.append))

    entries = await collect(sample_tree, config)

    assert relative_paths(entries) == ["a.txt", "b", "b/c.txt", "b/inner", "e"]
    assert sorted(entry.name for entry in denied) == ["e", "inner"]


@pytest.mark.asyncio
async def test_walk_async_injected_denial_raises(sample_tree, deny_listing):
    deny_listing(sample_tree / "b")
    entries = await walk_async(sample_tree)
    seen = []

    with pytest.raises(PermissionError):
        async for entry in entries:
            seen.append(entry.path_relative)

    assert os.path.join("b", "c.txt") not in seen
    assert [entry async for entry in entries] == []


@pytest.mark.asyncio
async def test_walk_async_denied_root_raises_under_callback(sample_tree, deny_listing):
    deny_listing(sample_tree)
    config = WalkConfig(permission_policy=PermissionPolicy.callback(lambda entry: None))
    with pytest.raises(PermissionError):
        await collect(sample_tree, config)
