"""Unit tests for WalkEntry and WalkEntryExtra."""

import os
from dataclasses import FrozenInstanceError

import pytest

from dirwalk.walker.entry import WalkEntry, WalkEntryExtra


@pytest.fixture
def file_entry(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"x" * 42)
    return WalkEntry("data.bin", str(path), str(path), "data.bin", "data.bin", is_file=True)


def test_entry_defaults():
    entry = WalkEntry("b", "/r/b", "/r/b", "b", "b", is_directory=True)
    assert entry.is_directory
    assert not (entry.is_file or entry.is_symlink_directory or entry.is_symlink_file)
    assert not entry.via_symlink_directory
    assert not entry.is_symlink


def test_entry_is_symlink():
    assert WalkEntry("l", "/r/l", "/x", "l", "../x", is_symlink_file=True).is_symlink
    assert WalkEntry("l", "/r/l", "/x", "l", "../x", is_symlink_directory=True).is_symlink


def test_entry_immutable(file_entry):
    with pytest.raises(FrozenInstanceError):
        file_entry.name = "other"


def test_entry_hashable(file_entry):
    same = WalkEntry(**{name: getattr(file_entry, name) for name in file_entry.__dataclass_fields__})
    assert {file_entry, same} == {file_entry}


def test_entry_extra_from_stat(file_entry):
    status = os.lstat(file_entry.path_absolute)
    extra = WalkEntryExtra.from_stat(file_entry, status)

    assert isinstance(extra, WalkEntry)
    assert extra.name == "data.bin"
    assert extra.is_file
    assert extra.size == 42
    assert extra.mode == status.st_mode
    assert extra.ino == status.st_ino
    assert extra.mtime.timestamp() == pytest.approx(status.st_mtime)
    assert not (extra.is_block_device or extra.is_char_device or extra.is_fifo or extra.is_socket)
