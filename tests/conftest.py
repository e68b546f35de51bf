"""Test configuration and shared fixtures for dirwalk."""

import errno
import os
import sys

import pytest

from dirwalk.walker import walker as walker_module


def _can_symlink(tmp_path) -> bool:
    try:
        os.symlink(tmp_path, tmp_path / ".symlink_check")
    except (OSError, NotImplementedError):
        # On some platforms (like Windows) creating symlinks might require special permissions
        return False
    os.unlink(tmp_path / ".symlink_check")
    return True


@pytest.fixture
def sample_tree(tmp_path):
    """Create ``a.txt`` (10 bytes), ``b/`` and ``b/c.txt`` (5 bytes) below a root directory."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_bytes(b"0123456789")
    (root / "b").mkdir()
    (root / "b" / "c.txt").write_bytes(b"hello")
    return root


@pytest.fixture
def symlink_tree(sample_tree):
    """Extend the sample tree with symlinks, skipping the test if symlinks are unsupported.

    Layout added:
        link_dir -> b
        link_file -> a.txt
        dangling -> missing
    """
    if not _can_symlink(sample_tree.parent):
        pytest.skip("Symlinks are not supported on this platform")
    os.symlink(sample_tree / "b", sample_tree / "link_dir")
    os.symlink(sample_tree / "a.txt", sample_tree / "link_file")
    os.symlink(sample_tree / "missing", sample_tree / "dangling")
    return sample_tree


@pytest.fixture
def locked_tree(sample_tree):
    """Add an unreadable ``locked/`` directory, restoring its permissions afterwards."""
    if sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0):
        pytest.skip("Directory permissions are not enforced for this user")
    locked = sample_tree / "locked"
    locked.mkdir()
    (locked / "secret.txt").write_text("secret")
    locked.chmod(0o000)
    yield sample_tree
    locked.chmod(0o755)


@pytest.fixture
def deny_listing(monkeypatch):
    """Make listing chosen directories raise PermissionError in both walk modes, whatever the user.

    Returns a function taking the directory paths to deny.
    """
    denied = set()
    original_init = walker_module._ScandirListing.__init__
    original_read = walker_module._read_listing

    def check(path):
        if os.path.normpath(str(path)) in denied:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))

    def guarded_init(self, path):
        check(path)
        original_init(self, path)

    def guarded_read(path):
        check(path)
        return original_read(path)

    monkeypatch.setattr(walker_module._ScandirListing, "__init__", guarded_init)
    monkeypatch.setattr(walker_module, "_read_listing", guarded_read)

    def deny(*paths):
        denied.update(os.path.normpath(str(path)) for path in paths)

    return deny
