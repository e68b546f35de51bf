"""Conversions between file references and plain path strings.

All functions here are pure string transforms apart from reading the working
directory (which can be injected) and, for ``resolve_real``, resolving symlinks.
"""

import os
from typing import Optional
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from dirwalk.types import PathType

FILE_URI_SCHEME = "file"


def to_path_string(ref: PathType) -> str:
    """Normalize a file reference to a plain path string.

    Args:
        ref: A path string, a path-like object, or a ``file:`` URI string.

    Returns:
        The plain path string.

    Example:
        >>> to_path_string("file:///tmp/some%20dir")
        '/tmp/some dir'
        >>> to_path_string("relative/path")
        'relative/path'
    """
    path = os.fspath(ref)
    if isinstance(path, str) and path.startswith(f"{FILE_URI_SCHEME}:"):
        parsed = urlparse(path)
        if parsed.netloc and parsed.netloc != "localhost":
            # UNC style reference: file://server/share/...
            return url2pathname(f"//{parsed.netloc}{parsed.path}")
        if os.name == "nt":
            return url2pathname(parsed.path)
        return unquote(parsed.path)
    return path


def resolve_absolute(ref: PathType, cwd: Optional[PathType] = None) -> str:
    """Return an absolute path string for a file reference.

    Absolute references are returned unchanged; relative ones are joined with the
    working directory. No lexical normalization is performed.

    Args:
        ref: The file reference to resolve.
        cwd: Working directory to resolve against. Defaults to ``os.getcwd()``.

    Returns:
        The absolute path string.

    Example:
        >>> resolve_absolute("a/b", cwd="/srv")
        '/srv/a/b'
        >>> resolve_absolute("/etc/hosts", cwd="/srv")
        '/etc/hosts'
    """
    path = to_path_string(ref)
    if os.path.isabs(path):
        return path
    base = to_path_string(cwd) if cwd is not None else os.getcwd()
    return os.path.join(base, path)


def resolve_real(ref: PathType, cwd: Optional[PathType] = None) -> str:
    """Return the canonical path of a file reference, with every symlink resolved."""
    return os.path.realpath(resolve_absolute(ref, cwd))


def is_same_path(a: PathType, b: PathType, cwd: Optional[PathType] = None) -> bool:
    """Check whether two references point at the same location, lexically.

    Symlinks are not resolved: two different links to the same target are not the
    same path. Compare ``resolve_real`` results when true identity is needed.

    Args:
        a: First file reference.
        b: Second file reference.
        cwd: Working directory used for relative references.

    Returns:
        True if the normalized absolute forms are equal.

    Example:
        >>> is_same_path("/srv/a/../b", "b", cwd="/srv")
        True
        >>> is_same_path("/srv/a", "/srv/b")
        False
    """
    return os.path.normpath(resolve_absolute(a, cwd)) == os.path.normpath(resolve_absolute(b, cwd))
