"""Filesystem utilities built around a single directory tree walker.

This package provides a lazy tree walker (blocking and asyncio flavours) and the
helpers built on top of it: content hashing, size accumulation, directory
comparison, existence checks and ensure-creation of files and directories.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for programmatic use
try:
    __version__ = version("dirwalk")
except PackageNotFoundError:
    __version__ = "unknown"
