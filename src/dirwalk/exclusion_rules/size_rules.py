"""Exclusion of file entries larger than a size limit."""

import logging
import os
from typing import Union

from humanfriendly import InvalidSize, parse_size

from dirwalk.walker.entry import WalkEntry

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)


def parse_file_size(size_str: str) -> int:
    """Convert a size such as ``'2.5MB'``, ``'1KiB'`` or ``'1024'`` to bytes.

    Decimal units (KB, MB, GB) are powers of 1000 and binary units (KiB, MiB, GiB)
    powers of 1024, following ``humanfriendly.parse_size``.

    Raises:
        ValueError: If the string is not a size.

    Example:
        >>> parse_file_size("2KB")
        2000
        >>> parse_file_size("1KiB")
        1024
    """
    try:
        return int(parse_size(size_str))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size_str}': {e}") from e


class SizeExclusionRules(BaseExclusionRules):
    """Exclude file and symlink file entries whose size is above a limit.

    A symlink file is measured by its target, and a dangling symlink or an entry
    that cannot be statted is kept. Directory-like entries are always kept, so the
    walk still reports and descends into them.

    Attributes:
        max_size_bytes (int): Largest size kept, in bytes. ``0`` disables the rule.

    Example:
        >>> rules = SizeExclusionRules("1MB")
        >>> rules.max_size_bytes
        1000000
        >>> SizeExclusionRules(0).has_rules()
        False
    """

    def __init__(self, max_size: Union[str, int]):
        """Set the limit from a size string or a byte count.

        Raises:
            ValueError: If the size string is invalid, the count is negative, or the
                value is neither a string nor an int.
        """
        # bool is an int subclass and is never a meaningful size
        if isinstance(max_size, str):
            self.max_size_bytes = parse_file_size(max_size)
        elif isinstance(max_size, int) and not isinstance(max_size, bool):
            if max_size < 0:
                raise ValueError("Size cannot be negative")
            self.max_size_bytes = max_size
        else:
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")

    def exclude(self, entry: WalkEntry) -> bool:
        if not self.has_rules() or not (entry.is_file or entry.is_symlink_file):
            return False
        try:
            size = os.stat(entry.path_absolute).st_size
        except OSError as e:
            logger.debug("Unable to size %s, keeping it: %s", entry.path_absolute, e)
            return False
        return size > self.max_size_bytes

    def has_rules(self) -> bool:
        return self.max_size_bytes > 0
