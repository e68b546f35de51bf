"""Inclusion decision for walk entries."""

from dirwalk.walker.config import WalkConfig
from dirwalk.walker.entry import WalkEntry


def _passes_type_toggle(entry: WalkEntry, config: WalkConfig) -> bool:
    return not (
        (entry.is_directory and not config.include_directories)
        or (entry.is_file and not config.include_files)
        or (entry.is_symlink_directory and not config.include_symlink_directories)
        or (entry.is_symlink_file and not config.include_symlink_files)
    )


def _passes_extensions(entry: WalkEntry, config: WalkConfig) -> bool:
    if config.extensions is None:
        return True
    if not (entry.is_file or entry.is_symlink_file):
        return False
    name = entry.name.lower()
    if not config.extensions:
        # An empty allow-list only accepts extensionless names
        return "." not in name
    return any(name.endswith(extension) for extension in config.extensions)


def is_entry_yieldable(entry: WalkEntry, config: WalkConfig) -> bool:
    """Decide whether an entry is yielded to the caller.

    Rules are checked in order and the first failing one rejects the entry: type
    toggles, extension allow-list, inclusion patterns, exclusion patterns, then the
    supplementary exclusion rules. This decision never affects recursion.

    Args:
        entry: The entry to check.
        config: The active walk configuration.

    Returns:
        True if the entry should be yielded.

    Example:
        >>> entry = WalkEntry("notes.TXT", "/r/notes.TXT", "/r/notes.TXT", "notes.TXT", "notes.TXT", is_file=True)
        >>> is_entry_yieldable(entry, WalkConfig(extensions=["txt"]))
        True
        >>> is_entry_yieldable(entry, WalkConfig(matches=[]))
        False
    """
    if not _passes_type_toggle(entry, config):
        return False
    if not _passes_extensions(entry, config):
        return False
    if config.matches is not None and not any(pattern.search(entry.path_relative) for pattern in config.matches):
        return False
    if config.skips is not None and any(pattern.search(entry.path_relative) for pattern in config.skips):
        return False
    if config.exclusion_rules is not None and config.exclusion_rules.exclude(entry):
        return False
    return True
