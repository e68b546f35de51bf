"""Immutable configuration of a single walk."""

import re
from dataclasses import dataclass, field
from re import Pattern
from typing import Optional, Sequence, Tuple, Union

from dirwalk.exceptions import WalkConfigError
from dirwalk.exclusion_rules.base_rules import BaseExclusionRules
from dirwalk.walker.permission_action import PermissionPolicy

PatternType = Union[str, Pattern[str]]


def _normalize_extensions(extensions: Optional[Sequence[str]]) -> Optional[Tuple[str, ...]]:
    if extensions is None:
        return None
    if isinstance(extensions, str):
        raise WalkConfigError("extensions must be a sequence of strings, not a single string")
    return tuple((ext if ext.startswith(".") else f".{ext}").lower() for ext in extensions)


def _compile_patterns(name: str, patterns: Optional[Sequence[PatternType]]) -> Optional[Tuple[Pattern[str], ...]]:
    if patterns is None:
        return None
    if isinstance(patterns, (str, Pattern)):
        raise WalkConfigError(f"{name} must be a sequence of patterns, not a single pattern")
    try:
        return tuple(re.compile(pattern) for pattern in patterns)
    except re.error as e:
        raise WalkConfigError(f"Invalid regular expression in {name}: {e}") from e


@dataclass(frozen=True)
class WalkConfig:
    """Options controlling a walk.

    The configuration is validated and normalized on construction and is read-only
    afterwards, so an invalid configuration is reported before any filesystem access.

    Attributes:
        depth: Maximum depth to descend to. ``None`` means unbounded; ``0`` yields only
            the immediate children of the root.
        extra_info: Whether to yield ``WalkEntryExtra`` values (one extra ``lstat``
            per yielded entry).
        include_directories: Whether to yield real directory entries.
        include_files: Whether to yield regular file entries.
        include_symlink_directories: Whether to yield symlink directory entries.
        include_symlink_files: Whether to yield symlink file entries.
        extensions: Allow-list of file extensions, with or without the leading dot.
            Stored lower-cased with a leading dot. Only file and symlink file entries
            can pass it; an empty list only accepts names without a dot.
        matches: Inclusion regular expressions searched in ``path_relative``. An
            entry must match at least one; an empty sequence rejects everything.
        skips: Exclusion regular expressions searched in ``path_relative``.
        exclusion_rules: Additional exclusion rules applied after ``skips``.
        permission_policy: What to do when a sub-directory cannot be read.
        walk_symlink_directories: Whether symlinked directories are descended into.
            There is no cycle detection; a self-referencing link is followed until
            ``depth`` is reached.

    Example:
        >>> config = WalkConfig(depth=1, extensions=["TXT", ".md"])
        >>> config.extensions
        ('.txt', '.md')
        >>> WalkConfig(depth=-1)
        Traceback (most recent call last):
            ...
        dirwalk.exceptions.WalkConfigError: depth must be a non-negative integer or None, got -1
    """

    depth: Optional[int] = None
    extra_info: bool = False
    include_directories: bool = True
    include_files: bool = True
    include_symlink_directories: bool = True
    include_symlink_files: bool = True
    extensions: Optional[Sequence[str]] = None
    matches: Optional[Sequence[PatternType]] = None
    skips: Optional[Sequence[PatternType]] = None
    exclusion_rules: Optional[BaseExclusionRules] = None
    permission_policy: PermissionPolicy = field(default_factory=PermissionPolicy.raise_error)
    walk_symlink_directories: bool = False

    def __post_init__(self) -> None:
        if self.depth is not None and (
            isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 0
        ):
            raise WalkConfigError(f"depth must be a non-negative integer or None, got {self.depth!r}")
        if not isinstance(self.permission_policy, PermissionPolicy):
            raise WalkConfigError(f"permission_policy must be a PermissionPolicy, got {type(self.permission_policy)}")
        if self.exclusion_rules is not None and not isinstance(self.exclusion_rules, BaseExclusionRules):
            raise WalkConfigError(f"exclusion_rules must implement BaseExclusionRules, got {type(self.exclusion_rules)}")

        # Frozen dataclass: normalized values are stored through object.__setattr__
        object.__setattr__(self, "extensions", _normalize_extensions(self.extensions))
        object.__setattr__(self, "matches", _compile_patterns("matches", self.matches))
        object.__setattr__(self, "skips", _compile_patterns("skips", self.skips))

    def can_descend(self, depth_current: int) -> bool:
        """Return whether entries found at ``depth_current`` may be descended into."""
        return self.depth is None or depth_current < self.depth
