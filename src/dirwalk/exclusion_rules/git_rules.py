"""Implementation of exclusion rules using .gitignore pattern syntax."""

import os
from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec

from dirwalk.types import PathType
from dirwalk.walker.entry import WalkEntry

from .base_rules import BaseExclusionRules


def to_match_path(entry: WalkEntry) -> str:
    """Build the path matched against gitignore patterns for an entry.

    Separators are converted to forward slashes, and directory-like entries (including
    symlink directories) get a trailing slash so that patterns such as ``build/``
    match the directory entry itself.

    Example:
        >>> to_match_path(WalkEntry("b", "/r/a/b", "/r/a/b", "a/b", "a/b", is_directory=True))
        'a/b/'
    """
    path = entry.path_relative.replace(os.sep, "/")
    if entry.is_directory or entry.is_symlink_directory:
        return path + "/"
    return path


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Implementation of exclusion rules using .gitignore pattern syntax.

    This class uses the pathspec library to match the relative path of walk entries
    against patterns in the same way that Git does. Standard .gitignore syntax is
    supported, including directory patterns (ending in /), negation (starting with !),
    double-asterisk matching and comments.

    Multiple rule files can be provided during initialization or added incrementally
    with load_rules(). Individual rules can be added with add_rule().

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library,
            rebuilt whenever rules are added.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("node_modules/")
        >>> entry = WalkEntry(
        ...     "package.json",
        ...     "/r/node_modules/package.json",
        ...     "/r/node_modules/package.json",
        ...     "node_modules/package.json",
        ...     "node_modules/package.json",
        ...     is_file=True,
        ... )
        >>> rules.exclude(entry)
        True
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, entry: WalkEntry) -> bool:
        """Check if an entry should be excluded based on the loaded .gitignore patterns.

        Args:
            entry: The walk entry to check.

        Returns:
            bool: True if the entry's relative path matches the patterns, taking
                negations into account.
        """
        return bool(self.spec.match_file(to_match_path(entry)))

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and combine .gitignore patterns from one or more files.

        Patterns are processed in the order they are added, with later patterns
        potentially overriding earlier ones (especially negations).

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                gitignore_content = f.read().splitlines()

            self._lines.extend(gitignore_content)

        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern directly.

        Args:
            rule: A single .gitignore pattern (e.g., "*.pyc", "build/", "!keep.txt").
        """
        self._lines.append(rule)
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

    def has_rules(self) -> bool:
        """Check if any patterns are loaded."""
        return any(pattern.include is not None for pattern in self.spec.patterns)
