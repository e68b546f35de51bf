from abc import ABC, abstractmethod
from typing import Sequence, Union

from dirwalk.types import PathType
from dirwalk.walker.entry import WalkEntry


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for walk entry exclusion rules.

    Exclusion rules are an optional extra stage of the walker's filter pipeline, run
    after the regular expression ``skips``. Like every other filter they only decide
    whether an entry is yielded; a directory that is excluded is still descended into.

    All implementations must provide logic for checking if a given entry should be
    excluded. File loading and individual rule addition are optional capabilities that
    depend on the rule type.

    Example:
        >>> from dirwalk.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule('*.pyc')
        >>> entry = WalkEntry("a.pyc", "/r/a.pyc", "/r/a.pyc", "a.pyc", "a.pyc", is_file=True)
        >>> git_rules.exclude(entry)
        True
    """

    @abstractmethod
    def exclude(self, entry: WalkEntry) -> bool:
        """
        Determine if a given walk entry should be excluded.

        Args:
            entry (WalkEntry): The entry to check. Implementations typically look at
                ``entry.path_relative``; rules that need the filesystem use
                ``entry.path_absolute``.

        Returns:
            bool: True if the entry should be excluded, False if it should be included.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Rule types that don't support file operations use this default implementation,
        which raises NotImplementedError.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation (e.g., a gitignore pattern like "*.pyc").

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
