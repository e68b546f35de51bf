"""Combination of several exclusion rules into one."""

from typing import Iterable, List, Optional

from dirwalk.walker.entry import WalkEntry

from .base_rules import BaseExclusionRules


def _check_rule(rule: object, position: Optional[int] = None) -> None:
    if isinstance(rule, BaseExclusionRules):
        return
    where = "Rule" if position is None else f"Rule at index {position}"
    raise TypeError(f"{where} must implement BaseExclusionRules, got {type(rule)}")


class CompositeExclusionRules(BaseExclusionRules):
    """Exclude a walk entry when any of the wrapped rules excludes it.

    Rules are consulted in order and evaluation stops at the first rule that excludes
    the entry, so cheap path-based rules should come before rules that touch the
    filesystem (such as ``SizeExclusionRules``).

    Example:
        >>> from dirwalk.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> from dirwalk.exclusion_rules.size_rules import SizeExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule("*.log")
        >>> composite = CompositeExclusionRules([git_rules, SizeExclusionRules("10KB")])
        >>> composite.get_rule_count()
        2
        >>> entry = WalkEntry("x.log", "/r/x.log", "/r/x.log", "x.log", "x.log", is_file=True)
        >>> composite.excluded_by(entry) is git_rules
        True
    """

    def __init__(self, rules: Iterable[BaseExclusionRules]):
        """Wrap a non-empty sequence of rules.

        Raises:
            ValueError: If no rule is given.
            TypeError: If a rule does not implement BaseExclusionRules.
        """
        self._rules: List[BaseExclusionRules] = list(rules)
        if not self._rules:
            raise ValueError("At least one exclusion rule must be provided")
        for position, rule in enumerate(self._rules):
            _check_rule(rule, position)

    def excluded_by(self, entry: WalkEntry) -> Optional[BaseExclusionRules]:
        """Return the first rule excluding the entry, or None."""
        return next((rule for rule in self._rules if rule.exclude(entry)), None)

    def exclude(self, entry: WalkEntry) -> bool:
        return self.excluded_by(entry) is not None

    def has_rules(self) -> bool:
        """Whether any wrapped rule is active.

        A wrapped rule without a ``has_rules`` method counts as active.
        """
        for rule in self._rules:
            has_rules = getattr(rule, "has_rules", None)
            if not callable(has_rules) or has_rules():
                return True
        return False

    def add_rule_object(self, rule: BaseExclusionRules) -> None:
        """Append a rule; it is consulted after the existing ones.

        Raises:
            TypeError: If rule does not implement BaseExclusionRules.
        """
        _check_rule(rule)
        self._rules.append(rule)

    def get_rule_count(self) -> int:
        return len(self._rules)

    def get_rules(self) -> List[BaseExclusionRules]:
        """Return a copy of the wrapped rules, in evaluation order."""
        return list(self._rules)
