"""Shared rule registration utilities and the ordered rule registry."""

import logging
import re
from typing import Callable, Iterable, List, Optional, Tuple

from .types import ContextFilter, PatternRule, Severity, Validator

logger = logging.getLogger(__name__)


def create_rule_adder(rule_list: List[PatternRule]) -> Callable:
    """
    Create an _add() helper for a rule list.

    Args:
        rule_list: List to append compiled rules to

    Returns:
        An _add() function that compiles the pattern and appends a PatternRule.
        Patterns that fail to compile are logged and skipped.
    """
    def _add(
        pattern: str,
        rule_type: str,
        priority: int,
        severity: Severity = Severity.MEDIUM,
        validator: Optional[Validator] = None,
        group: int = 0,
        flags: int = 0,
        context_filter: Optional[ContextFilter] = None,
    ) -> None:
        try:
            compiled = re.compile(pattern, flags)
        except re.error as e:
            logger.warning(f"Failed to compile pattern for {rule_type}: {e}")
            return
        rule_list.append(PatternRule(
            type=rule_type,
            priority=priority,
            matcher=compiled,
            severity=severity,
            validator=validator,
            group=group,
            context_filter=context_filter,
        ))
    return _add


class PatternRegistry:
    """
    Immutable, ordered catalog of PatternRules.

    Rules are held in descending priority order; rules sharing a priority
    keep their declaration order, which is how equal-priority conflicts
    are broken downstream.

    Usage:
        registry = PatternRegistry(RULES)
        for rule in registry.all_rules():
            ...
        custom = registry.with_rules([my_rule])
    """

    def __init__(self, rules: Iterable[PatternRule]):
        # sorted() is stable, so ties keep declaration order
        self._rules: Tuple[PatternRule, ...] = tuple(
            sorted(rules, key=lambda r: -r.priority)
        )

    def all_rules(self) -> Tuple[PatternRule, ...]:
        """All rules, highest priority first."""
        return self._rules

    def get(self, rule_type: str) -> Optional[PatternRule]:
        """First rule declared for ``rule_type``, or None."""
        for rule in self._rules:
            if rule.type == rule_type:
                return rule
        return None

    def types(self) -> List[str]:
        """Distinct rule types in registry order."""
        seen: List[str] = []
        for rule in self._rules:
            if rule.type not in seen:
                seen.append(rule.type)
        return seen

    def with_rules(self, extra: Iterable[PatternRule]) -> "PatternRegistry":
        """New registry with ``extra`` declared after the existing rules."""
        return PatternRegistry(list(self._rules) + list(extra))

    def without_types(self, excluded: Iterable[str]) -> "PatternRegistry":
        """New registry with every rule of the given types removed."""
        excluded = set(excluded)
        return PatternRegistry(r for r in self._rules if r.type not in excluded)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)
