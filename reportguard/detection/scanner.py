"""Scanner: run every rule over the text and collect validated candidates."""

import logging
from typing import Iterable, List, Optional

from .types import Candidate, PatternRule

logger = logging.getLogger(__name__)


def scan_rule(text: str, rule: PatternRule) -> List[Candidate]:
    """
    Run a single rule over ``text``.

    Matches come out left to right and never overlap each other. Empty or
    whitespace-only values are skipped, then the rule's validator and
    context filter (if any) decide whether the match is kept.
    """
    candidates = []

    for match in rule.matcher.finditer(text):
        try:
            # Extract value and position based on capture group
            group_idx = rule.group
            if group_idx > 0 and match.lastindex and group_idx <= match.lastindex:
                value = match.group(group_idx)
                start = match.start(group_idx)
                end = match.end(group_idx)
            else:
                value = match.group(0)
                start = match.start()
                end = match.end()

            if not value or not value.strip():
                continue

            if rule.validator is not None and not rule.validator(value):
                continue

            if rule.context_filter is not None and not rule.context_filter(text, start, end):
                continue

            candidates.append(Candidate(
                rule_type=rule.type,
                priority=rule.priority,
                start=start,
                end=end,
                raw_text=value,
                severity=rule.severity,
            ))

        except (IndexError, AttributeError, ValueError) as e:
            # SECURITY: Log only the rule type, never the matched value
            logger.debug(f"Rule match error for {rule.type}: {e}")
            continue

    return candidates


def scan(text: str, rules: Optional[Iterable[PatternRule]] = None) -> List[Candidate]:
    """
    Collect candidates from every rule, in rule order.

    Args:
        text: Input text
        rules: Rules in registry order (defaults to the built-in registry)

    Returns:
        Candidates grouped by rule in registry order, each group left to
        right. Candidates may overlap; the resolver decides which survive.
    """
    if rules is None:
        from .rules import all_rules
        rules = all_rules()

    if not text:
        return []

    candidates: List[Candidate] = []
    for rule in rules:
        candidates.extend(scan_rule(text, rule))

    logger.debug(f"Scanner produced {len(candidates)} candidates over {len(text)} chars")
    return candidates
