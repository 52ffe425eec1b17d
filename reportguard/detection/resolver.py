"""
Conflict resolution for overlapping candidates.

Greedy and order-driven: candidates are considered in the order the
scanner emitted them (highest priority rule first, declaration order on
ties, left to right within a rule). A candidate is accepted only if its
span does not intersect any already accepted span. Shadowed candidates
are dropped whole, never trimmed to the uncovered remainder.
"""

import bisect
from typing import Iterable, List, Tuple

from .types import Candidate


class _AcceptedSpans:
    """Sorted, non-overlapping [start, end) ranges with O(log n) lookup."""

    def __init__(self):
        self._starts: List[int] = []
        self._ends: List[int] = []

    def intersects(self, start: int, end: int) -> bool:
        # Accepted ranges never overlap, so only the neighbour whose start
        # precedes `end` can intersect.
        idx = bisect.bisect_left(self._starts, end) - 1
        return idx >= 0 and self._ends[idx] > start

    def add(self, start: int, end: int) -> None:
        idx = bisect.bisect_left(self._starts, start)
        self._starts.insert(idx, start)
        self._ends.insert(idx, end)


def resolve(candidates: Iterable[Candidate]) -> List[Candidate]:
    """
    Select a non-overlapping subset of candidates.

    Args:
        candidates: Candidates in scanner emission order

    Returns:
        Accepted candidates in acceptance order (not sorted by position)
    """
    accepted: List[Candidate] = []
    spans = _AcceptedSpans()

    for candidate in candidates:
        if spans.intersects(candidate.start, candidate.end):
            continue
        spans.add(candidate.start, candidate.end)
        accepted.append(candidate)

    return accepted


def resolve_by_confidence(candidates: Iterable[Candidate]) -> List[Candidate]:
    """
    Resolve candidates that carry no rule order (remote results).

    Higher confidence wins, then higher priority, then the earlier start,
    then the longer span.
    """
    ordered = sorted(candidates, key=_confidence_key)
    return resolve(ordered)


def _confidence_key(c: Candidate) -> Tuple[float, int, int, int]:
    return (-c.confidence, -c.priority, c.start, -(c.end - c.start))
