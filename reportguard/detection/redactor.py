"""
Redactor: turn accepted candidates into placeholders and a DetectionResult.

Also holds the pure text transformations the preview UI applies to an
existing result (redact one, redact all, restore, highlight). None of
them re-run detection.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .constants import TYPE_LABELS
from .types import Candidate, Detection, DetectionResult


def make_placeholder(rule_type: str, n: int) -> str:
    """Placeholder for the n-th (1-based) detection of ``rule_type``."""
    return f"[{rule_type}_{n}]"


def redact(
    text: str,
    accepted: Iterable[Candidate],
    backend: str = "local",
) -> DetectionResult:
    """
    Build the redacted text, detections and stats for ``text``.

    Args:
        text: Original input
        accepted: Non-overlapping candidates, in any order
        backend: Backend label recorded on the result

    Returns:
        DetectionResult with detections in ascending start order and
        placeholders numbered per type in that order.
    """
    ordered = sorted(accepted, key=lambda c: c.start)

    counts: Dict[str, int] = {}
    detections: List[Detection] = []
    for c in ordered:
        counts[c.rule_type] = counts.get(c.rule_type, 0) + 1
        detections.append(Detection(
            type=c.rule_type,
            original=c.raw_text,
            placeholder=make_placeholder(c.rule_type, counts[c.rule_type]),
            start=c.start,
            end=c.end,
            severity=c.severity,
            confidence=c.confidence,
        ))

    # Right-to-left so earlier offsets stay valid
    parts = []
    cursor = len(text)
    for d in reversed(detections):
        parts.append(text[d.end:cursor])
        parts.append(d.placeholder)
        cursor = d.start
    parts.append(text[:cursor])
    redacted_text = "".join(reversed(parts))

    return DetectionResult(
        original_text=text,
        redacted_text=redacted_text,
        detections=tuple(detections),
        stats=counts,
        backend=backend,
    )


def redact_one(text: str, detection: Detection) -> str:
    """
    Replace a single detection in ``text`` with its placeholder.

    Uses the recorded span when it still holds the original value;
    otherwise (the text was already partly redacted, so offsets moved)
    replaces the first occurrence of the original value. Returns ``text``
    unchanged if the value is no longer present.
    """
    if text[detection.start:detection.end] == detection.original:
        return text[:detection.start] + detection.placeholder + text[detection.end:]

    idx = text.find(detection.original)
    if idx < 0:
        return text
    return text[:idx] + detection.placeholder + text[idx + len(detection.original):]


def redact_all(result: DetectionResult) -> str:
    """Fully redacted form of a result."""
    return result.redacted_text


def restore(redacted_text: str, detections: Sequence[Detection]) -> str:
    """
    Reverse a redaction by putting each original value back.

    Placeholders are located at the offsets they were written to, so
    literal placeholder-like text elsewhere in the input is left alone.
    If a placeholder is not where it is expected (e.g. the redacted text
    was edited) the first remaining occurrence is replaced instead.
    """
    ordered = sorted(detections, key=lambda d: d.start)

    # Offset of each placeholder in the redacted text
    positions = []
    shift = 0
    for d in ordered:
        positions.append(d.start + shift)
        shift += len(d.placeholder) - len(d.original)

    # Right-to-left so earlier offsets stay valid
    result = redacted_text
    for d, pos in reversed(list(zip(ordered, positions))):
        if result[pos:pos + len(d.placeholder)] != d.placeholder:
            pos = result.find(d.placeholder)
            if pos < 0:
                continue
        result = result[:pos] + d.original + result[pos + len(d.placeholder):]

    return result


@dataclass(frozen=True)
class HighlightSegment:
    """A run of display text, either plain or a detected value."""
    text: str
    is_pii: bool = False
    type: Optional[str] = None
    placeholder: Optional[str] = None


def highlight_segments(text: str, detections: Sequence[Detection]) -> List[HighlightSegment]:
    """
    Split ``text`` into plain and PII segments for display.

    Returns a single plain segment when there are no detections.
    """
    if not detections:
        return [HighlightSegment(text=text or "")]

    segments: List[HighlightSegment] = []
    last = 0
    for d in sorted(detections, key=lambda d: d.start):
        if d.start < last:
            continue
        if d.start > last:
            segments.append(HighlightSegment(text=text[last:d.start]))
        segments.append(HighlightSegment(
            text=d.original,
            is_pii=True,
            type=d.type,
            placeholder=d.placeholder,
        ))
        last = d.end

    if last < len(text):
        segments.append(HighlightSegment(text=text[last:]))

    return segments


def format_type(rule_type: str) -> str:
    """Human-readable label for a detection type."""
    return TYPE_LABELS.get(rule_type, rule_type.replace("_", " "))


@dataclass(frozen=True)
class RedactionSummary:
    """Monitoring summary of a result's per-type counts."""
    total_detected: int
    most_common_type: Optional[str]
    type_breakdown: Dict[str, int]


def summarize_stats(stats: Mapping[str, int]) -> RedactionSummary:
    """
    Summarize per-type detection counts.

    The most common type is the one with the highest count; ties go to
    the type that appears first in ``stats``. None when nothing was found.
    """
    breakdown = dict(stats)
    most_common = None
    best = 0
    for rule_type, count in breakdown.items():
        if count > best:
            most_common, best = rule_type, count
    return RedactionSummary(
        total_detected=sum(breakdown.values()),
        most_common_type=most_common,
        type_breakdown=breakdown,
    )
