"""Core types for PII detection: rules, candidates, detections, results."""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple


class Severity(str, Enum):
    """Informational severity carried through to each Detection."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Any, default: Optional["Severity"] = None) -> "Severity":
        """Parse a severity string, falling back to ``default`` (MEDIUM)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return default or cls.MEDIUM


class Backend(str, Enum):
    """Detection backend selected once per detect() call."""
    LOCAL = "local"
    REMOTE = "remote"


# (raw_text) -> keep?
Validator = Callable[[str], bool]
# (text, start, end) -> keep?
ContextFilter = Callable[[str, int, int], bool]


@dataclass(frozen=True)
class PatternRule:
    """
    A single detection rule.

    Attributes:
        type: Stable identifier, e.g. "EMAIL"
        priority: Higher wins conflicts against overlapping candidates
        matcher: Compiled regex; finditer yields left-to-right, non-overlapping matches
        severity: Informational severity for resulting detections
        validator: Optional check on the matched value
        group: Capture group that defines the span (0 = whole match)
        context_filter: Optional check that can look at the surrounding text
    """
    type: str
    priority: int
    matcher: re.Pattern
    severity: Severity = Severity.MEDIUM
    validator: Optional[Validator] = None
    group: int = 0
    context_filter: Optional[ContextFilter] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.type:
            raise ValueError("PatternRule.type must be non-empty")


@dataclass(frozen=True)
class Candidate:
    """An unresolved, possibly-overlapping match before conflict resolution."""
    rule_type: str
    priority: int
    start: int
    end: int
    raw_text: str
    severity: Severity = Severity.MEDIUM
    confidence: float = 1.0

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Candidate start must be >= 0, got {self.start}")
        if self.end <= self.start:
            raise ValueError(
                f"Candidate end ({self.end}) must be greater than start ({self.start})"
            )

    def overlaps(self, start: int, end: int) -> bool:
        """True if [self.start, self.end) intersects [start, end)."""
        return self.start < end and start < self.end


@dataclass(frozen=True)
class Detection:
    """
    A resolved, accepted PII occurrence.

    ``placeholder`` is ``[TYPE_n]`` where n counts detections of the same
    type in ascending start order, starting at 1. Numbering is only stable
    within the result that produced it.
    """
    type: str
    original: str
    placeholder: str
    start: int
    end: int
    severity: Severity = Severity.MEDIUM
    confidence: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type,
            "original": self.original,
            "placeholder": self.placeholder,
            "start": self.start,
            "end": self.end,
            "severity": self.severity.value,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Detection":
        """Rebuild a detection from ``to_dict`` output."""
        return cls(
            type=data["type"],
            original=data["original"],
            placeholder=data["placeholder"],
            start=int(data["start"]),
            end=int(data["end"]),
            severity=Severity.parse(data.get("severity")),
            confidence=float(data.get("confidence", 1.0)),
        )


@dataclass(frozen=True)
class DetectionResult:
    """
    Output of one detection pass.

    Attributes:
        original_text: The input that was scanned
        redacted_text: Input with each detection replaced by its placeholder
        detections: Detections sorted by ascending start
        stats: Mapping of type -> count (read-only)
        backend: "local", "remote", or "none" for short-circuited empty input
        degraded: True when a remote failure was replaced by an empty result
    """
    original_text: str
    redacted_text: str
    detections: Tuple[Detection, ...] = ()
    stats: Mapping[str, int] = field(default_factory=dict)
    backend: str = "local"
    degraded: bool = False

    def __post_init__(self):
        # Freeze the containers so a published result cannot be mutated
        object.__setattr__(self, "detections", tuple(self.detections))
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))

    @classmethod
    def empty(cls, text: str, backend: str = "none", degraded: bool = False) -> "DetectionResult":
        """Result with no detections; redacted text equals the input."""
        return cls(
            original_text=text,
            redacted_text=text,
            backend=backend,
            degraded=degraded,
        )

    @property
    def has_pii(self) -> bool:
        """Check if any PII was detected."""
        return len(self.detections) > 0

    @property
    def pii_count(self) -> int:
        return len(self.detections)

    @property
    def types(self) -> List[str]:
        """Distinct detected types in first-seen order."""
        seen: List[str] = []
        for d in self.detections:
            if d.type not in seen:
                seen.append(d.type)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "redacted_text": self.redacted_text,
            "detections": [d.to_dict() for d in self.detections],
            "pii_count": self.pii_count,
            "stats": dict(self.stats),
            "backend": self.backend,
            "degraded": self.degraded,
        }
