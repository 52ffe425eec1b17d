"""
Detection feedback recording.

Reviewers flag false positives (something redacted that is not PII) and
false negatives (PII that was missed). Events are appended to a sink for
later offline tuning; nothing here feeds back into detection.

Usage:
    from reportguard.feedback import JsonlFeedbackRecorder, record_feedback

    recorder = JsonlFeedbackRecorder("~/.reportguard/feedback.jsonl")
    record_feedback("false_positive", "Mark Rivers", "NAME", recorder=recorder)
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from .core.exceptions import FeedbackError, ValidationError
from .logging_config import get_audit_logger

logger = logging.getLogger(__name__)


class FeedbackKind(str, Enum):
    FALSE_POSITIVE = "false_positive"
    FALSE_NEGATIVE = "false_negative"

    @classmethod
    def parse(cls, value: Union[str, "FeedbackKind"]) -> "FeedbackKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid feedback kind {value!r}. "
                f"Must be one of: {', '.join(k.value for k in cls)}",
                field="kind",
            ) from None


@dataclass(frozen=True)
class FeedbackEvent:
    """A single reviewer correction."""
    kind: FeedbackKind
    original_text: str
    detected_type: str
    context: Optional[str] = None
    organization_id: Optional[str] = None
    recorded_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feedback_type": self.kind.value,
            "original_text": self.original_text,
            "detected_type": self.detected_type,
            "context": self.context,
            "organization_id": self.organization_id,
            "recorded_at": self.recorded_at,
        }


class FeedbackRecorder(Protocol):
    """Append-only sink for feedback events."""

    def record(self, event: FeedbackEvent) -> None:
        ...


class JsonlFeedbackRecorder:
    """
    Appends one JSON object per line to a file.

    The file and its parent directory are created on first write.
    Writes are serialized with a lock so concurrent reviewers never
    interleave partial lines.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()

    def record(self, event: FeedbackEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except OSError as e:
                raise FeedbackError(
                    f"Cannot write feedback: {e.strerror or e}",
                    path=str(self.path),
                ) from e

    def read_all(self) -> List[Dict[str, Any]]:
        """Load every recorded event (for offline analysis)."""
        if not self.path.exists():
            return []
        events = []
        with open(self.path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    events.append(json.loads(line))
        return events


class InMemoryFeedbackRecorder:
    """Keeps events in a list. Useful for tests and previews."""

    def __init__(self):
        self.events: List[FeedbackEvent] = []
        self._lock = threading.Lock()

    def record(self, event: FeedbackEvent) -> None:
        with self._lock:
            self.events.append(event)


_default_recorder: Optional[FeedbackRecorder] = None


def set_default_recorder(recorder: Optional[FeedbackRecorder]) -> None:
    """Set the recorder used when record_feedback() is given none."""
    global _default_recorder
    _default_recorder = recorder


def get_default_recorder() -> FeedbackRecorder:
    """Get the default recorder, creating an in-memory one if unset."""
    global _default_recorder
    if _default_recorder is None:
        _default_recorder = InMemoryFeedbackRecorder()
    return _default_recorder


def record_feedback(
    kind: Union[str, FeedbackKind],
    text: str,
    detected_type: str,
    context: Optional[str] = None,
    organization_id: Optional[str] = None,
    recorder: Optional[FeedbackRecorder] = None,
) -> bool:
    """
    Record a false-positive or false-negative report.

    Fire-and-forget: sink failures are logged and reported through the
    return value, never raised.

    Args:
        kind: "false_positive" or "false_negative"
        text: The text that was (or should have been) detected
        detected_type: The detection type involved, e.g. "NAME"
        context: Optional surrounding text
        organization_id: Optional tenant identifier
        recorder: Sink to use (defaults to the module default)

    Returns:
        True if the event was stored

    Raises:
        ValidationError: unknown kind, or empty text / detected_type
    """
    feedback_kind = FeedbackKind.parse(kind)
    if not text:
        raise ValidationError("Feedback text must be non-empty", field="text")
    if not detected_type:
        raise ValidationError("Feedback detected_type must be non-empty", field="detected_type")

    event = FeedbackEvent(
        kind=feedback_kind,
        original_text=text,
        detected_type=detected_type,
        context=context,
        organization_id=organization_id,
    )

    sink = recorder or get_default_recorder()
    try:
        sink.record(event)
    except FeedbackError as e:
        logger.warning(f"Feedback not recorded: {e}")
        return False

    get_audit_logger().feedback_recorded(
        kind=feedback_kind.value,
        detected_type=detected_type,
        has_context=context is not None,
    )
    return True
