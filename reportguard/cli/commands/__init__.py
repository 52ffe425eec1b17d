"""
ReportGuard CLI commands.

Commands:
    detect      Detect and redact PII in text
    restore     Put original values back into redacted text
    feedback    Record a false positive or false negative
"""

from .detect import add_detect_parser, cmd_detect
from .feedback import add_feedback_parser, cmd_feedback
from .restore import add_restore_parser, cmd_restore

__all__ = [
    # Parsers
    "add_detect_parser",
    "add_restore_parser",
    "add_feedback_parser",
    # Commands
    "cmd_detect",
    "cmd_restore",
    "cmd_feedback",
]
