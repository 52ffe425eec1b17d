"""
ReportGuard logging configuration.

Provides structured logging with JSON output for production and
human-readable console output for development.

Detected values are never written to logs. Callers log entity types,
counts, offsets and lengths only.

Usage:
    from reportguard.logging_config import setup_logging, get_audit_logger

    # In CLI main:
    setup_logging(verbose=True, log_file="/var/log/reportguard.log")

    # For audit events:
    audit = get_audit_logger()
    audit.feedback_recorded(kind="false_positive", detected_type="EMAIL")
"""

import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Any


# =============================================================================
# FORMATTERS
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    One JSON object per line: level, logger, message, plus any audit
    fields attached by AuditLogger.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in AUDIT_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain message for INFO, ``LEVEL: message`` otherwise."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return message
        return f"{record.levelname}: {message}"


# =============================================================================
# AUDIT LOGGER
# =============================================================================

AUDIT_LOGGER_NAME = "audit.reportguard"
AUDIT_FIELDS = ("audit_event", "audit_data", "audit_timestamp")


class AuditLogger:
    """
    Structured audit logger for privacy-relevant operations.

    Audit events are always logged at INFO level with structured data,
    and use a dedicated 'audit.*' logger namespace.

    Usage:
        audit = get_audit_logger()
        audit.log("feedback_recorded", kind="false_negative", detected_type="NAME")
        audit.remote_degraded(reason="RemoteDetectionError", text_length=120)
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def log(self, event: str, **kwargs: Any) -> None:
        """
        Log an audit event with structured data.

        Args:
            event: Event type (e.g., "feedback_recorded")
            **kwargs: Additional structured data for the event
        """
        extra = {
            "audit_event": event,
            "audit_data": kwargs,
            "audit_timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.info(f"AUDIT: {event}", extra=extra)

    def feedback_recorded(self, kind: str, detected_type: str, **kwargs) -> None:
        self.log("feedback_recorded", kind=kind, detected_type=detected_type, **kwargs)

    def remote_degraded(self, reason: str, text_length: int, **kwargs) -> None:
        self.log("remote_degraded", reason=reason, text_length=text_length, **kwargs)


_audit_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Get the audit logger instance."""
    global _audit_logger
    if _audit_logger is None:
        _audit_logger = AuditLogger(logging.getLogger(AUDIT_LOGGER_NAME))
    return _audit_logger


# =============================================================================
# SETUP FUNCTIONS
# =============================================================================

def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Only show ERROR and above
        log_file: Path to log file (uses JSON format automatically)
        json_format: Use JSON format for console output

    Examples:
        # Development - human readable
        setup_logging(verbose=True)

        # Production - JSON to file
        setup_logging(log_file="/var/log/reportguard.log")
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root_logger = logging.getLogger("reportguard")
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ConsoleFormatter())

    root_logger.addHandler(console_handler)

    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)
    audit_logger.handlers.clear()

    # File handler (always JSON for machine parsing)
    if log_file:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)
        audit_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the reportguard namespace.

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger instance
    """
    if name.startswith("reportguard"):
        return logging.getLogger(name)
    return logging.getLogger(f"reportguard.{name}")
