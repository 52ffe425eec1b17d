"""
Tests for logging setup, formatters and the audit logger.
"""

import json
import logging

import pytest

from reportguard.core.exceptions import (
    ConfigurationError,
    FeedbackError,
    NetworkError,
    RemoteDetectionError,
    ValidationError,
    is_retryable,
)
from reportguard.logging_config import (
    AUDIT_LOGGER_NAME,
    ConsoleFormatter,
    JSONFormatter,
    get_audit_logger,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_logging():
    """Undo setup_logging() changes after the test."""
    yield
    for name in ("reportguard", AUDIT_LOGGER_NAME):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_levels(self, restore_logging):
        """verbose and quiet select DEBUG and ERROR."""
        setup_logging(verbose=True)
        assert logging.getLogger("reportguard").level == logging.DEBUG

        setup_logging(quiet=True)
        assert logging.getLogger("reportguard").level == logging.ERROR

    def test_log_file_is_json(self, tmp_path, restore_logging):
        """File logs are JSON lines and include audit events."""
        log_file = tmp_path / "logs" / "reportguard.log"
        setup_logging(log_file=str(log_file))

        get_logger("tests").info("hello")
        get_audit_logger().remote_degraded(reason="RemoteDetectionError", text_length=42)
        for handler in logging.getLogger("reportguard").handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        messages = [entry["message"] for entry in lines]
        assert "hello" in messages
        assert "AUDIT: remote_degraded" in messages
        (audit,) = [entry for entry in lines if entry.get("audit_event") == "remote_degraded"]
        assert audit["audit_data"] == {"reason": "RemoteDetectionError", "text_length": 42}


class TestJSONFormatter:
    """Tests for structured log output."""

    def test_fields(self):
        """Records serialize with level, logger and message."""
        record = logging.LogRecord("reportguard.x", logging.WARNING, __file__, 1, "msg %s", ("a",), None)
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["logger"] == "reportguard.x"
        assert data["message"] == "msg a"


class TestConsoleFormatter:
    """Tests for human-readable output."""

    def test_info_plain_others_prefixed(self):
        """INFO is the bare message; other levels carry their name."""
        formatter = ConsoleFormatter()
        info = logging.LogRecord("reportguard", logging.INFO, __file__, 1, "done", (), None)
        warning = logging.LogRecord("reportguard", logging.WARNING, __file__, 1, "careful", (), None)

        assert formatter.format(info) == "done"
        assert formatter.format(warning) == "WARNING: careful"


class TestGetLogger:
    """Tests for logger naming."""

    def test_prefix(self):
        """Names outside the package are namespaced under reportguard."""
        assert get_logger("tests").name == "reportguard.tests"
        assert get_logger("reportguard.cli").name == "reportguard.cli"


class TestExceptions:
    """Tests for the error hierarchy."""

    def test_retryable(self):
        """Network errors are transient; validation and config errors are not."""
        assert is_retryable(NetworkError("down"))
        assert is_retryable(RemoteDetectionError("503", status_code=503))
        assert not is_retryable(ValidationError("bad", field="kind"))
        assert not is_retryable(ConfigurationError("bad", setting="x"))
        assert not is_retryable(FeedbackError("disk full"))

    def test_str_includes_details(self):
        """Details are appended to the message."""
        error = ValidationError("bad kind", field="kind", value="maybe")
        assert "bad kind" in str(error)
