"""
ReportGuard Exception Hierarchy.

Provides structured error types that let callers tell failure modes apart
and handle them appropriately.

Exception Categories:
- TransientError: May succeed on retry (network, timeout, remote service down)
- PermanentError: Will not succeed on retry (validation, configuration, sink I/O)

Usage:
    from reportguard.core.exceptions import (
        ReportGuardError,
        RemoteDetectionError,
        ValidationError,
    )

    try:
        payload = adapter.fetch(text)
    except RemoteDetectionError:
        # Degrade to an empty result
    except ValidationError:
        # Caller supplied bad input
"""

from typing import Optional


class ReportGuardError(Exception):
    """
    Base exception for all ReportGuard errors.

    All ReportGuard exceptions inherit from this class, making it easy
    to catch any library error while still allowing specific handling.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# =============================================================================
# TRANSIENT ERRORS - May succeed on retry
# =============================================================================

class TransientError(ReportGuardError):
    """
    Error that may succeed on retry.

    Examples: network issues, timeouts, remote service unavailable.
    """
    pass


class NetworkError(TransientError):
    """
    Network operation failed.

    May be due to:
    - Connection timeout
    - DNS resolution failure
    - Remote service unavailable
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.url = url


class RemoteDetectionError(NetworkError):
    """
    The remote detection service could not produce a usable response.

    Covers transport failures, non-2xx status codes, and bodies that are
    not the expected JSON shape. The remote engine converts this into an
    empty, degraded result; it never reaches callers of ``detect``.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, url=url, **kwargs)
        self.status_code = status_code


# =============================================================================
# PERMANENT ERRORS - Will not succeed on retry
# =============================================================================

class PermanentError(ReportGuardError):
    """
    Error that will not succeed on retry.

    Examples: validation failures, bad configuration, unwritable sinks.
    """
    pass


class ValidationError(PermanentError):
    """
    Input validation failed.

    Examples:
    - Unknown feedback kind
    - Empty required field
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, kwargs)
        self.field = field
        self.value = value


class ConfigurationError(PermanentError):
    """
    Configuration is invalid.

    Examples:
    - debounce_ms is negative
    - confidence_threshold outside 0-1
    """

    def __init__(self, message: str, setting: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.setting = setting


class FeedbackError(PermanentError):
    """Recording a feedback event failed (sink not writable)."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.path = path


# =============================================================================
# HELPERS
# =============================================================================

def is_retryable(error: Exception) -> bool:
    """
    Check if an error is potentially retryable.

    Args:
        error: The exception to check

    Returns:
        True if the error might succeed on retry
    """
    return isinstance(error, TransientError)
