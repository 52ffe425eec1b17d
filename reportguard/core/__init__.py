"""
ReportGuard core: shared error types.
"""

from .exceptions import (
    ReportGuardError,
    TransientError,
    NetworkError,
    RemoteDetectionError,
    PermanentError,
    ValidationError,
    ConfigurationError,
    FeedbackError,
    is_retryable,
)

__all__ = [
    "ReportGuardError",
    "TransientError",
    "NetworkError",
    "RemoteDetectionError",
    "PermanentError",
    "ValidationError",
    "ConfigurationError",
    "FeedbackError",
    "is_retryable",
]
