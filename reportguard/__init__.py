"""
ReportGuard - PII detection and reversible redaction for free-text reports.

Quick Start:
    >>> from reportguard import detect
    >>> result = detect("Contact me at john.doe@example.com or 07911 123456")
    >>> result.redacted_text
    'Contact me at [EMAIL_1] or [PHONE_UK_MOBILE_1]'

Remote detection:
    >>> from reportguard import DetectionConfig, Detector
    >>> config = DetectionConfig(backend="remote", remote_url="https://pii.example.com")
    >>> with Detector(config) as detector:
    ...     result = detector.detect(text)
"""

__version__ = "0.1.0"

from .detection import DetectionConfig, DetectionResult, Detector, detect, restore
from .feedback import record_feedback

__all__ = [
    "detect",
    "restore",
    "Detector",
    "DetectionConfig",
    "DetectionResult",
    "record_feedback",
    "__version__",
]
