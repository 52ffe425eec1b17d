"""
ReportGuard CLI.

Command-line interface for detecting, redacting and restoring PII.

Usage:
    reportguard detect "text"                   # Redact text
    reportguard restore --map map.json          # Restore from stdin
    reportguard feedback false_positive ...     # Record feedback
"""

from .main import main

__all__ = ["main"]
