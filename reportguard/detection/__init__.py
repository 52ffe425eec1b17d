"""
ReportGuard detection engine.

Finds PII in free-text reports and produces a reversible, placeholder-based
redaction.

Usage:
    >>> from reportguard.detection import detect, DetectionConfig
    >>> result = detect("Email john.doe@example.com")
    >>> result.redacted_text
    'Email [EMAIL_1]'
    >>> remote = detect(text, DetectionConfig(backend="remote", remote_url="https://..."))
"""

from .config import DetectionConfig
from .engine import BaseEngine, Detector, LocalEngine, RemoteEngine, create_engine, detect
from .pattern_registry import PatternRegistry, create_rule_adder
from .reactive import ReactiveDetectionController, ReactiveSession, SessionState
from .redactor import (
    HighlightSegment,
    RedactionSummary,
    format_type,
    highlight_segments,
    redact,
    redact_all,
    redact_one,
    restore,
    summarize_stats,
)
from .resolver import resolve
from .rules import DEFAULT_REGISTRY, all_rules
from .scanner import scan
from .types import Backend, Candidate, Detection, DetectionResult, PatternRule, Severity

__all__ = [
    # Engine
    "detect",
    "Detector",
    "BaseEngine",
    "LocalEngine",
    "RemoteEngine",
    "create_engine",
    "DetectionConfig",
    # Pipeline
    "scan",
    "resolve",
    "redact",
    "all_rules",
    "DEFAULT_REGISTRY",
    "PatternRegistry",
    "create_rule_adder",
    # Result transforms
    "redact_one",
    "redact_all",
    "restore",
    "highlight_segments",
    "HighlightSegment",
    "format_type",
    "summarize_stats",
    "RedactionSummary",
    # Reactive
    "ReactiveDetectionController",
    "ReactiveSession",
    "SessionState",
    # Types
    "Backend",
    "Candidate",
    "Detection",
    "DetectionResult",
    "PatternRule",
    "Severity",
]
