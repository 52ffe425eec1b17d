"""
ReportGuard detection engine.

Two interchangeable backends implement the same ``detect(text)`` contract:

- LocalEngine: Scanner -> Resolver -> Redactor, synchronous, no I/O
- RemoteEngine: remote service -> normalization -> Resolver -> Redactor

The backend is chosen once per call from DetectionConfig.backend.
Remote failures never propagate: they produce an empty, degraded result.

Example:
    >>> from reportguard.detection import detect
    >>> result = detect("Contact me at john.doe@example.com or 07911 123456")
    >>> result.redacted_text
    'Contact me at [EMAIL_1] or [PHONE_UK_MOBILE_1]'
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx

from ..core.exceptions import RemoteDetectionError, is_retryable
from ..logging_config import get_audit_logger
from .config import DetectionConfig
from .pattern_registry import PatternRegistry
from .redactor import redact
from .remote import RemoteDetectionAdapter, normalize_response
from .resolver import resolve, resolve_by_confidence
from .rules import DEFAULT_REGISTRY
from .scanner import scan
from .types import Backend, DetectionResult

logger = logging.getLogger(__name__)


class BaseEngine(ABC):
    """Common contract for detection backends."""

    name: str = "base"

    @abstractmethod
    def detect(self, text: str) -> DetectionResult:
        """
        Detect PII in text.

        Args:
            text: Free text to scan

        Returns:
            DetectionResult with non-overlapping detections
        """
        pass

    def close(self) -> None:
        """Release any resources held by the engine."""


class LocalEngine(BaseEngine):
    """Pattern-registry backend."""

    name = Backend.LOCAL.value

    def __init__(self, registry: Optional[PatternRegistry] = None):
        self.registry = registry or DEFAULT_REGISTRY

    def detect(self, text: str) -> DetectionResult:
        if not text:
            return DetectionResult.empty(text or "", backend=self.name)

        start_time = time.perf_counter()

        candidates = scan(text, self.registry.all_rules())
        accepted = resolve(candidates)
        result = redact(text, accepted, backend=self.name)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        # SECURITY: Log only metadata, never detected values
        logger.debug(
            f"Local detection: {len(candidates)} candidates, "
            f"{result.pii_count} accepted in {elapsed_ms:.1f}ms"
        )
        return result


class RemoteEngine(BaseEngine):
    """
    Remote-service backend.

    Placeholders, numbering and stats are re-derived locally so the output
    is indistinguishable in shape from LocalEngine's.
    """

    name = Backend.REMOTE.value

    def __init__(
        self,
        config: DetectionConfig,
        adapter: Optional[RemoteDetectionAdapter] = None,
        registry: Optional[PatternRegistry] = None,
    ):
        self.config = config
        self.adapter = adapter or RemoteDetectionAdapter.from_config(config)
        registry = registry or DEFAULT_REGISTRY
        self._priorities: Dict[str, int] = {}
        for rule in registry.all_rules():
            self._priorities.setdefault(rule.type, rule.priority)

    def detect(self, text: str) -> DetectionResult:
        if not text:
            return DetectionResult.empty(text or "", backend=self.name)

        try:
            payload = self.adapter.fetch(text)
            candidates = normalize_response(
                text,
                payload,
                confidence_threshold=self.config.confidence_threshold,
                priorities=self._priorities,
            )
        except (
            RemoteDetectionError, httpx.HTTPError, httpx.InvalidURL,
            ValueError, KeyError, TypeError,
        ) as e:
            retryable = is_retryable(e)
            logger.warning(
                f"Remote detection failed (retryable={retryable}), returning empty result: {e}"
            )
            get_audit_logger().remote_degraded(
                reason=type(e).__name__,
                text_length=len(text),
                retryable=retryable,
            )
            return DetectionResult.empty(text, backend=self.name, degraded=True)

        accepted = resolve_by_confidence(candidates)
        return redact(text, accepted, backend=self.name)

    def close(self) -> None:
        self.adapter.close()


def create_engine(
    config: Optional[DetectionConfig] = None,
    registry: Optional[PatternRegistry] = None,
) -> BaseEngine:
    """Build the engine variant selected by ``config.backend``."""
    config = config or DetectionConfig()
    if config.resolved_backend is Backend.REMOTE:
        return RemoteEngine(config, registry=registry)
    return LocalEngine(registry)


class Detector:
    """
    Long-lived detection façade.

    Reads the backend from its config on every call and reuses one engine
    per backend, so switching ``config.backend`` between calls takes
    effect on the next call without rebuilding clients.

    Example:
        >>> detector = Detector(DetectionConfig(backend="local"))
        >>> detector.detect("SSN 123-45-6789").stats["SSN"]
        1
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        registry: Optional[PatternRegistry] = None,
    ):
        self.config = config or DetectionConfig.from_env()
        self.registry = registry
        self._engines: Dict[Backend, BaseEngine] = {}

    def engine_for(self, backend: Backend) -> BaseEngine:
        """Get (or lazily create) the engine for a backend."""
        engine = self._engines.get(backend)
        if engine is None:
            if backend is Backend.REMOTE:
                engine = RemoteEngine(self.config, registry=self.registry)
            else:
                engine = LocalEngine(self.registry)
            self._engines[backend] = engine
        return engine

    def detect(self, text: str) -> DetectionResult:
        backend = self.config.resolved_backend
        return self.engine_for(backend).detect(text)

    def close(self) -> None:
        for engine in self._engines.values():
            engine.close()
        self._engines.clear()

    def __enter__(self) -> "Detector":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def detect(text: str, config: Optional[DetectionConfig] = None) -> DetectionResult:
    """
    Convenience function to detect PII in text.

    Args:
        text: Text to scan
        config: Detection settings (defaults to the local backend)

    Returns:
        DetectionResult
    """
    engine = create_engine(config)
    try:
        return engine.detect(text)
    finally:
        engine.close()
