"""Configuration for the ReportGuard detection engine."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from ..core.exceptions import ConfigurationError
from .constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_REMOTE_TIMEOUT,
)
from .types import Backend

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")

# camelCase keys accepted from UI/JSON settings
_DICT_ALIASES = {
    "debounceMs": "debounce_ms",
    "confidenceThreshold": "confidence_threshold",
    "enableContextAnalysis": "enable_context_analysis",
    "entityTypes": "entity_types",
    "remoteUrl": "remote_url",
    "apiKey": "api_key",
    "remoteTimeoutSeconds": "remote_timeout_seconds",
}


def parse_backend(value: Any) -> Backend:
    """
    Resolve a backend setting.

    Unknown or missing values fall back to LOCAL with a warning.
    """
    if isinstance(value, Backend):
        return value
    try:
        return Backend(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown detection backend {value!r}, falling back to local")
        return Backend.LOCAL


@dataclass
class DetectionConfig:
    """
    Detection engine configuration.

    ``confidence_threshold``, ``enable_context_analysis`` and
    ``entity_types`` only affect the remote backend.
    """

    backend: str = Backend.LOCAL.value
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    # Remote-only settings
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    enable_context_analysis: bool = True
    entity_types: Optional[List[str]] = None  # None = all types
    remote_url: Optional[str] = None
    api_key: Optional[str] = field(default=None, repr=False)
    remote_timeout_seconds: float = DEFAULT_REMOTE_TIMEOUT

    def __post_init__(self):
        """Validate configuration values."""
        self.backend = parse_backend(self.backend).value

        if self.debounce_ms < 0:
            raise ConfigurationError(
                f"debounce_ms must be >= 0, got {self.debounce_ms}",
                setting="debounce_ms",
            )

        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ConfigurationError(
                "confidence_threshold must be between 0 and 1",
                setting="confidence_threshold",
            )

        if self.remote_timeout_seconds <= 0:
            raise ConfigurationError(
                "remote_timeout_seconds must be positive",
                setting="remote_timeout_seconds",
            )

        if self.backend == Backend.REMOTE.value and not self.remote_url:
            logger.warning("Remote backend selected without remote_url; detections will be empty")

    @property
    def resolved_backend(self) -> Backend:
        return parse_backend(self.backend)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @classmethod
    def from_env(cls) -> "DetectionConfig":
        """Create config from REPORTGUARD_* environment variables."""
        kwargs: Dict[str, Any] = {}

        if env_backend := os.environ.get("REPORTGUARD_BACKEND"):
            kwargs["backend"] = env_backend

        if env_debounce := os.environ.get("REPORTGUARD_DEBOUNCE_MS"):
            kwargs["debounce_ms"] = int(env_debounce)

        if env_conf := os.environ.get("REPORTGUARD_CONFIDENCE_THRESHOLD"):
            kwargs["confidence_threshold"] = float(env_conf)

        if env_ctx := os.environ.get("REPORTGUARD_ENABLE_CONTEXT_ANALYSIS"):
            kwargs["enable_context_analysis"] = env_ctx.lower() in _TRUE_VALUES

        if env_url := os.environ.get("REPORTGUARD_REMOTE_URL"):
            kwargs["remote_url"] = env_url

        if env_key := os.environ.get("REPORTGUARD_API_KEY"):
            kwargs["api_key"] = env_key

        if env_timeout := os.environ.get("REPORTGUARD_REMOTE_TIMEOUT"):
            kwargs["remote_timeout_seconds"] = float(env_timeout)

        return cls(**kwargs)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DetectionConfig":
        """
        Create config from a settings dict (camelCase or snake_case keys).

        Unlike the constructor this never raises: unknown keys are ignored
        and out-of-range values are replaced by defaults with a warning.
        """
        kwargs: Dict[str, Any] = {}
        known = set(cls.__dataclass_fields__)

        for key, value in (data or {}).items():
            name = _DICT_ALIASES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value

        if "debounce_ms" in kwargs:
            try:
                kwargs["debounce_ms"] = max(0, int(kwargs["debounce_ms"]))
            except (TypeError, ValueError):
                logger.warning("Invalid debounce_ms in settings, using default")
                del kwargs["debounce_ms"]

        if "confidence_threshold" in kwargs:
            try:
                threshold = float(kwargs["confidence_threshold"])
                kwargs["confidence_threshold"] = min(1.0, max(0.0, threshold))
            except (TypeError, ValueError):
                logger.warning("Invalid confidence_threshold in settings, using default")
                del kwargs["confidence_threshold"]

        if "remote_timeout_seconds" in kwargs:
            try:
                timeout = float(kwargs["remote_timeout_seconds"])
                if timeout <= 0:
                    raise ValueError(timeout)
                kwargs["remote_timeout_seconds"] = timeout
            except (TypeError, ValueError):
                logger.warning("Invalid remote_timeout_seconds in settings, using default")
                del kwargs["remote_timeout_seconds"]

        if "enable_context_analysis" in kwargs:
            value = kwargs["enable_context_analysis"]
            if isinstance(value, str):
                value = value.lower() in _TRUE_VALUES
            kwargs["enable_context_analysis"] = bool(value)

        return cls(**kwargs)
