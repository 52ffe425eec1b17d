"""Shared fixtures for ReportGuard tests."""

import os

import pytest

# Run Qt headless so GUI tests work without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from reportguard.detection.config import DetectionConfig
from reportguard.feedback import InMemoryFeedbackRecorder, set_default_recorder


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep REPORTGUARD_* settings from the host out of every test."""
    for name in (
        "REPORTGUARD_BACKEND",
        "REPORTGUARD_DEBOUNCE_MS",
        "REPORTGUARD_CONFIDENCE_THRESHOLD",
        "REPORTGUARD_ENABLE_CONTEXT_ANALYSIS",
        "REPORTGUARD_REMOTE_URL",
        "REPORTGUARD_API_KEY",
        "REPORTGUARD_REMOTE_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def local_config():
    """Local backend with no debounce."""
    return DetectionConfig(backend="local", debounce_ms=0)


@pytest.fixture
def feedback_sink():
    """In-memory recorder installed as the default, removed afterwards."""
    recorder = InMemoryFeedbackRecorder()
    set_default_recorder(recorder)
    yield recorder
    set_default_recorder(None)
