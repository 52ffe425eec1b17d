"""
Reactive detection controller for live-typing input.

Debounces keystrokes, runs detection off the input thread, and publishes
results in input-version order. A result is published only if it belongs
to the latest input the session has seen, so a slow detection for old
text can never overwrite a newer one.

State machine:

    IDLE/PENDING/DETECTING --input--> PENDING (timer restarted)
    PENDING --timer fires--> DETECTING
    DETECTING --result (current version)--> IDLE, published
    DETECTING --result (stale version)--> discarded
    any --empty/whitespace input--> IDLE, empty result published at once
    any --close()--> CLOSED, nothing published afterwards

Usage:
    controller = ReactiveDetectionController(on_result=show_preview)
    controller.on_input("Call me on 07911 123456")
    ...
    controller.close()
"""

import atexit
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .config import DetectionConfig
from .constants import MAX_DETECTOR_WORKERS
from .types import DetectionResult

logger = logging.getLogger(__name__)

# (delay_seconds, callback) -> timer handle with start() and cancel()
TimerFactory = Callable[[float, Callable[[], None]], Any]
# (fn) -> schedules fn on a worker
Submit = Callable[[Callable[[], None]], Any]


_SHARED_EXECUTOR: Optional[ThreadPoolExecutor] = None
_EXECUTOR_LOCK = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    """Get or create the shared thread pool."""
    global _SHARED_EXECUTOR
    with _EXECUTOR_LOCK:
        if _SHARED_EXECUTOR is None:
            _SHARED_EXECUTOR = ThreadPoolExecutor(
                max_workers=MAX_DETECTOR_WORKERS,
                thread_name_prefix="reactive_detect_"
            )
            # Ensure cleanup on process exit
            atexit.register(_shutdown_executor)
        return _SHARED_EXECUTOR


def _shutdown_executor():
    """Shutdown the shared executor on process exit."""
    global _SHARED_EXECUTOR
    if _SHARED_EXECUTOR is not None:
        _SHARED_EXECUTOR.shutdown(wait=False)
        _SHARED_EXECUTOR = None


def _default_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


def _default_submit(fn: Callable[[], None]):
    return _get_executor().submit(fn)


class SessionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    DETECTING = "detecting"
    CLOSED = "closed"


@dataclass
class ReactiveSession:
    """Mutable per-session bookkeeping, guarded by the controller lock."""
    latest_input_version: int = 0
    pending_timer: Optional[Any] = None
    in_flight_version: Optional[int] = None
    published_version: int = 0
    state: SessionState = SessionState.IDLE
    pending_text: str = ""


class ReactiveDetectionController:
    """
    Debounced, version-stamped detection for one input field.

    Args:
        detect_fn: Callable running one detection (defaults to a Detector
            built from ``config``)
        on_result: Called with each published DetectionResult. It runs
            with the session lock held so publications are strictly
            ordered; it must not block.
        config: Detection settings; supplies the debounce interval
        debounce_ms: Overrides ``config.debounce_ms``
        timer_factory: Creates debounce timers (default threading.Timer)
        submit: Schedules a detection run (default shared thread pool)
    """

    def __init__(
        self,
        detect_fn: Optional[Callable[[str], DetectionResult]] = None,
        on_result: Optional[Callable[[DetectionResult], None]] = None,
        config: Optional[DetectionConfig] = None,
        debounce_ms: Optional[int] = None,
        timer_factory: Optional[TimerFactory] = None,
        submit: Optional[Submit] = None,
    ):
        self.config = config or DetectionConfig()
        # Detector built here is owned by the session and closed with it
        self._detector = None
        if detect_fn is None:
            from .engine import Detector
            self._detector = Detector(self.config)
            detect_fn = self._detector.detect

        self._detect_fn = detect_fn
        self._on_result = on_result
        self._debounce_s = (self.config.debounce_ms if debounce_ms is None else debounce_ms) / 1000.0
        self._timer_factory = timer_factory or _default_timer
        self._submit = submit or _default_submit

        self._lock = threading.RLock()
        self._session = ReactiveSession()
        self._latest_result: Optional[DetectionResult] = None
        self._active_runs = 0

    # --- inspection ---

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._session.state

    @property
    def latest_version(self) -> int:
        with self._lock:
            return self._session.latest_input_version

    @property
    def published_version(self) -> int:
        with self._lock:
            return self._session.published_version

    @property
    def latest_result(self) -> Optional[DetectionResult]:
        """Most recently published result, if any."""
        with self._lock:
            return self._latest_result

    @property
    def is_closed(self) -> bool:
        return self.state is SessionState.CLOSED

    # --- events ---

    def on_input(self, text: str) -> int:
        """
        Register a new input value.

        Returns:
            The version assigned to this input (0 if the session is closed)
        """
        text = text or ""
        with self._lock:
            session = self._session
            if session.state is SessionState.CLOSED:
                return 0

            session.latest_input_version += 1
            version = session.latest_input_version
            self._cancel_timer()

            if not text.strip():
                session.in_flight_version = None
                session.pending_text = ""
                session.state = SessionState.IDLE
                self._publish(version, DetectionResult.empty(text))
                return version

            session.pending_text = text
            session.state = SessionState.PENDING
            timer = self._timer_factory(self._debounce_s, lambda: self._on_timer(version))
            session.pending_timer = timer
            timer.start()
            return version

    def flush(self) -> Optional[int]:
        """
        Start detection for pending input now instead of waiting.

        Returns:
            The version being detected, or None if nothing was pending
        """
        with self._lock:
            if self._session.state is not SessionState.PENDING:
                return None
            version = self._session.latest_input_version
            self._cancel_timer()
        self._on_timer(version)
        return version

    def close(self) -> None:
        """
        Cancel any pending timer; no result is published after this.

        A Detector the controller built for itself is closed here, or once
        the last in-flight run returns.
        """
        with self._lock:
            self._cancel_timer()
            self._session.state = SessionState.CLOSED
            self._session.in_flight_version = None
            release = self._active_runs == 0
        if release:
            self._release_detector()

    # --- internals ---

    def _cancel_timer(self) -> None:
        timer = self._session.pending_timer
        if timer is not None:
            timer.cancel()
            self._session.pending_timer = None

    def _on_timer(self, version: int) -> None:
        with self._lock:
            session = self._session
            if session.state is not SessionState.PENDING or version != session.latest_input_version:
                return
            session.pending_timer = None
            session.in_flight_version = version
            session.state = SessionState.DETECTING
            text = session.pending_text
            self._active_runs += 1

        try:
            self._submit(lambda: self._run(version, text))
        except Exception as e:
            # Executor unavailable (e.g. shut down at exit); nothing will run
            logger.error(f"Could not schedule detection v{version}: {type(e).__name__}: {e}")
            self._complete(version, DetectionResult.empty(text, degraded=True))
            self._finish_run()

    def _run(self, version: int, text: str) -> None:
        try:
            try:
                result = self._detect_fn(text)
            except Exception as e:
                # Detection failures degrade to an empty result for this version
                logger.error(f"Detection failed for input version {version}: {type(e).__name__}: {e}")
                result = DetectionResult.empty(text, degraded=True)
            self._complete(version, result)
        finally:
            self._finish_run()

    def _finish_run(self) -> None:
        with self._lock:
            self._active_runs -= 1
            release = self._active_runs == 0 and self._session.state is SessionState.CLOSED
        if release:
            self._release_detector()

    def _release_detector(self) -> None:
        with self._lock:
            detector, self._detector = self._detector, None
        if detector is not None:
            detector.close()
            logger.debug("Session detector closed")

    def _complete(self, version: int, result: DetectionResult) -> bool:
        with self._lock:
            session = self._session
            if session.state is SessionState.CLOSED:
                return False
            if version != session.latest_input_version or version <= session.published_version:
                logger.debug(
                    f"Discarding stale result v{version} "
                    f"(latest v{session.latest_input_version})"
                )
                return False
            session.in_flight_version = None
            session.state = SessionState.IDLE
            self._publish(version, result)
            return True

    def _publish(self, version: int, result: DetectionResult) -> None:
        # Caller holds the lock
        self._session.published_version = version
        self._latest_result = result
        logger.debug(f"Published v{version}: {result.pii_count} detections")
        if self._on_result is not None:
            try:
                self._on_result(result)
            except Exception as e:
                logger.error(f"Result callback failed: {type(e).__name__}: {e}")
