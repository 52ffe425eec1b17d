"""
Live detection for a Qt text field.

Debounces edits with a single-shot QTimer, runs each detection in a
background QThread, and emits published results back to the GUI thread.
Ordering and staleness are handled by ReactiveDetectionController.
"""

from typing import Callable, List, Optional

from PySide6.QtCore import QObject, QThread, QTimer, Signal

from reportguard.detection.config import DetectionConfig
from reportguard.detection.reactive import ReactiveDetectionController, SessionState
from reportguard.detection.types import DetectionResult


class DetectionWorker(QThread):
    """Background worker running one detection job."""

    def __init__(self, job: Callable[[], None], parent=None):
        super().__init__(parent)
        self._job = job

    def run(self):
        """Main worker thread."""
        self._job()


class _DebounceHandle:
    """Timer handle backed by the watcher's single debounce QTimer."""

    def __init__(self, watcher: "DetectionWatcher", callback: Callable[[], None]):
        self._watcher = watcher
        self._callback = callback

    def start(self) -> None:
        self._watcher._arm(self._callback)

    def cancel(self) -> None:
        self._watcher._disarm(self._callback)


class DetectionWatcher(QObject):
    """
    Watches text edits and publishes PII detection results.

    Usage:
        watcher = DetectionWatcher()
        watcher.result_ready.connect(preview.show_result)
        text_edit.textChanged.connect(
            lambda: watcher.set_text(text_edit.toPlainText())
        )

    Signals:
        result_ready(object): DetectionResult for the latest text
        detecting_changed(bool): True while a detection is running
    """

    result_ready = Signal(object)       # DetectionResult
    detecting_changed = Signal(bool)    # Detection in progress

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        detect_fn: Optional[Callable[[str], DetectionResult]] = None,
        debounce_ms: Optional[int] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)

        self._config = config or DetectionConfig()
        self._workers: List[DetectionWorker] = []

        # Debounce timer, restarted on every edit
        self._pending_callback: Optional[Callable[[], None]] = None
        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.setInterval(
            self._config.debounce_ms if debounce_ms is None else debounce_ms
        )
        self._debounce_timer.timeout.connect(self._on_debounce_timeout)

        self._controller = ReactiveDetectionController(
            detect_fn=detect_fn,
            on_result=self._on_result,
            config=self._config,
            debounce_ms=debounce_ms,
            timer_factory=lambda _delay, callback: _DebounceHandle(self, callback),
            submit=self._submit,
        )

    @property
    def controller(self) -> ReactiveDetectionController:
        return self._controller

    @property
    def is_detecting(self) -> bool:
        return self._controller.state is SessionState.DETECTING

    @property
    def latest_result(self) -> Optional[DetectionResult]:
        return self._controller.latest_result

    def set_text(self, text: str) -> int:
        """Feed the current field contents; returns the input version."""
        return self._controller.on_input(text)

    def flush(self) -> None:
        """Detect pending text immediately (e.g. before submitting a form)."""
        self._controller.flush()

    def stop(self) -> None:
        """Stop watching; results still in flight are dropped."""
        self._controller.close()
        self._debounce_timer.stop()
        for worker in list(self._workers):
            worker.wait()

    # --- controller hooks ---

    def _arm(self, callback: Callable[[], None]) -> None:
        self._pending_callback = callback
        self._debounce_timer.start()

    def _disarm(self, callback: Callable[[], None]) -> None:
        if self._pending_callback is callback:
            self._debounce_timer.stop()
            self._pending_callback = None

    def _on_debounce_timeout(self) -> None:
        callback, self._pending_callback = self._pending_callback, None
        if callback is not None:
            callback()

    def _submit(self, job: Callable[[], None]) -> None:
        worker = DetectionWorker(job, self)
        worker.finished.connect(lambda: self._on_worker_finished(worker))
        self._workers.append(worker)
        self.detecting_changed.emit(True)
        worker.start()

    def _on_worker_finished(self, worker: DetectionWorker) -> None:
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def _on_result(self, result: DetectionResult) -> None:
        # Runs on the worker thread; queued connections deliver on the GUI thread
        self.result_ready.emit(result)
        self.detecting_changed.emit(False)
