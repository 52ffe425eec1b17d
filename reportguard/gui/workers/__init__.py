"""Background workers for the ReportGuard desktop preview."""

from .detection_watcher import DetectionWatcher, DetectionWorker

__all__ = ["DetectionWatcher", "DetectionWorker"]
