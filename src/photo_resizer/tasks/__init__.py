"""Background worker helpers for processing requests."""

from .processing_worker import ProcessingSignals, ProcessingWorker
from .scheduler import ProcessingScheduler

__all__ = [
    "ProcessingScheduler",
    "ProcessingSignals",
    "ProcessingWorker",
]
