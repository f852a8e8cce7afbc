"""Dispatch processing requests to a thread pool with last-request-wins delivery."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from ..config import get_settings
from ..core.params import ProcessingParams
from ..core.pixel_buffer import ProcessedResult, SourceImage
from ..utils.logging import get_logger
from .processing_worker import ProcessingSignals, ProcessingWorker

_LOGGER = logging.getLogger(__name__)


class ProcessingScheduler(QObject):
    """Queue renders in the background and surface only the newest result.

    Every :meth:`submit` call receives a larger job id.  Work that was already
    started is never aborted; when an older job finishes after a newer one was
    submitted its result is dropped instead of being re-emitted.
    """

    resultReady = Signal(object, int)
    """Emitted with the latest :class:`ProcessedResult` and its job id."""

    failed = Signal(int, str)
    """Emitted when the latest job raised."""

    busyChanged = Signal(bool)
    """Emitted when the scheduler starts or stops having jobs in flight."""

    def __init__(
        self,
        pool: Optional[QThreadPool] = None,
        *,
        executor: Optional[str] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        get_logger()
        if pool is None:
            pool = QThreadPool(self)
            max_threads = get_settings().max_threads
            if max_threads is not None:
                pool.setMaxThreadCount(max_threads)
        self._pool = pool
        self._executor = executor
        self._latest_job_id = 0
        self._in_flight: dict[int, ProcessingSignals] = {}
        self._latest_result: Optional[ProcessedResult] = None

    # ------------------------------------------------------------------
    @property
    def latest_job_id(self) -> int:
        return self._latest_job_id

    @property
    def latest_result(self) -> Optional[ProcessedResult]:
        """The most recent result that was delivered, kept for export retries."""

        return self._latest_result

    def is_busy(self) -> bool:
        return bool(self._in_flight)

    def submit(self, source: SourceImage, params: ProcessingParams) -> int:
        """Start rendering *source* with *params* and return the job id."""

        self._latest_job_id += 1
        job_id = self._latest_job_id

        worker = ProcessingWorker(source, params, job_id, executor=self._executor)
        worker.signals.ready.connect(self._handle_ready)
        worker.signals.error.connect(self._handle_error)
        worker.signals.finished.connect(self._handle_finished)

        was_busy = self.is_busy()
        # Keep the signal object alive until the queued ``finished`` arrives.
        self._in_flight[job_id] = worker.signals
        if not was_busy:
            self.busyChanged.emit(True)

        _LOGGER.debug("Submitting processing job %d (%dx%d)", job_id, params.width, params.height)
        self._pool.start(worker)
        return job_id

    def wait_for_done(self, msecs: int = -1) -> bool:
        """Block until the pool is idle; queued signals still need an event loop."""

        return self._pool.waitForDone(msecs)

    # ------------------------------------------------------------------
    @Slot(object, int)
    def _handle_ready(self, result: ProcessedResult, job_id: int) -> None:
        if job_id != self._latest_job_id:
            _LOGGER.debug("Discarding stale result of job %d (latest is %d)", job_id, self._latest_job_id)
            return
        self._latest_result = result
        self.resultReady.emit(result, job_id)

    @Slot(int, str)
    def _handle_error(self, job_id: int, message: str) -> None:
        if job_id != self._latest_job_id:
            _LOGGER.debug("Ignoring failure of stale job %d: %s", job_id, message)
            return
        self.failed.emit(job_id, message)

    @Slot(int)
    def _handle_finished(self, job_id: int) -> None:
        self._in_flight.pop(job_id, None)
        if not self._in_flight:
            self.busyChanged.emit(False)


__all__ = ["ProcessingScheduler"]
