"""Worker that executes pipeline renders on a background thread."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QRunnable, Signal

from ..core.params import ProcessingParams
from ..core.pipeline import process
from ..core.pixel_buffer import SourceImage

_LOGGER = logging.getLogger(__name__)


class ProcessingSignals(QObject):
    """Signals emitted by :class:`ProcessingWorker`."""

    ready = Signal(object, int)
    """Emitted with the :class:`ProcessedResult` and the job identifier."""

    error = Signal(int, str)
    """Emitted if the pipeline raised; carries the job identifier and message."""

    finished = Signal(int)
    """Emitted once the worker has completed, even on failure."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)


class ProcessingWorker(QRunnable):
    """Run :func:`process` for one request off the interaction thread."""

    def __init__(
        self,
        source: SourceImage,
        params: ProcessingParams,
        job_id: int,
        *,
        executor: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.setAutoDelete(True)
        # Both inputs are immutable, so sharing them across threads is safe.
        self._source = source
        self._params = params
        self._job_id = int(job_id)
        self._executor = executor
        self.signals = ProcessingSignals()

    @property
    def job_id(self) -> int:
        return self._job_id

    def run(self) -> None:  # type: ignore[override]
        """Render the request and notify listeners when done."""

        try:
            result = process(self._source, self._params, executor=self._executor)
        except Exception as exc:
            _LOGGER.exception("Processing job %d failed", self._job_id)
            self.signals.error.emit(self._job_id, str(exc))
        else:
            self.signals.ready.emit(result, self._job_id)
        finally:
            self.signals.finished.emit(self._job_id)


__all__ = ["ProcessingSignals", "ProcessingWorker"]
