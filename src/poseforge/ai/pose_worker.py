"""Background thread that runs one pose synthesis request."""

import logging

from PySide6.QtCore import QThread, Signal

from poseforge.ai.pose_service import PoseSynthesizer

logger = logging.getLogger(__name__)


class PoseSynthesisWorker(QThread):
    """Runs :meth:`PoseSynthesizer.synthesize` off the UI thread.

    ``pose_ready(seq, result)`` is delivered through a queued connection, so
    the receiver runs on the UI thread and can touch state directly. The
    inherited ``finished`` signal still fires once :meth:`run` returns.
    """

    pose_ready = Signal(int, object)

    def __init__(self, synthesizer: PoseSynthesizer, prompt: str, seq: int, parent=None):
        super().__init__(parent)
        self._synthesizer = synthesizer
        self._prompt = prompt
        self.seq = seq

    def run(self) -> None:
        logger.debug("Worker %d started", self.seq)
        result = self._synthesizer.synthesize(self._prompt)
        self.pose_ready.emit(self.seq, result)


def stop_workers(workers, timeout_ms: int) -> None:
    """Wait up to *timeout_ms* for each worker, then terminate stragglers.

    A QThread destroyed while still running aborts the process, so every
    worker must have stopped by the time this returns.
    """
    for worker in list(workers):
        if worker.wait(timeout_ms) or not worker.isRunning():
            continue
        logger.warning("Worker %d still running after %d ms; terminating", worker.seq, timeout_ms)
        worker.terminate()
        worker.wait()
