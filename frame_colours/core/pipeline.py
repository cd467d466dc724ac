"""Single-flight frame analysis: at most one frame in flight, the rest dropped.

The producer calls submit() for every frame it has. If an analysis is already
running the frame is dropped on the spot (no queue), matching a keep-only-latest
camera feed. Accepted frames are analysed on one dedicated worker thread and
the ranked colours are handed to the on_result sink.

    with FrameAnalysisPipeline(on_result=print, k=5) as pipeline:
        for frame in frames:
            pipeline.submit(frame)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass

from frame_colours.core.histogram import check_k, compute
from frame_colours.core.types import PixelBuffer, RankedResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineStats:
    accepted: int = 0
    dropped: int = 0
    completed: int = 0
    failed: int = 0


class FrameAnalysisPipeline:
    """Drop-if-busy analysis of a stream of frames.

    Args:
        on_result: Sink called once per accepted frame that completes.
        k: Number of colours to rank per frame.
        analyse: The per-frame analysis, compute() unless replaced.
        sink_executor: If given, on_result is submitted to it instead of being
            called on the worker thread (e.g. to marshal onto a UI thread).
            The pipeline stays busy until the sink call returns, so results
            are delivered one at a time in acceptance order, and sink errors
            are logged and counted like analysis errors.
    """

    def __init__(
        self,
        on_result: Callable[[RankedResult], None],
        k: int = 5,
        analyse: Callable[[PixelBuffer, int], RankedResult] = compute,
        sink_executor: Executor | None = None,
    ):
        check_k(k)
        self.on_result = on_result
        self.k = k
        self._analyse = analyse
        self._sink_executor = sink_executor
        # Held from acceptance until the sink returns; acquire(blocking=False) is the accept-or-drop decision
        self._busy = threading.Lock()
        self._idle = threading.Condition()
        self._stats_lock = threading.Lock()
        self._accepted = 0
        self._dropped = 0
        self._completed = 0
        self._failed = 0
        self._closed = False
        self._worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix='frame-analysis')

    def __enter__(self) -> FrameAnalysisPipeline:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    @property
    def stats(self) -> PipelineStats:
        with self._stats_lock:
            return PipelineStats(self._accepted, self._dropped, self._completed, self._failed)

    def submit(self, frame: PixelBuffer) -> bool:
        """Offer a frame. Returns True if it was accepted, False if dropped."""
        if self._closed:
            raise RuntimeError('pipeline is closed')
        if not self._busy.acquire(blocking=False):
            with self._stats_lock:
                self._dropped += 1
            logger.debug('Dropped %r: analysis in progress', frame)
            return False
        with self._stats_lock:
            self._accepted += 1
        try:
            self._worker.submit(self._run, frame)
        except RuntimeError:
            # executor shut down between the closed check and here
            self._release()
            raise
        return True

    def _run(self, frame: PixelBuffer) -> None:
        try:
            result = self._analyse(frame, self.k)
        except Exception:
            self._fail('Frame analysis failed for %r', frame)
            return
        if self._sink_executor is None:
            self._deliver(frame, result)
            return
        try:
            # _deliver releases busy once the sink has returned
            self._sink_executor.submit(self._deliver, frame, result)
        except Exception:
            self._fail('Could not hand %r to the sink executor', frame)

    def _deliver(self, frame: PixelBuffer, result: RankedResult) -> None:
        try:
            self.on_result(result)
        except Exception:
            with self._stats_lock:
                self._failed += 1
            logger.exception('Result sink failed for %r', frame)
        else:
            with self._stats_lock:
                self._completed += 1
        finally:
            self._release()

    def _fail(self, msg: str, frame: PixelBuffer) -> None:
        try:
            with self._stats_lock:
                self._failed += 1
            logger.exception(msg, frame)
        finally:
            self._release()

    def _release(self) -> None:
        self._busy.release()
        with self._idle:
            self._idle.notify_all()

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no analysis is in flight. Returns False on timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: not self._busy.locked(), timeout=timeout)

    def close(self, wait: bool = True) -> None:
        """Stop accepting frames and shut the worker down."""
        self._closed = True
        self._worker.shutdown(wait=wait)
