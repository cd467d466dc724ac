"""Replay every frame of an image through the drop-if-busy pipeline.

A producer thread paces the frames of a multi-frame image (GIF, APNG,
TIFF) at --fps and submits each one. While an analysis is in flight any
new frame is dropped, never queued, so the report shows how many frames
a live feed at that rate would actually get analysed.

Example:
    frame-colours stream ./tmp clip.gif --fps 30 -k 5
    frame-colours stream ./tmp clip.gif --max-frames 100 --json
"""

import logging
import threading
import time

from frame_colours.core.frames import iter_frames, pace
from frame_colours.core.histogram import compute
from frame_colours.core.pipeline import FrameAnalysisPipeline
from frame_colours.core.types import FrameResult, PixelBuffer, RankedResult, Report, Technique

logger = logging.getLogger(__name__)

technique = Technique(
    name='stream',
    help='Replay all frames through the single-flight pipeline; report results and drops.',
)


class _Collector:
    """Tags each frame with its index and turns delivered results into FrameResults.

    analyse() and on_result() both run on the pipeline's single worker, one
    frame at a time, so _current always belongs to the frame being delivered.
    """

    def __init__(self) -> None:
        self.results: list[FrameResult] = []
        self._indices: dict[int, int] = {}
        self._current = (-1, 0, 0.0)  # (index, pixels, elapsed)
        self._lock = threading.Lock()

    def tag(self, frame: PixelBuffer, index: int) -> None:
        with self._lock:
            self._indices[id(frame)] = index

    def untag(self, frame: PixelBuffer) -> None:
        with self._lock:
            self._indices.pop(id(frame), None)

    def analyse(self, frame: PixelBuffer, k: int) -> RankedResult:
        with self._lock:
            index = self._indices.pop(id(frame), -1)
        started = time.perf_counter()
        result = compute(frame, k)
        self._current = (index, frame.size, time.perf_counter() - started)
        return result

    def on_result(self, result: RankedResult) -> None:
        index, pixels, elapsed = self._current
        with self._lock:
            self.results.append(FrameResult(index=index, colours=result, pixels=pixels, elapsed=elapsed))


@technique.run
def run(source: str, report: Report, args) -> None:
    fps = getattr(args, 'fps', None) or 0.0
    max_frames = getattr(args, 'max_frames', None)
    frames = iter_frames(source, max_frames=max_frames)
    collector = _Collector()
    submitted = 0
    errors: list[Exception] = []

    def produce(pipeline: FrameAnalysisPipeline) -> None:
        nonlocal submitted
        try:
            for index, frame in enumerate(pace(frames, fps)):
                if index == 0:
                    report.width, report.height = frame.width, frame.height
                submitted += 1
                collector.tag(frame, index)
                if not pipeline.submit(frame):
                    collector.untag(frame)
        except Exception as e:
            errors.append(e)

    with FrameAnalysisPipeline(on_result=collector.on_result, k=report.k, analyse=collector.analyse) as pipeline:
        producer = threading.Thread(target=produce, args=(pipeline,), name='frame-producer')
        producer.start()
        producer.join()
        pipeline.wait_idle()
        stats = pipeline.stats

    if errors:
        raise errors[0]

    logger.info('Streamed %d frames: %d analysed, %d dropped', submitted, stats.completed, stats.dropped)
    report.submitted = submitted
    report.dropped = stats.dropped
    report.failed = stats.failed
    for result in collector.results:
        report.add_frame(result)
