"""Top-K exact colours of a single frame, with pixel counts.

Decodes the first frame of the image, counts every exact (R,G,B) triple and
reports the K most frequent, most frequent first. Ties are ordered by
ascending (R,G,B). No binning: near-identical shades count separately.

Example:
    frame-colours top ./tmp photo.png -k 5
    frame-colours top ./tmp photo.png --json
"""

import time

from frame_colours.core.frames import first_frame
from frame_colours.core.histogram import rank_colours
from frame_colours.core.types import FrameResult, Report, Technique

technique = Technique(
    name='top',
    help='Top-K exact colours of the first frame, with counts.',
)


@technique.run
def run(source: str, report: Report, args) -> None:
    frame = first_frame(source)
    report.width, report.height = frame.width, frame.height

    started = time.perf_counter()
    ranked = rank_colours(frame, report.k)
    elapsed = time.perf_counter() - started

    report.add_frame(
        FrameResult(
            index=0,
            colours=[colour for colour, _ in ranked],
            counts=[count for _, count in ranked],
            pixels=frame.size,
            elapsed=elapsed,
        )
    )
