"""Render the top-K colours of a frame as a strip of labelled swatches.

Slot i is filled with the i-th most frequent colour and labelled
"R,G,B" over its rank. Slots beyond the number of distinct colours are
left grey. Saves to <tmp_dir>/swatches.png.

Example:
    frame-colours swatches ./tmp photo.png --slots 5
"""

import os

from frame_colours.core.frames import first_frame
from frame_colours.core.histogram import compute
from frame_colours.core.swatches import assign_slots, render_strip
from frame_colours.core.types import FrameResult, Report, Technique

technique = Technique(
    name='swatches',
    help='Render the top-K colours of the first frame as a labelled swatch PNG.',
)


@technique.run
def run(source: str, report: Report, args) -> None:
    slots = getattr(args, 'slots', None) or report.k
    frame = first_frame(source)
    report.width, report.height = frame.width, frame.height

    result = compute(frame, report.k)
    report.add_frame(FrameResult(index=0, colours=result, pixels=frame.size))

    os.makedirs(args.tmp_dir, exist_ok=True)
    path = os.path.join(args.tmp_dir, 'swatches.png')
    render_strip(result, slots=slots).save(path)
    report.add('file', path)
    report.add('empty_slots', sum(1 for s in assign_slots(result, slots) if s is None))
