"""File-backed frame source.

Stands in for a camera: every frame of a still or multi-frame image (GIF,
APNG, multi-page TIFF) is decoded with Pillow and packed into an immutable
PixelBuffer. pace() replays the frames at a fixed rate, like a live feed.
"""

import os
import time
from collections.abc import Iterable, Iterator

from PIL import Image, ImageSequence

from frame_colours.core.types import PixelBuffer


def iter_frames(path: str, max_frames: int | None = None) -> Iterator[PixelBuffer]:
    """Yield one PixelBuffer per frame in the image file."""
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    with Image.open(path) as image:
        for index, frame in enumerate(ImageSequence.Iterator(image)):
            if max_frames is not None and index >= max_frames:
                break
            yield PixelBuffer.from_image(frame)


def first_frame(path: str) -> PixelBuffer:
    for frame in iter_frames(path, max_frames=1):
        return frame
    raise ValueError(f'no frames in {path}')


def pace(frames: Iterable[PixelBuffer], fps: float) -> Iterator[PixelBuffer]:
    """Yield frames no faster than fps. fps <= 0 means no pacing."""
    if fps <= 0:
        yield from frames
        return
    interval = 1.0 / fps
    deadline = time.monotonic()
    for frame in frames:
        delay = deadline - time.monotonic()
        if delay > 0:
            time.sleep(delay)
        yield frame
        deadline += interval
