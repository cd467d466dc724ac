"""Exact-colour histogram and top-K ranking for a single pixel buffer.

Every pixel is masked to its 24-bit 0xRRGGBB key and counted. Colours are
never binned or clustered: two pixels count as the same colour only when all
three channels are equal. Ranking is by descending count, with ties broken by
ascending (R, G, B) so that the output is reproducible.
"""

import numpy as np

from frame_colours.core.types import ColorTriple, InvalidArgumentError, PixelBuffer, RankedResult

RGB_MASK = 0xFFFFFF


def check_k(k: int) -> None:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidArgumentError(f'k must be a positive integer, got {k!r}')
    if k < 1:
        raise InvalidArgumentError(f'k must be a positive integer, got {k}')


def _unique_keys(buffer: PixelBuffer) -> tuple[np.ndarray, np.ndarray]:
    """Return (keys, counts) with keys sorted ascending."""
    keys = buffer.pixels.ravel() & np.uint32(RGB_MASK)
    return np.unique(keys, return_counts=True)


def count_colours(buffer: PixelBuffer) -> dict[ColorTriple, int]:
    """Count occurrences of every distinct colour in the buffer."""
    keys, counts = _unique_keys(buffer)
    return {ColorTriple.from_packed(key): int(count) for key, count in zip(keys, counts)}


def rank_colours(buffer: PixelBuffer, k: int) -> list[tuple[ColorTriple, int]]:
    """Return up to k (colour, count) pairs, most frequent first."""
    check_k(k)
    if buffer.size == 0:
        return []
    keys, counts = _unique_keys(buffer)
    # keys are ascending, so a stable sort on -count leaves ties in (R, G, B) order
    order = np.argsort(-counts.astype(np.int64), kind='stable')[:k]
    return [(ColorTriple.from_packed(keys[i]), int(counts[i])) for i in order]


def compute(buffer: PixelBuffer, k: int = 5) -> RankedResult:
    """Return the k most frequent exact colours in the buffer.

    Fewer than k colours are returned when the buffer holds fewer distinct
    colours; an empty buffer yields an empty list. Raises
    InvalidArgumentError when k is not a positive integer.
    """
    return [colour for colour, _count in rank_colours(buffer, k)]
