"""Shared types for frame-colours: ColorTriple, PixelBuffer, FrameResult, Report, Technique."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, NamedTuple

import numpy as np
from PIL import Image


class InvalidArgumentError(ValueError):
    """Caller misuse, e.g. asking for a non-positive number of colours."""


def _check_channel(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or not 0 <= value <= 255:
        raise InvalidArgumentError(f'{name} must be an integer in 0..255, got {value!r}')


class _RGB(NamedTuple):
    red: int
    green: int
    blue: int


class ColorTriple(_RGB):
    """An exact 8-bit-per-channel RGB colour. Channels outside 0..255 are rejected."""

    __slots__ = ()

    def __new__(cls, red: int, green: int, blue: int):
        _check_channel('red', red)
        _check_channel('green', green)
        _check_channel('blue', blue)
        return super().__new__(cls, int(red), int(green), int(blue))

    @property
    def packed(self) -> int:
        """24-bit 0xRRGGBB key."""
        return (self.red << 16) | (self.green << 8) | self.blue

    @property
    def hex(self) -> str:
        return f'#{self.red:02x}{self.green:02x}{self.blue:02x}'

    @classmethod
    def from_packed(cls, value: int) -> ColorTriple:
        value = int(value)
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


# Top-K colours, most frequent first
RankedResult = list[ColorTriple]


class PixelBuffer:
    """An immutable height x width grid of packed 0xAARRGGBB pixels.

    The array is copied on construction and flagged read-only, so a producer
    cannot mutate a frame while it is being analysed.
    """

    __slots__ = ('_pixels',)

    def __init__(self, pixels: Any):
        arr = np.array(pixels, dtype=np.uint32, copy=True)
        if arr.size == 0:
            arr = arr.reshape(arr.shape if arr.ndim == 2 else (0, 0))
        if arr.ndim != 2:
            raise InvalidArgumentError(f'pixel buffer must be 2-D, got shape {arr.shape}')
        arr.flags.writeable = False
        self._pixels = arr

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        """Pack a Pillow image into 0xAARRGGBB pixels."""
        rgba = np.asarray(image.convert('RGBA'), dtype=np.uint32)
        if rgba.size == 0:
            return cls(np.zeros((image.height, image.width), dtype=np.uint32))
        packed = (rgba[..., 3] << 24) | (rgba[..., 0] << 16) | (rgba[..., 1] << 8) | rgba[..., 2]
        return cls(packed)

    @classmethod
    def from_rgb(cls, rows: Iterable[Sequence[tuple[int, int, int]]]) -> PixelBuffer:
        """Build a buffer from rows of (r, g, b) tuples, alpha fully opaque."""
        rows = [list(row) for row in rows]
        if not any(rows):
            return cls(np.zeros((len(rows), 0), dtype=np.uint32))
        try:
            rgb = np.asarray(rows, dtype=np.int64)
        except (TypeError, ValueError):
            raise InvalidArgumentError('rows must be equal-length sequences of (r, g, b)') from None
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise InvalidArgumentError(f'expected rows of (r, g, b) triples, got shape {rgb.shape}')
        if rgb.min() < 0 or rgb.max() > 255:
            raise InvalidArgumentError('channel values must be in 0..255')
        packed = 0xFF000000 | (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]
        return cls(packed.astype(np.uint32))

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> int:
        return int(self._pixels.size)

    def __repr__(self) -> str:
        return f'PixelBuffer({self.width}x{self.height})'


@dataclass
class FrameResult:
    """One completed analysis of one frame."""

    index: int
    colours: list[ColorTriple]
    counts: list[int] = field(default_factory=list)
    pixels: int = 0
    elapsed: float = 0.0


class Technique:
    """A self-registering analysis technique.

    Usage in a technique module:

        technique = Technique(name='top', help='Top-K colours of one frame')

        @technique.run
        def run(source, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, source: str, report: Report, args: Any) -> None:
        """Execute the technique's run function against a frame source path."""
        if self._run_fn is None:
            raise RuntimeError(f'Technique {self.name} has no run function')
        self._run_fn(source, report, args)


@dataclass
class Report:
    """Accumulates results from techniques for text/JSON output."""

    source: str = ''
    width: int = 0
    height: int = 0
    k: int = 5
    frames: list[FrameResult] = field(default_factory=list)
    submitted: int = 0
    dropped: int = 0
    failed: int = 0
    extras: dict[str, Any] = field(default_factory=dict)

    def add_frame(self, result: FrameResult) -> None:
        self.frames.append(result)

    def add(self, key: str, value: Any) -> None:
        """Attach technique-specific output, e.g. the path of a rendered file."""
        self.extras[key] = value
