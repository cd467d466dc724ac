"""Map ranked colours onto a fixed row of display swatches.

Slot i always shows result[i]. When a frame has fewer distinct colours than
there are slots, the trailing slots are empty (None) rather than indexing
past the end of the result.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image, ImageDraw

from frame_colours.core.types import ColorTriple, InvalidArgumentError, RankedResult

EMPTY_FILL = (128, 128, 128)


@dataclass(frozen=True)
class Swatch:
    rank: int  # 1-based
    colour: ColorTriple

    @property
    def label(self) -> str:
        r, g, b = self.colour
        return f'{r},{g},{b}\n {self.rank}'

    @property
    def hex(self) -> str:
        return self.colour.hex


def assign_slots(result: RankedResult, slots: int = 5) -> list[Swatch | None]:
    """Return exactly `slots` entries; slot i holds result[i] or None."""
    if slots < 1:
        raise InvalidArgumentError(f'slots must be >= 1, got {slots}')
    return [Swatch(i + 1, ColorTriple(*result[i])) if i < len(result) else None for i in range(slots)]


def text_colour(colour: tuple[int, int, int]) -> tuple[int, int, int]:
    """Black on light swatches, white on dark ones (Rec. 601 luma)."""
    r, g, b = colour
    luma = 0.299 * r + 0.587 * g + 0.114 * b
    return (0, 0, 0) if luma >= 128 else (255, 255, 255)


def render_strip(result: RankedResult, slots: int = 5, size: int = 96) -> Image.Image:
    """Draw one labelled square per slot, left to right by rank."""
    swatches = assign_slots(result, slots)
    strip = Image.new('RGB', (size * slots, size), EMPTY_FILL)
    draw = ImageDraw.Draw(strip)
    for i, swatch in enumerate(swatches):
        if swatch is None:
            continue
        x0 = i * size
        draw.rectangle((x0, 0, x0 + size - 1, size - 1), fill=tuple(swatch.colour))
        draw.multiline_text((x0 + 6, 6), swatch.label, fill=text_colour(swatch.colour))
    return strip
