"""frame-colours — top-K exact dominant colours for every frame of a feed."""

from frame_colours.core.histogram import compute, count_colours, rank_colours
from frame_colours.core.pipeline import FrameAnalysisPipeline, PipelineStats
from frame_colours.core.types import ColorTriple, InvalidArgumentError, PixelBuffer, RankedResult

__all__ = [
    'ColorTriple',
    'FrameAnalysisPipeline',
    'InvalidArgumentError',
    'PipelineStats',
    'PixelBuffer',
    'RankedResult',
    'compute',
    'count_colours',
    'rank_colours',
]
