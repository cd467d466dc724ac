"""Report builder — text and JSON output for frame-colours results."""

import json
import os
from typing import Any

from frame_colours.core.types import FrameResult, Report


def _frame_lines(frame: FrameResult) -> list[str]:
    lines = [f'── frame {frame.index} ({frame.elapsed * 1000:.1f} ms)']
    if not frame.colours:
        lines.append('  (no pixels)')
    for rank, colour in enumerate(frame.colours, start=1):
        r, g, b = colour
        line = f'  {rank}. {colour.hex}  {r},{g},{b}'
        if rank <= len(frame.counts) and frame.pixels:
            count = frame.counts[rank - 1]
            line += f'  {count} px  {count / frame.pixels * 100:.1f}%'
        lines.append(line)
    return lines


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'frame-colours: {os.path.basename(report.source)} ({report.width}×{report.height}) top-{report.k}']
    lines.append('')
    for frame in report.frames:
        lines.extend(_frame_lines(frame))
        lines.append('')

    if report.submitted:
        lines.append(
            f'frames {report.submitted}  analysed {len(report.frames)}  '
            f'dropped {report.dropped}  failed {report.failed}'
        )
    for key, value in report.extras.items():
        lines.append(f'{key}: {value}')
    return '\n'.join(lines)


def _frame_obj(frame: FrameResult) -> dict[str, Any]:
    colours = []
    for i, colour in enumerate(frame.colours):
        entry: dict[str, Any] = {'rank': i + 1, 'hex': colour.hex, 'r': colour.red, 'g': colour.green, 'b': colour.blue}
        if i < len(frame.counts):
            entry['count'] = frame.counts[i]
            if frame.pixels:
                entry['pct'] = round(frame.counts[i] / frame.pixels * 100, 1)
        colours.append(entry)
    return {'index': frame.index, 'elapsed_ms': round(frame.elapsed * 1000, 2), 'colours': colours}


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'source': report.source,
        'dimensions': {'width': report.width, 'height': report.height},
        'k': report.k,
        'frames': [_frame_obj(f) for f in report.frames],
    }
    if report.submitted:
        obj['summary'] = {
            'submitted': report.submitted,
            'analysed': len(report.frames),
            'dropped': report.dropped,
            'failed': report.failed,
        }
    obj.update(report.extras)
    return json.dumps(obj, indent=2)
