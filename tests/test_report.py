"""Tests for frame_colours.core.report — text and JSON output."""

import json

from frame_colours.core.report import format_json, format_text
from frame_colours.core.types import ColorTriple, FrameResult, Report

RED = ColorTriple(255, 0, 0)
BLUE = ColorTriple(0, 0, 255)


def _report() -> Report:
    report = Report(source='/tmp/clip.gif', width=4, height=2, k=5)
    report.add_frame(FrameResult(index=0, colours=[RED, BLUE], counts=[6, 2], pixels=8, elapsed=0.0012))
    return report


class TestFormatText:
    def test_header(self):
        assert format_text(_report()).splitlines()[0] == 'frame-colours: clip.gif (4×2) top-5'

    def test_ranked_lines(self):
        text = format_text(_report())
        assert '  1. #ff0000  255,0,0  6 px  75.0%' in text
        assert '  2. #0000ff  0,0,255  2 px  25.0%' in text

    def test_without_counts(self):
        report = Report(source='a.png', width=1, height=1)
        report.add_frame(FrameResult(index=3, colours=[RED]))
        text = format_text(report)
        assert '── frame 3' in text
        assert '  1. #ff0000  255,0,0' in text
        assert 'px' not in text

    def test_empty_frame(self):
        report = Report(source='a.png')
        report.add_frame(FrameResult(index=0, colours=[]))
        assert '(no pixels)' in format_text(report)

    def test_stream_summary(self):
        report = _report()
        report.submitted = 10
        report.dropped = 9
        assert 'frames 10  analysed 1  dropped 9  failed 0' in format_text(report)

    def test_extras(self):
        report = _report()
        report.add('file', 'tmp/swatches.png')
        assert 'file: tmp/swatches.png' in format_text(report)


class TestFormatJson:
    def test_structure(self):
        obj = json.loads(format_json(_report()))
        assert obj['source'] == '/tmp/clip.gif'
        assert obj['dimensions'] == {'width': 4, 'height': 2}
        assert obj['k'] == 5
        top = obj['frames'][0]['colours'][0]
        assert top == {'rank': 1, 'hex': '#ff0000', 'r': 255, 'g': 0, 'b': 0, 'count': 6, 'pct': 75.0}

    def test_no_summary_for_single_frame(self):
        assert 'summary' not in json.loads(format_json(_report()))

    def test_summary(self):
        report = _report()
        report.submitted = 3
        report.dropped = 2
        obj = json.loads(format_json(report))
        assert obj['summary'] == {'submitted': 3, 'analysed': 1, 'dropped': 2, 'failed': 0}
