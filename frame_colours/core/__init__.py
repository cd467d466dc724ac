"""frame_colours.core — Foundation layer.

Contains the colour histogram, the frame analysis pipeline, swatch mapping,
the file-backed frame source, settings and the report builder.
This module has NO dependencies on frame_colours.techniques or frame_colours.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
