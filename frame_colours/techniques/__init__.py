"""Techniques: one module per CLI subcommand, found by frame_colours.registry."""
