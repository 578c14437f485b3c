"""
Composite module for per-pixel filtering and blending.

This subpackage holds the numeric core the layer API is built on:

- :py:mod:`collage_tools.composite.color`: RGB <-> HSL conversion
- :py:mod:`collage_tools.composite.filters`: The per-pixel filter functions
- :py:mod:`collage_tools.composite.blend`: The alpha-compositing formula

Functions here operate on single pixels. Grid-level orchestration lives in
:py:class:`~collage_tools.api.layers.Layer` and
:py:class:`~collage_tools.api.project.Project`.
"""
