"""
collage-tools: Layered image compositing in Python.

A project is an ordered stack of layers, each a grid of semi-transparent
pixels with an assigned filter. Flattening re-applies every layer's filter and
alpha-composites the layers from bottom to top into a single layer.

Basic usage::

    from collage_tools import Project

    project = Project('poster', height=480, width=640)
    project.add_layer('photo')
    project.add_image_to_layer('photo', open_image('photo.png'), 0, 0)
    project.set_filter('brighten-luma', 'photo')

    # Export to PNG
    project.composite().save('poster.png')

Architecture:

- :py:mod:`collage_tools.api`: Project, Layer, and pixel classes (primary interface)
- :py:mod:`collage_tools.composite`: Color conversion, filters, and blending
- :py:mod:`collage_tools.formats`: PPM and project file codecs
- :py:mod:`collage_tools.script`: Line-oriented command scripts
"""

from collage_tools.api.layers import Layer
from collage_tools.api.pil_io import open_image
from collage_tools.api.pixel import HSLPixel, RGBPixel
from collage_tools.api.project import Project
from collage_tools.constants import Filter
from collage_tools.version import __version__

__all__ = [
    "Filter",
    "HSLPixel",
    "Layer",
    "Project",
    "RGBPixel",
    "open_image",
    "__version__",
]
