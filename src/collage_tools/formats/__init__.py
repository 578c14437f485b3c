"""
File formats.

- :py:mod:`collage_tools.formats.ppm`: plain-text PPM images
- :py:mod:`collage_tools.formats.project_file`: saved projects

:py:func:`read_image` and :py:func:`write_image` pick a codec from the file
extension: ``.ppm`` uses the PPM codec, anything else goes through Pillow.
"""
import logging
import os

from collage_tools.api.pil_io import open_image
from collage_tools.constants import DEFAULT_MAX_VALUE
from collage_tools.formats import ppm

logger = logging.getLogger(__name__)


def _is_ppm(path):
    return os.path.splitext(str(path))[1].lower() == ".ppm"


def read_image(path, max_value=DEFAULT_MAX_VALUE):
    """
    Read an image file into a grid of RGB pixels.

    PPM files keep the max value stored in the file.

    :param path: filename.
    :param max_value: Maximum channel value for Pillow-decoded images.
    :return: `list` of rows of :py:class:`~collage_tools.api.pixel.RGBPixel`
    """
    if _is_ppm(path):
        with open(path, "r") as f:
            pixels, _ = ppm.read(f)
        return pixels
    return open_image(path, max_value)


def write_image(layer, path):
    """
    Write the display grid of a layer to an image file.

    :param layer: :py:class:`~collage_tools.api.layers.Layer`
    :param path: filename. The extension selects the format.
    """
    if _is_ppm(path):
        with open(path, "w") as f:
            ppm.write(f, layer)
    else:
        layer.topil().save(path)
    logger.debug("Wrote layer %r to %s" % (layer.name, path))
