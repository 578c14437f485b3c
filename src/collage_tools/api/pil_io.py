"""
PIL IO module.
"""
import logging

import numpy as np
from PIL import Image

from collage_tools.api.numpy_io import get_array, get_pixels
from collage_tools.constants import DEFAULT_MAX_VALUE

logger = logging.getLogger(__name__)


def convert_pil_to_pixels(image, max_value=DEFAULT_MAX_VALUE):
    """
    Convert a PIL Image to a grid of RGB pixels.

    Images without an alpha band become fully opaque.

    :return: `list` of rows of :py:class:`~collage_tools.api.pixel.RGBPixel`
    """
    if image.mode != "RGBA":
        logger.debug("Converting %s image to RGBA" % image.mode)
        image = image.convert("RGBA")
    array = np.asarray(image, dtype=np.float32) / 255.0
    return get_pixels(array, max_value)


def convert_pixels_to_pil(pixels):
    """
    Convert a grid of pixels to an ``RGBA`` PIL Image.
    """
    array = get_array(pixels)
    return Image.fromarray(np.round(255 * array).astype(np.uint8))


def open_image(fp, max_value=DEFAULT_MAX_VALUE):
    """
    Read any image Pillow can decode into a grid of RGB pixels.

    :param fp: filename or file-like object.
    """
    with Image.open(fp) as image:
        image.load()
        logger.debug("Opened %s image of size %dx%d" % ((image.mode,) + image.size))
        return convert_pil_to_pixels(image, max_value)
