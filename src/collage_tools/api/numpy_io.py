"""
Conversion between pixel grids and NumPy arrays.

Arrays are ``(height, width, 4)`` in RGBA channel order. Float arrays hold
values in ``[0, 1]``; integer arrays hold values in ``[0, max_value]``.
"""
import logging

import numpy as np

from collage_tools.api.pixel import RGBPixel
from collage_tools.composite.color import as_rgb
from collage_tools.constants import DEFAULT_MAX_VALUE

logger = logging.getLogger(__name__)


def get_array(pixels):
    """
    Stack a pixel grid into a float32 array normalized to ``[0, 1]``.

    HSL pixels are converted to RGB first. Each pixel is normalized by its own
    ``max_value``.
    """
    rows = [[as_rgb(pixel) for pixel in row] for row in pixels]
    if not rows or not rows[0]:
        return np.zeros((len(rows), 0, 4), dtype=np.float32)
    values = np.array(
        [[pixel.astuple() for pixel in row] for row in rows], dtype=np.float32
    )
    scale = np.array(
        [[pixel.max_value for pixel in row] for row in rows], dtype=np.float32
    )
    return values / scale[:, :, np.newaxis]


def get_pixels(array, max_value=DEFAULT_MAX_VALUE):
    """
    Build a grid of :py:class:`~collage_tools.api.pixel.RGBPixel` from an
    array of shape ``(height, width, channels)``.

    Three-channel arrays are treated as opaque. Float arrays are scaled from
    ``[0, 1]`` into ``[0, max_value]``.

    :raise ValueError: for arrays of unexpected shape.
    """
    array = np.asarray(array)
    if array.ndim == 2:
        array = np.repeat(array[:, :, np.newaxis], 3, axis=2)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError("Unsupported array shape: %s" % (array.shape,))
    if np.issubdtype(array.dtype, np.floating):
        array = np.round(np.clip(array, 0.0, 1.0) * max_value)
    array = np.clip(array.astype(np.int64), 0, max_value)
    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), max_value, dtype=np.int64)
        array = np.concatenate((array, alpha), axis=2)
    return [
        [RGBPixel(*(int(c) for c in value), max_value) for value in row]
        for row in array.tolist()
    ]
