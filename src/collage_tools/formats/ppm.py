"""
Plain-text PPM (``P3``) codec.

The header is the magic ``P3``, the width, the height, and the maximum channel
value, followed by ``width * height`` whitespace separated ``r g b`` triples in
row-major order. Lines starting with ``#`` are comments.
"""
import logging

from collage_tools.api.pixel import RGBPixel
from collage_tools.composite.color import as_rgb

logger = logging.getLogger(__name__)

MAGIC = "P3"


def read(fp):
    """
    Read a PPM stream.

    Pixels are fully opaque.

    :param fp: text file-like object.
    :return: ``(pixels, max_value)`` where ``pixels`` is a `list` of rows of
        :py:class:`~collage_tools.api.pixel.RGBPixel`.
    :raise ValueError: if the stream is not a well-formed ``P3`` image.
    """
    tokens = []
    for line in fp:
        if line.lstrip().startswith("#"):
            continue
        tokens.extend(line.split())
    if not tokens or tokens[0] != MAGIC:
        raise ValueError("Invalid PPM file: plain PPM should begin with %s" % MAGIC)
    try:
        width, height, max_value = (int(token) for token in tokens[1:4])
        values = [int(token) for token in tokens[4:]]
    except ValueError:
        raise ValueError("Invalid PPM file: non-integer header or sample")
    if width <= 0 or height <= 0 or max_value <= 0:
        raise ValueError(
            "Invalid PPM header: width=%d height=%d max=%d" % (width, height, max_value)
        )
    if len(values) < 3 * width * height:
        raise ValueError(
            "Invalid PPM file: expected %d samples, got %d"
            % (3 * width * height, len(values))
        )
    logger.debug("Reading %dx%d PPM image, max value %d" % (width, height, max_value))

    pixels = []
    for i in range(height):
        row = []
        for j in range(width):
            start = 3 * (i * width + j)
            r, g, b = values[start : start + 3]
            row.append(RGBPixel(r, g, b, max_value, max_value))
        pixels.append(row)
    return pixels, max_value


def write(fp, layer):
    """
    Write the display grid of a layer as a PPM stream.

    Alpha is dropped. HSL pixels are written through their RGB conversion.

    :param fp: text file-like object.
    :param layer: :py:class:`~collage_tools.api.layers.Layer`
    """
    fp.write(dumps(layer))


def dumps(layer):
    """
    Render the display grid of a layer as PPM text.

    :return: `str`
    """
    pixels = [[as_rgb(pixel) for pixel in row] for row in layer.copy_pixels(True)]
    max_value = max(pixel.max_value for row in pixels for pixel in row)
    lines = [
        MAGIC,
        "# %s.ppm" % layer.name,
        "%d %d" % (layer.width, layer.height),
        "%d" % max_value,
    ]
    for row in pixels:
        lines.append(
            " ".join(
                "%d %d %d" % pixel.to_rgb(max_value).astuple()[:3] for pixel in row
            )
        )
    return "\n".join(lines) + "\n"
