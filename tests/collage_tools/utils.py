import logging

from collage_tools.api.pixel import RGBPixel

logging.basicConfig(level=logging.DEBUG)

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (255, 255, 255, 0)


def solid(height, width, rgba=WHITE, max_value=255):
    """Grid of identical pixels."""
    return [
        [RGBPixel(*rgba, max_value=max_value) for _ in range(width)]
        for _ in range(height)
    ]


def grid(*rows):
    """Grid from rows of ``(r, g, b, a)`` tuples."""
    return [[RGBPixel(*rgba) for rgba in row] for row in rows]


def channels(pixels):
    """Rows of ``(r, g, b, a)`` tuples from a pixel grid."""
    return [[pixel.astuple() for pixel in row] for row in pixels]
