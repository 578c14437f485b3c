"""
Filter implementations.

Channel filters mutate an :py:class:`~collage_tools.api.pixel.RGBPixel` in
place. Lightness filters combine the lightness of a pixel with the lightness
of its context pixel and are shared by both representations.
"""
import functools
import logging

from collage_tools.composite import color
from collage_tools.constants import Filter

logger = logging.getLogger(__name__)


def clamp(value, maximum):
    """Truncate toward zero and clip between [0, maximum]."""
    return min(max(int(value), 0), maximum)


# Channel filters
def normal(pixel):
    pass


def red_component(pixel):
    pixel.g = 0
    pixel.b = 0


def green_component(pixel):
    pixel.r = 0
    pixel.b = 0


def blue_component(pixel):
    pixel.r = 0
    pixel.g = 0


def _shift(pixel, amount):
    pixel.r = clamp(pixel.r + amount, pixel.max_value)
    pixel.g = clamp(pixel.g + amount, pixel.max_value)
    pixel.b = clamp(pixel.b + amount, pixel.max_value)


def brighten_value(pixel):
    _shift(pixel, pixel.value)


def darken_value(pixel):
    _shift(pixel, -pixel.value)


def brighten_luma(pixel):
    _shift(pixel, pixel.luma)


def darken_luma(pixel):
    _shift(pixel, -pixel.luma)


def brighten_intensity(pixel):
    _shift(pixel, pixel.intensity)


def darken_intensity(pixel):
    _shift(pixel, -pixel.intensity)


def difference(pixel):
    """Absolute channel difference with the pixel beneath. No-op without one."""
    if pixel.context is None:
        return
    below = color.as_rgb(pixel.context, pixel.max_value)
    pixel.r = abs(pixel.r - below.r)
    pixel.g = abs(pixel.g - below.g)
    pixel.b = abs(pixel.b - below.b)


# Lightness filters
def multiply(l, below):
    return l * below


def screen(l, below):
    return 1 - (1 - l) * (1 - below)


def _via_hsl(func):
    """Run a lightness filter on an RGB pixel through an HSL round trip."""

    @functools.wraps(func)
    def _filter(pixel):
        if pixel.context is None:
            return
        hsl = color.rgb_to_hsl(
            pixel.r, pixel.g, pixel.b, pixel.a, pixel.context, pixel.max_value
        )
        below = color.as_hsl(pixel.context)
        rgb = color.hsl_to_rgb(
            hsl.h, hsl.s, func(hsl.l, below.l), pixel.a, pixel.context, pixel.max_value
        )
        pixel.r, pixel.g, pixel.b = rgb.r, rgb.g, rgb.b

    return _filter


"""Lightness function table."""
LIGHTNESS_FUNC = {
    Filter.MULTIPLY: multiply,
    Filter.SCREEN: screen,
}

"""RGB filter function table."""
FILTER_FUNC = {
    Filter.NORMAL: normal,
    Filter.RED_COMPONENT: red_component,
    Filter.GREEN_COMPONENT: green_component,
    Filter.BLUE_COMPONENT: blue_component,
    Filter.BRIGHTEN_VALUE: brighten_value,
    Filter.DARKEN_VALUE: darken_value,
    Filter.BRIGHTEN_LUMA: brighten_luma,
    Filter.DARKEN_LUMA: darken_luma,
    Filter.BRIGHTEN_INTENSITY: brighten_intensity,
    Filter.DARKEN_INTENSITY: darken_intensity,
    Filter.DIFFERENCE: difference,
    Filter.MULTIPLY: _via_hsl(multiply),
    Filter.SCREEN: _via_hsl(screen),
}
