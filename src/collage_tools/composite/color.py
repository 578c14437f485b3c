"""
Color space conversion between the RGB and HSL pixel representations.

Both directions preserve alpha and carry the given context pixel into the new
pixel unchanged.
"""

import logging

from collage_tools.constants import DEFAULT_MAX_VALUE, HSL_MAX_VALUE

logger = logging.getLogger(__name__)


def rgb_to_hsl(r, g, b, a, context=None, max_value=DEFAULT_MAX_VALUE):
    """
    Convert RGB channels in ``[0, max_value]`` into an HSL pixel where

    - ``0 <= h < 360``
    - ``0 <= s <= 1``
    - ``0 <= l <= 1``

    :param context: Pixel beneath, attached to the result as is.
    :param max_value: Scale of the given channels.
    :return: :py:class:`~collage_tools.api.pixel.HSLPixel`
    """
    # Import at runtime to avoid circular imports
    from collage_tools.api.pixel import HSLPixel

    h, s, l = _rgb_to_hsl(r / max_value, g / max_value, b / max_value)
    return HSLPixel(h, s, l, a, max(HSL_MAX_VALUE, max_value), context)


def hsl_to_rgb(h, s, l, a, context=None, max_value=DEFAULT_MAX_VALUE):
    """
    Convert HSL values into an RGB pixel with channels in ``[0, max_value]``.

    Channels are truncated, not rounded.

    :param context: Pixel beneath, attached to the result as is.
    :param max_value: Scale of the resulting channels.
    :return: :py:class:`~collage_tools.api.pixel.RGBPixel`
    """
    from collage_tools.api.pixel import RGBPixel

    r, g, b = (
        min(int(_hsl_channel(h, s, l, n) * max_value), max_value) for n in (0, 8, 4)
    )
    return RGBPixel(r, g, b, min(a, max_value), max_value, context)


def as_rgb(pixel, max_value=None):
    """
    Return ``pixel`` as an RGB pixel on the ``max_value`` scale.

    An RGB pixel already on that scale, or any RGB pixel when ``max_value`` is
    `None`, is returned itself. HSL pixels convert to ``[0, 255]`` unless
    ``max_value`` is given.
    """
    if pixel.kind == "rgb":
        if max_value is None or max_value == pixel.max_value:
            return pixel
        return pixel.to_rgb(max_value)
    if max_value is None:
        max_value = DEFAULT_MAX_VALUE
    return hsl_to_rgb(pixel.h, pixel.s, pixel.l, pixel.a, pixel.context, max_value)


def as_hsl(pixel):
    """Return ``pixel`` itself if HSL, otherwise its HSL conversion."""
    if pixel.kind == "hsl":
        return pixel
    return rgb_to_hsl(
        pixel.r, pixel.g, pixel.b, pixel.a, pixel.context, pixel.max_value
    )


def _rgb_to_hsl(r, g, b):
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    delta = c_max - c_min

    l = (c_max + c_min) / 2
    if delta == 0:
        return 0, 0.0, l

    s = min(1.0, delta / (1 - abs(2 * l - 1)))
    if c_max == r:
        hue = ((g - b) / delta) % 6
    elif c_max == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    return int(hue * 60) % 360, s, l


def _hsl_channel(h, s, l, n):
    # Evaluate one channel of the HSL hexagon, phase n on the mod-12 wheel.
    k = (n + h / 30) % 12
    a = s * min(l, 1 - l)
    return l - a * max(-1, min(k - 3, 9 - k, 1))
