"""
Alpha compositing of two pixels.
"""
import logging

logger = logging.getLogger(__name__)


def merge(pixel, other):
    """
    Alpha-composite two RGB pixels and return the ``(r, g, b, a)`` channels.

    With ``alpha = a / max_value`` for each pixel, the formula is::

        alpha_out = alpha_other + alpha * (1 - alpha_other)
        c_out = alpha_other * c_other + c * alpha * (1 - alpha_other) / alpha_out

    The argument's alpha weights its own color directly, while ``pixel``
    contributes through the coverage ``other`` leaves open. An opaque
    ``other`` therefore comes through unchanged, and a fully transparent
    ``other`` leaves ``pixel``'s color. Flattening calls this with the
    accumulated image as ``pixel`` and the next layer up as ``other``.

    When both pixels are fully transparent the result keeps ``pixel``'s color
    with zero alpha.

    Channels are truncated to integers and alpha is rounded into
    ``[0, pixel.max_value]``.
    """
    alpha = pixel.a / pixel.max_value
    other_alpha = other.a / other.max_value
    alpha_out = other_alpha + alpha * (1 - other_alpha)
    if alpha_out == 0:
        return pixel.r, pixel.g, pixel.b, 0

    coverage = alpha * (1 - other_alpha) / alpha_out

    def _blend(c, other_c):
        return min(int(other_alpha * other_c + c * coverage), pixel.max_value)

    return (
        _blend(pixel.r, other.r),
        _blend(pixel.g, other.g),
        _blend(pixel.b, other.b),
        min(round(alpha_out * pixel.max_value), pixel.max_value),
    )
