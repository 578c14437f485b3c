"""
Pixel module.

A pixel is a color sample with alpha in one of two interchangeable
representations:

- :py:class:`RGBPixel`: integer ``r``, ``g``, ``b``, ``a`` in ``[0, max_value]``
- :py:class:`HSLPixel`: integer hue in degrees, float saturation and lightness
  in ``[0, 1]``, and integer alpha

Each pixel may reference a *context* pixel, the pixel occupying the same
column in the row directly beneath it within a layer. The reference is not
owned: copies share it, and :py:class:`~collage_tools.api.layers.Layer`
re-derives it from its grid every time the display grid is rebuilt.

Example::

    from collage_tools.api.pixel import RGBPixel

    top = RGBPixel(200, 40, 40, 255)
    top.context = RGBPixel(10, 10, 10, 255)
    top.apply("difference")
    str(top)  # '190 30 30 255'
"""
import logging

from attrs import define, field, evolve, setters

from collage_tools import validators
from collage_tools.composite import blend, color
from collage_tools.composite.filters import FILTER_FUNC, LIGHTNESS_FUNC
from collage_tools.constants import DEFAULT_MAX_VALUE, HSL_MAX_VALUE, Filter

logger = logging.getLogger(__name__)


def _positive(inst, attr, value):
    if value <= 0:
        raise ValueError("'%s' must be positive, got %r" % (attr.name, value))


@define(eq=True)
class RGBPixel:
    """
    Pixel with integer red, green, blue, and alpha channels.

    .. py:attribute:: max_value

        Upper bound of every channel. Immutable.

    .. py:attribute:: context

        Pixel beneath this one, or `None`.
    """

    r: int = field(validator=validators.channel)
    g: int = field(validator=validators.channel)
    b: int = field(validator=validators.channel)
    a: int = field(validator=validators.channel)
    max_value: int = field(
        default=DEFAULT_MAX_VALUE, validator=_positive, on_setattr=setters.frozen
    )
    context: object = field(default=None, eq=False, repr=False)

    @property
    def kind(self):
        """Representation of this pixel, ``'rgb'``."""
        return "rgb"

    @property
    def value(self):
        """Largest of the three color channels."""
        return max(self.r, self.g, self.b)

    @property
    def luma(self):
        """Weighted sum ``0.2126 r + 0.7152 g + 0.0722 b``."""
        return 0.2126 * self.r + 0.7152 * self.g + 0.0722 * self.b

    @property
    def intensity(self):
        """Average of the three color channels, integer division."""
        return (self.r + self.g + self.b) // 3

    def apply(self, filter):
        """
        Apply a filter to this pixel in place.

        :param filter: :py:class:`~collage_tools.constants.Filter` or its
            identifier.
        :raise ValueError: if the filter is unknown.
        """
        FILTER_FUNC[Filter.get(filter)](self)

    def merge(self, other):
        """
        Alpha-composite ``other`` with this pixel into a new RGB pixel.

        See :py:func:`collage_tools.composite.blend.merge` for the formula.
        """
        other = color.as_rgb(other, self.max_value)
        r, g, b, a = blend.merge(self, other)
        return RGBPixel(r, g, b, a, self.max_value, self.context)

    def copy(self):
        """Copy the channels. The context reference is shared, not copied."""
        return evolve(self)

    def to_hsl(self):
        """:py:class:`HSLPixel` with the same color, alpha, and context."""
        return color.rgb_to_hsl(
            self.r, self.g, self.b, self.a, self.context, self.max_value
        )

    def to_rgb(self, max_value=None):
        """
        Copy on the ``max_value`` scale. Rescaled channels are floored.
        """
        if max_value is None or max_value == self.max_value:
            return self.copy()
        return RGBPixel(
            *(min(c * max_value // self.max_value, max_value) for c in self.astuple()),
            max_value,
            self.context,
        )

    def astuple(self):
        return (self.r, self.g, self.b, self.a)

    def __str__(self):
        return "%d %d %d %d" % self.astuple()


@define(eq=True)
class HSLPixel:
    """
    Pixel with hue, saturation, lightness, and alpha.

    Alpha is not used by HSL math; it is carried so that conversions back to
    RGB preserve it.
    """

    h: int = field(validator=validators.range_(0, 360))
    s: float = field(validator=validators.range_(0, 1))
    l: float = field(validator=validators.range_(0, 1))  # noqa: E741
    a: int = field(default=DEFAULT_MAX_VALUE)
    max_value: int = field(
        default=HSL_MAX_VALUE, validator=_positive, on_setattr=setters.frozen
    )
    context: object = field(default=None, eq=False, repr=False)

    @a.validator
    def _check_alpha(self, attr, value):
        validators.channel(self, attr, value)

    @property
    def kind(self):
        """Representation of this pixel, ``'hsl'``."""
        return "hsl"

    @property
    def value(self):
        return self.to_rgb().value

    @property
    def luma(self):
        return self.to_rgb().luma

    @property
    def intensity(self):
        return self.to_rgb().intensity

    def apply(self, filter):
        """
        Apply a filter to this pixel in place.

        Lightness filters work on ``l`` directly. Every other filter runs on
        the RGB conversion, and the result is converted back.
        """
        filter = Filter.get(filter)
        if filter is Filter.NORMAL or (filter.needs_context and self.context is None):
            return
        if filter in LIGHTNESS_FUNC:
            below = color.as_hsl(self.context)
            self.l = LIGHTNESS_FUNC[filter](self.l, below.l)
        else:
            rgb = self.to_rgb()
            rgb.apply(filter)
            converted = rgb.to_hsl()
            self.h, self.s, self.l = converted.h, converted.s, converted.l

    def merge(self, other):
        """Merge in RGB space. The result is an :py:class:`RGBPixel`."""
        return self.to_rgb().merge(other)

    def copy(self):
        """Copy the values. The context reference is shared, not copied."""
        return evolve(self)

    def to_rgb(self, max_value=DEFAULT_MAX_VALUE):
        """:py:class:`RGBPixel` with the same color, alpha, and context."""
        return color.hsl_to_rgb(
            self.h, self.s, self.l, self.a, self.context, max_value
        )

    def to_hsl(self):
        return self.copy()

    def astuple(self):
        return (self.h, self.s, self.l, self.a)

    def __str__(self):
        return "%d %s %s" % (self.h, self.s, self.l)
