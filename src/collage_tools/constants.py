"""
Various constants for collage_tools
"""
from enum import Enum

#: Default maximum channel value of an RGB pixel.
DEFAULT_MAX_VALUE = 255

#: Default maximum value of an HSL pixel, the hue range in degrees.
HSL_MAX_VALUE = 360

#: Name of the implicit bottom layer of every new project.
BACKGROUND_NAME = "background"


class Filter(Enum):
    """
    Per-pixel filters a layer can be assigned.

    Values are the canonical identifiers used in project files and command
    scripts.
    """
    NORMAL = "normal"
    RED_COMPONENT = "red-component"
    GREEN_COMPONENT = "green-component"
    BLUE_COMPONENT = "blue-component"
    BRIGHTEN_VALUE = "brighten-value"
    DARKEN_VALUE = "darken-value"
    BRIGHTEN_LUMA = "brighten-luma"
    DARKEN_LUMA = "darken-luma"
    BRIGHTEN_INTENSITY = "brighten-intensity"
    DARKEN_INTENSITY = "darken-intensity"
    DIFFERENCE = "difference"
    MULTIPLY = "multiply"
    SCREEN = "screen"

    @classmethod
    def get(cls, value):
        """
        Look up a filter by member or identifier.

        :raise ValueError: for unknown identifiers.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError("No filter with that name exists: %r" % (value,))

    @property
    def needs_context(self):
        """Whether the filter reads the pixel beneath."""
        return self in (Filter.DIFFERENCE, Filter.MULTIPLY, Filter.SCREEN)

    def __str__(self):
        return self.value
