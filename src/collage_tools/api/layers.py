"""
Layer module.

A :py:class:`Layer` is a named, fixed-size grid of pixels kept in two forms:

- the *baseline* grid, the unfiltered pixels the layer was built from plus
  any images stamped onto it
- the *display* grid, the baseline with the assigned filter applied

Changing the assigned filter through :py:attr:`Layer.filter` or stamping an
image marks the display grid dirty; :py:meth:`Layer.refresh` recomputes it.
:py:meth:`Layer.apply_filter` does both at once.

Example usage::

    from collage_tools.api.layers import Layer
    from collage_tools.api.pixel import RGBPixel

    pixels = [[RGBPixel(255, 0, 0, 255), RGBPixel(0, 0, 255, 255)]]
    layer = Layer("swatch", pixels, height=1, width=2)
    layer.apply_filter("blue-component")
    layer.get_pixel(0, 0)  # RGBPixel(r=0, g=0, b=0, a=255, max_value=255)
    layer.get_original_pixel(0, 0)  # unchanged

Rows are indexed top to bottom, so the context pixel of ``(row, col)`` is
``(row + 1, col)`` in the baseline grid. Pixels on the bottom row have none.
"""

import logging
from typing import Iterable, Optional, Sequence, Union

import numpy as np
from PIL import Image

from collage_tools.api.numpy_io import get_array
from collage_tools.api.pil_io import convert_pixels_to_pil
from collage_tools.api.protocols import PixelProtocol
from collage_tools.composite.color import as_rgb
from collage_tools.constants import Filter

Grid = list[list[PixelProtocol]]

logger = logging.getLogger(__name__)


class Layer:
    """
    Named grid of pixels with an assigned filter.

    :param name: Layer name.
    :param pixels: Row-major grid of pixels, row 0 at the top.
    :param height: Number of rows, positive.
    :param width: Number of pixels in every row, positive.
    :param filter: Assigned :py:class:`~collage_tools.constants.Filter`. The
        display grid starts unfiltered; call :py:meth:`refresh` to apply it.
    :raise ValueError: if any argument is missing or the grid does not match
        the given dimensions.
    """

    def __init__(
        self,
        name: str,
        pixels: Iterable[Sequence[PixelProtocol]],
        height: int,
        width: int,
        filter: Union[Filter, str] = Filter.NORMAL,
    ):
        if name is None or pixels is None:
            raise ValueError("Layer cannot have None for its name or pixels.")
        if height <= 0 or width <= 0:
            raise ValueError(
                "Layer height and width must be positive, got %dx%d."
                % (height, width)
            )
        rows = [list(row) for row in pixels]
        if len(rows) != height:
            raise ValueError(
                "Layer %r expects %d rows, got %d." % (name, height, len(rows))
            )
        for index, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    "Row %d of layer %r has %d pixels, expected width %d."
                    % (index, name, len(row), width)
                )
        self._name = name
        self._height = height
        self._width = width
        self._filter = Filter.get(filter)
        self._pixels = [[_check_pixel(pixel).copy() for pixel in row] for row in rows]
        self._display = self._render(Filter.NORMAL)
        self._dirty = self._filter is not Filter.NORMAL
        logger.debug("Created %r" % self)

    @property
    def name(self) -> str:
        """
        Layer name.

        :return: `str`
        """
        return self._name

    @property
    def height(self) -> int:
        """
        Height of the layer.

        :return: int
        """
        return self._height

    @property
    def width(self) -> int:
        """
        Width of the layer.

        :return: int
        """
        return self._width

    @property
    def size(self) -> tuple[int, int]:
        """
        (height, width) tuple.

        :return: `tuple`
        """
        return self._height, self._width

    @property
    def filter(self) -> Filter:
        """
        Assigned filter. Writable.

        Assigning records the filter without recomputing the display grid,
        which then stays :py:attr:`dirty` until :py:meth:`refresh`.

        :return: :py:class:`~collage_tools.constants.Filter`
        """
        return self._filter

    @filter.setter
    def filter(self, value: Union[Filter, str]) -> None:
        self._filter = Filter.get(value)
        self._dirty = True

    @property
    def dirty(self) -> bool:
        """
        Whether the display grid is out of date with the assigned filter or
        the baseline grid.

        :return: `bool`
        """
        return self._dirty

    def apply_filter(self, filter: Union[Filter, str]) -> None:
        """
        Assign ``filter`` and recompute the display grid.

        :raise ValueError: if the filter is unknown.
        """
        self._filter = Filter.get(filter)
        self.refresh()

    def refresh(self) -> None:
        """Recompute the display grid from the baseline and assigned filter."""
        self._display = self._render(self._filter)
        self._dirty = False
        logger.debug("Applied %s to layer %r" % (self._filter, self._name))

    def context(self, row: int, col: int) -> Optional[PixelProtocol]:
        """
        Context pixel of ``(row, col)``: the baseline pixel directly beneath,
        or `None` on the bottom row.
        """
        self._check_bounds(row, col)
        if row + 1 < self._height:
            return self._pixels[row + 1][col]
        return None

    def get_pixel(self, row: int, col: int) -> PixelProtocol:
        """
        Display pixel at ``(row, col)``.

        :raise IndexError: if the coordinate is outside the layer.
        """
        self._check_bounds(row, col)
        return self._display[row][col]

    def get_original_pixel(self, row: int, col: int) -> PixelProtocol:
        """
        Baseline pixel at ``(row, col)``.

        :raise IndexError: if the coordinate is outside the layer.
        """
        self._check_bounds(row, col)
        return self._pixels[row][col]

    def copy_pixels(self, display: bool = False) -> Grid:
        """
        Copy of the baseline grid, or of the display grid if ``display``.

        :return: `list` of rows of pixels.
        """
        source = self._display if display else self._pixels
        return [[pixel.copy() for pixel in row] for row in source]

    def add_image(
        self, image: Iterable[Sequence[PixelProtocol]], x: int, y: int
    ) -> None:
        """
        Stamp ``image`` onto the baseline grid with its top-left pixel at row
        ``x``, column ``y``.

        Every covered cell becomes ``image[i][j].merge(display[x + i][y + j])``,
        with the image pixel first rescaled to the scale of the pixel beneath.
        The display grid is marked dirty. Nothing changes if validation fails.

        :raise ValueError: if the image is missing, the coordinate is outside
            ``[0, height] x [0, width]``, or the image would overflow the layer.
        """
        if image is None:
            raise ValueError("Cannot use None as an image.")
        if not (0 <= x <= self._height and 0 <= y <= self._width):
            raise ValueError(
                "Coordinate (%d, %d) out-of-bounds for a %dx%d layer."
                % (x, y, self._height, self._width)
            )
        rows = [list(row) for row in image]
        for i, row in enumerate(rows):
            if x + i >= self._height or y + len(row) > self._width:
                raise ValueError(
                    "Image too large to be placed at (%d, %d) on layer %r."
                    % (x, y, self._name)
                )

        stamped = [
            [
                _stamp(pixel, self._display[x + i][y + j])
                for j, pixel in enumerate(row)
            ]
            for i, row in enumerate(rows)
        ]
        for i, row in enumerate(stamped):
            self._pixels[x + i][y : y + len(row)] = row
        self._dirty = True
        logger.debug(
            "Stamped %d-row image onto layer %r at (%d, %d)"
            % (len(rows), self._name, x, y)
        )

    def merge(self, other: "Layer") -> "Layer":
        """
        Merge ``other`` with this layer cell by cell.

        Each cell is ``self.get_pixel(i, j).merge(other.get_pixel(i, j))``, so
        ``other`` is composited over this layer. Neither input is modified.

        :return: New :py:class:`Layer` named after ``other`` with the normal
            filter.
        :raise ValueError: if the layers differ in size.
        """
        if other.size != self.size:
            raise ValueError(
                "Cannot merge layer %r of size %dx%d into layer %r of size %dx%d."
                % ((other.name,) + other.size + (self._name,) + self.size)
            )
        others = other.copy_pixels(display=True)
        merged = [
            [pixel.merge(others[i][j]) for j, pixel in enumerate(row)]
            for i, row in enumerate(self._display)
        ]
        return Layer(other.name, merged, self._height, self._width)

    def snapshot(self) -> "Layer":
        """
        Rebuild this layer from a copy of its baseline grid.

        The result has the same name, size, and assigned filter and shares no
        pixels with this layer.
        """
        return Layer(
            self._name, self.copy_pixels(), self._height, self._width, self._filter
        )

    def numpy(self, display: bool = True) -> np.ndarray:
        """
        Get NumPy array of the layer.

        :param display: Use the display grid, otherwise the baseline.
        :return: float32 :py:class:`numpy.ndarray` of shape
            ``(height, width, 4)`` in ``[0, 1]``.
        """
        return get_array(self._display if display else self._pixels)

    def topil(self, display: bool = True) -> Image.Image:
        """
        Get PIL Image of the layer.

        :return: :py:class:`PIL.Image` in ``RGBA`` mode.
        """
        return convert_pixels_to_pil(self._display if display else self._pixels)

    def _render(self, filter: Filter) -> Grid:
        display = []
        for row in range(self._height):
            rendered = []
            for col in range(self._width):
                pixel = self._pixels[row][col].copy()
                pixel.context = self.context(row, col)
                pixel.apply(filter)
                rendered.append(pixel)
            display.append(rendered)
        return display

    def _check_bounds(self, row: int, col: int) -> None:
        if row < 0 or col < 0:
            raise IndexError("Cannot have a pixel with a negative row or column.")
        if row >= self._height:
            raise IndexError(
                "Row %d is out-of-bounds for layer %r of height %d."
                % (row, self._name, self._height)
            )
        if col >= self._width:
            raise IndexError(
                "Column %d is out-of-bounds for layer %r of width %d."
                % (col, self._name, self._width)
            )

    def __repr__(self) -> str:
        return "%s(%r size=%dx%d filter=%s%s)" % (
            self.__class__.__name__,
            self._name,
            self._height,
            self._width,
            self._filter,
            " dirty" if self._dirty else "",
        )


def _check_pixel(pixel: PixelProtocol) -> PixelProtocol:
    if getattr(pixel, "kind", None) not in ("rgb", "hsl"):
        raise TypeError("Expected a pixel, got %s" % type(pixel).__name__)
    return pixel


def _stamp(pixel: PixelProtocol, below: PixelProtocol) -> PixelProtocol:
    # Merge on the scale of the pixel beneath.
    below = as_rgb(below)
    return as_rgb(_check_pixel(pixel), below.max_value).merge(below)
