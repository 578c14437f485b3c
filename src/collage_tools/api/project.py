"""
Project module.

A :py:class:`Project` is an ordered stack of equally sized layers. Index 0 is
the bottommost layer and is painted over by every later entry. New projects
start with a single fully transparent white ``background`` layer.

Example usage::

    from collage_tools import Project

    project = Project("collage", height=64, width=64)
    project.add_layer("photo")
    project.add_image_to_layer("photo", image, 0, 0)
    project.set_filter("darken-luma", "photo")

    flattened = project.flatten()
    project.composite().save("collage.png")
    project.save("collage.txt")
"""

import logging
from typing import IO, Iterable, Iterator, Optional, Sequence, Union

import numpy as np
from PIL import Image

from collage_tools.api.layers import Layer
from collage_tools.api.pixel import RGBPixel
from collage_tools.api.protocols import PixelProtocol
from collage_tools.constants import BACKGROUND_NAME, DEFAULT_MAX_VALUE, Filter

logger = logging.getLogger(__name__)


class Project:
    """
    Ordered stack of layers composited bottom to top.

    :param name: Project name.
    :param height: Height shared by every layer, positive.
    :param width: Width shared by every layer, positive.
    :param max_value: Maximum channel value of the project's pixels.
    :param layers: Existing layers, bottom first. If omitted the project
        starts with a transparent white background layer.
    :raise ValueError: on missing name, non-positive dimensions, an empty
        ``layers``, or layers that do not match the project size or share a
        name.
    """

    def __init__(
        self,
        name: str,
        height: int,
        width: int,
        max_value: int = DEFAULT_MAX_VALUE,
        layers: Optional[Iterable[Layer]] = None,
    ):
        if name is None:
            raise ValueError("Project name cannot be None.")
        if height <= 0 or width <= 0:
            raise ValueError(
                "Project height and width must be positive, got %dx%d."
                % (height, width)
            )
        if max_value <= 0:
            raise ValueError("Project max value must be positive, got %d." % max_value)
        self._name = name
        self._height = height
        self._width = width
        self._max_value = max_value
        if layers is None:
            self._layers = [self._blank_layer(BACKGROUND_NAME)]
        else:
            self._layers = []
            for layer in layers:
                self._check_layer(layer)
                self._layers.append(layer)
            if not self._layers:
                raise ValueError("Project %r needs at least one layer." % name)

    @classmethod
    def open(cls, fp: Union[str, IO[str]]) -> "Project":
        """
        Open a project file.

        :param fp: filename or file-like object.
        :return: A :py:class:`~collage_tools.api.project.Project` object.
        """
        from collage_tools.formats import project_file

        if hasattr(fp, "read"):
            return project_file.read(fp)
        with open(fp, "r") as f:
            return project_file.read(f)

    def save(self, fp: Union[str, IO[str]]) -> None:
        """
        Save the project file.

        :param fp: filename or file-like object.
        """
        from collage_tools.formats import project_file

        if hasattr(fp, "write"):
            project_file.write(fp, self)
        else:
            with open(fp, "w") as f:
                project_file.write(f, self)

    @property
    def name(self) -> str:
        """
        Project name.

        :return: `str`
        """
        return self._name

    @property
    def height(self) -> int:
        """
        Document height.

        :return: `int`
        """
        return self._height

    @property
    def width(self) -> int:
        """
        Document width.

        :return: `int`
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
    def max_value(self) -> int:
        """
        Maximum channel value of the project's pixels.

        :return: `int`
        """
        return self._max_value

    @property
    def layers(self) -> list[Layer]:
        """
        Layers bottom to top. The list is new; the layers are live.

        :return: `list` of :py:class:`~collage_tools.api.layers.Layer`
        """
        return list(self._layers)

    def snapshot(self) -> list[Layer]:
        """
        Rebuild every layer from a copy of its baseline grid.

        :return: `list` of new :py:class:`~collage_tools.api.layers.Layer`
        """
        return [layer.snapshot() for layer in self._layers]

    def get_layer(self, name: str) -> Layer:
        """
        Find a layer by name.

        :raise ValueError: if no layer has that name.
        """
        for layer in self._layers:
            if layer.name == name:
                return layer
        raise ValueError("No layer named %r exists in project %r." % (name, self._name))

    def add_layer(self, name: str) -> Layer:
        """
        Append a fully transparent white layer on top of the stack.

        :return: The new :py:class:`~collage_tools.api.layers.Layer`.
        :raise ValueError: if the name is missing or already used.
        """
        if name is None:
            raise ValueError("Layer name cannot be None.")
        if name in self:
            raise ValueError("A layer named %r already exists." % name)
        layer = self._blank_layer(name)
        self._layers.append(layer)
        logger.debug("Added layer %r to project %r" % (name, self._name))
        return layer

    def add_image_to_layer(
        self,
        layer_name: str,
        image: Iterable[Sequence[PixelProtocol]],
        x: int,
        y: int,
    ) -> None:
        """
        Stamp ``image`` onto the named layer with its top-left pixel at row
        ``x``, column ``y``. See :py:meth:`Layer.add_image`.

        :raise ValueError: if the layer does not exist, the coordinate is
            outside the layer, the image rows differ in width, or the image
            does not fit at the coordinate.
        """
        if layer_name is None or image is None:
            raise ValueError("Cannot have a None layer name or image.")
        layer = self.get_layer(layer_name)
        if x < 0 or y < 0:
            raise ValueError("Cannot have negative coordinates, got (%d, %d)." % (x, y))
        if x > layer.height or y > layer.width:
            raise ValueError(
                "Coordinate (%d, %d) is not on layer %r of size %dx%d."
                % ((x, y, layer.name) + layer.size)
            )
        rows = [list(row) for row in image]
        if not rows:
            raise ValueError("Cannot add an image with no rows.")
        image_height, image_width = len(rows), len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != image_width:
                raise ValueError(
                    "Image rows do not have the same amount of pixels: row %d has "
                    "%d, expected %d." % (index, len(row), image_width)
                )
        if image_height * image_width > layer.height * layer.width:
            raise ValueError(
                "Layer %r is not big enough for a %dx%d image."
                % (layer.name, image_height, image_width)
            )
        if x + image_height > layer.height or y + image_width > layer.width:
            raise ValueError(
                "A %dx%d image does not fit on layer %r at (%d, %d)."
                % (image_height, image_width, layer.name, x, y)
            )
        layer.add_image(rows, x, y)

    def apply_filter(self, filter: Union[Filter, str], name: str) -> None:
        """
        Assign ``filter`` to the named layer and recompute its display grid.

        :raise ValueError: if the layer or filter does not exist.
        """
        self.get_layer(name).apply_filter(filter)

    def set_filter(self, filter: Union[Filter, str], name: str) -> None:
        """
        Record ``filter`` on the named layer without recomputing it. The
        layer's display grid is brought up to date by :py:meth:`flatten` or
        :py:meth:`Layer.refresh`.

        :raise ValueError: if the layer or filter does not exist.
        """
        self.get_layer(name).filter = filter

    def flatten(self, name: Optional[str] = None) -> Layer:
        """
        Reduce the stack to a single layer.

        Every layer first re-applies its own filter. The background at index
        0 is skipped; the remaining layers are merged bottom to top. A project
        holding only the background returns that layer itself.

        :param name: Name of the resulting layer. Defaults to the name of the
            topmost layer.
        :return: :py:class:`~collage_tools.api.layers.Layer`
        """
        for layer in self._layers:
            layer.refresh()
        if len(self._layers) == 1:
            return self._layers[0]

        bottom = self._layers[1]
        result = Layer(
            bottom.name, bottom.copy_pixels(display=True), self._height, self._width
        )
        for layer in self._layers[2:]:
            result = result.merge(layer)
        if name is not None and name != result.name:
            result = Layer(name, result.copy_pixels(), self._height, self._width)
        logger.debug(
            "Flattened %d layers of project %r" % (len(self._layers) - 1, self._name)
        )
        return result

    def numpy(self) -> np.ndarray:
        """
        Get NumPy array of the flattened project.

        :return: float32 :py:class:`numpy.ndarray` of shape
            ``(height, width, 4)`` in ``[0, 1]``.
        """
        return self.flatten().numpy()

    def composite(self) -> Image.Image:
        """
        Flatten the project into a PIL Image.

        :return: :py:class:`PIL.Image` in ``RGBA`` mode.
        """
        return self.flatten().topil()

    def _blank_layer(self, name: str) -> Layer:
        top = self._max_value
        pixels = [
            [RGBPixel(top, top, top, 0, top) for _ in range(self._width)]
            for _ in range(self._height)
        ]
        return Layer(name, pixels, self._height, self._width)

    def _check_layer(self, layer: Layer) -> None:
        if layer.size != self.size:
            raise ValueError(
                "Layer %r of size %dx%d does not match project size %dx%d."
                % ((layer.name,) + layer.size + self.size)
            )
        if layer.name in self:
            raise ValueError("A layer named %r already exists." % layer.name)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)

    def __getitem__(self, key: Union[int, str]) -> Layer:
        if isinstance(key, str):
            return self.get_layer(key)
        return self._layers[key]

    def __contains__(self, name: object) -> bool:
        return any(layer.name == name for layer in self._layers)

    def __repr__(self) -> str:
        return "%s(%r size=%dx%d max_value=%d layers=%d)" % (
            self.__class__.__name__,
            self._name,
            self._height,
            self._width,
            self._max_value,
            len(self._layers),
        )
