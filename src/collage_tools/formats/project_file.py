"""
Project file codec.

A project file is plain text::

    <project name>
    <width> <height>
    <max value>
    <layer name> <filter>
    <r> <g> <b> <a>
    ...

Each layer header is followed by one line per pixel of the layer's baseline
grid in row-major order. Layers are listed bottom to top.
"""
import logging

from collage_tools.api.layers import Layer
from collage_tools.api.pixel import RGBPixel
from collage_tools.composite.color import as_rgb
from collage_tools.constants import Filter

logger = logging.getLogger(__name__)


def read(fp):
    """
    Read a project stream.

    Filters are restored as assigned but not yet applied; every layer starts
    :py:attr:`~collage_tools.api.layers.Layer.dirty` unless its filter is
    ``normal``.

    :param fp: text file-like object.
    :return: :py:class:`~collage_tools.api.project.Project`
    :raise ValueError: if the stream is malformed.
    """
    # Import at runtime to avoid circular imports
    from collage_tools.api.project import Project

    lines = [line.rstrip("\r\n") for line in fp]
    while lines and not lines[-1].strip():
        lines.pop()
    if len(lines) < 3:
        raise ValueError("Invalid project file: missing header")
    name = lines[0]
    width, height = _ints(lines[1], 2, "size")
    (max_value,) = _ints(lines[2], 1, "max value")

    layers = []
    index = 3
    while index < len(lines):
        layer_name, filter = _layer_header(lines[index])
        body = lines[index + 1 : index + 1 + width * height]
        if len(body) != width * height:
            raise ValueError(
                "Invalid project file: layer %r has %d of %d pixels"
                % (layer_name, len(body), width * height)
            )
        pixels = [
            [
                RGBPixel(*_ints(body[i * width + j], 4, "pixel"), max_value)
                for j in range(width)
            ]
            for i in range(height)
        ]
        layers.append(Layer(layer_name, pixels, height, width, filter))
        index += 1 + width * height

    logger.debug("Read project %r with %d layers" % (name, len(layers)))
    if not layers:
        return Project(name, height, width, max_value)
    return Project(name, height, width, max_value, layers)


def write(fp, project):
    """
    Write a project to a stream.

    :param fp: text file-like object.
    :param project: :py:class:`~collage_tools.api.project.Project`
    """
    fp.write(dumps(project))


def dumps(project):
    """
    Render a project as text.

    :return: `str`
    """
    max_value = project.max_value
    lines = [
        project.name,
        "%d %d" % (project.width, project.height),
        "%d" % max_value,
    ]
    for layer in project:
        lines.append("%s %s" % (layer.name, layer.filter))
        for row in layer.copy_pixels():
            for pixel in row:
                rgb = as_rgb(pixel, max_value)
                lines.append("%d %d %d %d" % rgb.astuple())
    return "\n".join(lines) + "\n"


def _layer_header(line):
    layer_name, _, filter = line.rpartition(" ")
    if not layer_name:
        raise ValueError("Invalid project file: bad layer header %r" % line)
    return layer_name, Filter.get(filter)


def _ints(line, count, what):
    try:
        values = [int(token) for token in line.split()]
    except ValueError:
        raise ValueError("Invalid project file: bad %s line %r" % (what, line))
    if len(values) != count:
        raise ValueError(
            "Invalid project file: expected %d values for %s, got %r"
            % (count, what, line)
        )
    return values
