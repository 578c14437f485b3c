import logging

import numpy as np
import pytest
from PIL import Image

from collage_tools.api.layers import Layer
from collage_tools.api.pixel import HSLPixel, RGBPixel
from collage_tools.constants import Filter

from ..utils import BLUE, CLEAR, RED, channels, grid, solid

logger = logging.getLogger(__name__)


SIX = [
    [(10, 20, 30, 255), (40, 50, 60, 255)],
    [(70, 80, 90, 255), (100, 110, 120, 255)],
    [(130, 140, 150, 255), (160, 170, 180, 255)],
]


@pytest.fixture
def six() -> Layer:
    return Layer("six", grid(*SIX), 3, 2)


@pytest.mark.parametrize(
    "args",
    [
        (None, solid(2, 2), 2, 2),
        ("name", None, 2, 2),
        ("name", solid(2, 2), 0, 2),
        ("name", solid(2, 2), 2, -1),
        ("name", solid(2, 2), 3, 2),
        ("name", solid(2, 2), 2, 3),
        ("name", solid(2, 2)[:1] + [solid(1, 3)[0]], 2, 2),
    ],
)
def test_layer_rejects_bad_arguments(args) -> None:
    with pytest.raises(ValueError):
        Layer(*args)


def test_layer_rejects_non_pixels() -> None:
    with pytest.raises(TypeError):
        Layer("name", [[RGBPixel(0, 0, 0, 0), (0, 0, 0, 0)]], 1, 2)


def test_layer_properties(six: Layer) -> None:
    assert six.name == "six"
    assert six.height == 3
    assert six.width == 2
    assert six.size == (3, 2)
    assert six.filter is Filter.NORMAL
    assert not six.dirty
    assert "six" in repr(six)


def test_layer_copies_input() -> None:
    pixels = solid(2, 2)
    layer = Layer("copy", pixels, 2, 2)
    pixels[0][0].r = 0
    assert layer.get_original_pixel(0, 0).r == 255
    assert layer.get_pixel(0, 0).r == 255


@pytest.mark.parametrize(
    "row, col", [(3, 0), (0, 2), (-1, 0), (0, -1), (10, 10)]
)
def test_layer_out_of_bounds(six: Layer, row: int, col: int) -> None:
    with pytest.raises(IndexError):
        six.get_pixel(row, col)
    with pytest.raises(IndexError):
        six.get_original_pixel(row, col)


def test_context_is_pixel_beneath(six: Layer) -> None:
    assert six.context(0, 1) is six.get_original_pixel(1, 1)
    assert six.context(2, 0) is None
    assert six.get_pixel(0, 0).context == six.get_original_pixel(1, 0)
    assert six.get_pixel(2, 1).context is None


def test_apply_filter(six: Layer) -> None:
    six.apply_filter("red-component")
    assert six.filter is Filter.RED_COMPONENT
    assert not six.dirty
    for i in range(3):
        for j in range(2):
            pixel = six.get_pixel(i, j)
            assert (pixel.g, pixel.b) == (0, 0)
            assert pixel.r == SIX[i][j][0]
    assert channels(six.copy_pixels()) == SIX

    six.apply_filter(Filter.NORMAL)
    assert channels(six.copy_pixels(display=True)) == SIX


def test_apply_filter_is_repeatable(six: Layer) -> None:
    six.apply_filter("brighten-value")
    first = channels(six.copy_pixels(display=True))
    six.apply_filter("brighten-value")
    assert channels(six.copy_pixels(display=True)) == first


def test_apply_unknown_filter(six: Layer) -> None:
    with pytest.raises(ValueError):
        six.apply_filter("sepia")
    assert six.filter is Filter.NORMAL


def test_set_filter_marks_dirty(six: Layer) -> None:
    six.filter = "blue-component"
    assert six.filter is Filter.BLUE_COMPONENT
    assert six.dirty
    assert six.get_pixel(0, 0).astuple() == SIX[0][0]
    six.refresh()
    assert not six.dirty
    assert six.get_pixel(0, 0).astuple() == (0, 0, 30, 255)


def test_constructed_filter_is_pending() -> None:
    layer = Layer("pending", grid([RED]), 1, 1, "green-component")
    assert layer.dirty
    assert layer.get_pixel(0, 0).astuple() == RED
    layer.refresh()
    assert layer.get_pixel(0, 0).astuple() == (0, 0, 0, 255)


def test_difference_uses_row_beneath(swatch: Layer) -> None:
    swatch.apply_filter("difference")
    assert swatch.get_pixel(0, 0).astuple() == (160, 0, 160, 255)
    assert swatch.get_pixel(0, 1).astuple() == (215, 55, 215, 255)
    assert swatch.get_pixel(1, 0).astuple() == (40, 40, 200, 255)
    assert swatch.get_pixel(1, 1).astuple() == (255, 255, 255, 255)


def test_context_follows_stamped_image() -> None:
    layer = Layer(
        "stack", grid([(100, 100, 100, 255)], [(0, 0, 0, 0)]), 2, 1, "difference"
    )
    layer.refresh()
    assert layer.get_pixel(0, 0).astuple() == (100, 100, 100, 255)

    layer.add_image(grid([(50, 50, 50, 255)]), 1, 0)
    assert layer.dirty
    layer.refresh()
    assert layer.get_pixel(0, 0).astuple() == (50, 50, 50, 255)


def test_add_image() -> None:
    layer = Layer("blank", solid(3, 3, CLEAR), 3, 3)
    image = grid([RED, BLUE])
    expected = [pixel.merge(layer.get_pixel(1, 1 + j)) for j, pixel in enumerate(image[0])]
    layer.add_image(image, 1, 1)

    assert layer.get_original_pixel(1, 1).astuple() == RED
    assert layer.get_original_pixel(1, 2).astuple() == BLUE
    assert [layer.get_original_pixel(1, 1 + j) for j in range(2)] == expected
    for i, j in [(0, 0), (0, 1), (0, 2), (1, 0), (2, 0), (2, 1), (2, 2)]:
        assert layer.get_original_pixel(i, j).astuple() == CLEAR
    assert layer.dirty
    assert layer.get_pixel(1, 1).astuple() == CLEAR
    layer.refresh()
    assert layer.get_pixel(1, 1).astuple() == RED


def test_add_image_copies_nothing_on_failure() -> None:
    layer = Layer("blank", solid(2, 2, CLEAR), 2, 2)
    with pytest.raises(ValueError):
        layer.add_image(grid([RED], [RED, RED]), 1, 1)
    with pytest.raises(ValueError):
        layer.add_image(grid([RED]), 3, 0)
    with pytest.raises(ValueError):
        layer.add_image(grid([RED]), -1, 0)
    with pytest.raises(ValueError):
        layer.add_image(None, 0, 0)
    assert channels(layer.copy_pixels()) == [[CLEAR, CLEAR], [CLEAR, CLEAR]]
    assert not layer.dirty


def test_add_hsl_image() -> None:
    layer = Layer("blank", solid(1, 1, CLEAR), 1, 1)
    layer.add_image([[HSLPixel(240, 1.0, 0.5)]], 0, 0)
    assert layer.get_original_pixel(0, 0).astuple() == BLUE


def test_merge(six: Layer) -> None:
    top = Layer("top", solid(3, 2, RED), 3, 2)
    merged = six.merge(top)
    assert merged.name == "top"
    assert merged.size == (3, 2)
    assert merged.filter is Filter.NORMAL
    assert channels(merged.copy_pixels()) == [[RED, RED]] * 3
    assert channels(six.copy_pixels()) == SIX


def test_merge_uses_display(six: Layer) -> None:
    top = Layer("top", solid(3, 2, CLEAR), 3, 2)
    six.apply_filter("blue-component")
    merged = six.merge(top)
    assert merged.get_pixel(0, 0).astuple() == (0, 0, 30, 255)


def test_merge_size_mismatch(six: Layer) -> None:
    with pytest.raises(ValueError):
        six.merge(Layer("small", solid(2, 2), 2, 2))


def test_snapshot(six: Layer) -> None:
    six.filter = "red-component"
    copied = six.snapshot()
    assert copied is not six
    assert copied.name == six.name
    assert copied.filter is Filter.RED_COMPONENT
    assert channels(copied.copy_pixels()) == SIX
    assert copied.get_original_pixel(0, 0) is not six.get_original_pixel(0, 0)


def test_numpy(swatch: Layer) -> None:
    array = swatch.numpy()
    assert isinstance(array, np.ndarray)
    assert array.shape == (2, 2, 4)
    assert array.dtype == np.float32
    assert array[0, 0] == pytest.approx(np.array([200, 40, 40, 255]) / 255.0)


def test_topil(swatch: Layer) -> None:
    image = swatch.topil()
    assert isinstance(image, Image.Image)
    assert image.mode == "RGBA"
    assert image.size == (2, 2)
    assert image.getpixel((0, 0)) == (200, 40, 40, 255)
    assert image.getpixel((0, 1)) == (40, 40, 200, 255)


def test_add_image_rescales_to_layer() -> None:
    layer = Layer("blank", solid(2, 1, CLEAR), 2, 1)
    layer.add_image(
        [
            [RGBPixel(15, 0, 0, 15, max_value=15)],
            [RGBPixel(0, 0, 15, 15, max_value=15)],
        ],
        0,
        0,
    )
    assert layer.get_original_pixel(0, 0).max_value == 255
    assert channels(layer.copy_pixels()) == [[RED], [BLUE]]

    layer.apply_filter("difference")
    assert layer.get_pixel(0, 0).astuple() == (255, 0, 255, 255)
    assert layer.get_pixel(1, 0).astuple() == BLUE
