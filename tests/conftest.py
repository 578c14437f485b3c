"""Pytest configuration for collage-tools tests."""

import pytest

from collage_tools.api.layers import Layer
from collage_tools.api.project import Project

from .collage_tools.utils import grid


@pytest.fixture
def swatch() -> Layer:
    """2x2 layer: red, green on top of blue, white."""
    return Layer(
        "swatch",
        grid(
            [(200, 40, 40, 255), (40, 200, 40, 255)],
            [(40, 40, 200, 255), (255, 255, 255, 255)],
        ),
        2,
        2,
    )


@pytest.fixture
def project() -> Project:
    return Project("test", 3, 3)
