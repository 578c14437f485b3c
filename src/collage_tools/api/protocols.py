"""
Protocol definitions for type hints.

:py:class:`PixelProtocol` is the capability interface shared by both pixel
representations. Code that only filters, merges, or measures pixels should be
written against it rather than against a concrete class.
"""

from typing import Optional, Protocol, Tuple, Union, runtime_checkable

from collage_tools.constants import Filter


@runtime_checkable
class PixelProtocol(Protocol):
    """
    Protocol defining the pixel interface for type checking.
    """

    a: int
    context: Optional["PixelProtocol"]

    @property
    def kind(self) -> str:
        """Representation name, ``'rgb'`` or ``'hsl'``."""
        ...

    @property
    def max_value(self) -> int:
        """Maximum value used for clamping and conversion."""
        ...

    @property
    def value(self) -> float:
        """Largest color channel."""
        ...

    @property
    def luma(self) -> float:
        """Perceptual brightness."""
        ...

    @property
    def intensity(self) -> float:
        """Average color channel."""
        ...

    def apply(self, filter: Union[Filter, str]) -> None:
        """Apply a filter in place."""
        ...

    def merge(self, other: "PixelProtocol") -> "PixelProtocol":
        """Alpha-composite ``other`` with this pixel."""
        ...

    def copy(self) -> "PixelProtocol":
        """Copy sharing the context reference."""
        ...

    def astuple(self) -> Tuple:
        """Channel values including alpha."""
        ...
