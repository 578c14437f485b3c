"""
Validation functions for attrs.
"""
from attrs import define

__all__ = ["channel", "range_"]


@define(repr=False, frozen=True)
class _RangeValidator:
    minimum: float
    maximum: float

    def __call__(self, inst, attr, value):
        try:
            in_range = self.minimum <= value <= self.maximum
        except TypeError:
            in_range = False

        if not in_range:
            raise ValueError(
                "'{name}' must be in range [{minimum}, {maximum}], got {value!r}".format(
                    name=attr.name,
                    minimum=self.minimum,
                    maximum=self.maximum,
                    value=value,
                )
            )

    def __repr__(self):
        return "<range_ validator with [{minimum!r}, {maximum!r}]>".format(
            minimum=self.minimum, maximum=self.maximum
        )


def range_(minimum, maximum):
    """
    A validator that raises a :exc:`ValueError` if the initializer is called
    with a value that does not belong in the [minimum, maximum] range. The
    check is performed using ``minimum <= value and value <= maximum``
    """
    return _RangeValidator(minimum, maximum)


def channel(inst, attr, value):
    """
    Validate an integer channel against the owning pixel's ``max_value``.

    Runs after every attribute is set, so ``inst.max_value`` is available both
    at construction and on later assignment.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            "'%s' must be an int, got %s" % (attr.name, type(value).__name__)
        )
    if not 0 <= value <= inst.max_value:
        raise ValueError(
            "'%s' must be in range [0, %d], got %d"
            % (attr.name, inst.max_value, value)
        )
