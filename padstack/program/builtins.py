"""
Built-in functions callable from a parameter program.

Functions take and return pint quantities. They raise pint's
DimensionalityError on mixed dimensions and ArithmeticError subclasses on
numeric faults; the compiler turns both into positioned RunErrors.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from pint import Quantity
from pint.errors import DimensionalityError


@dataclass(frozen=True)
class Builtin:
    """
    Attributes:
        name: Name used in call position
        func: Implementation over quantities
        min_args: Minimum argument count
        max_args: Maximum argument count (None for variadic)
    """
    name: str
    func: Callable[..., Quantity]
    min_args: int
    max_args: Optional[int]

    def arity(self) -> str:
        if self.max_args is None:
            return f'at least {self.min_args}'
        if self.min_args == self.max_args:
            return f'exactly {self.min_args}'
        return f'{self.min_args} to {self.max_args}'


def _check_same_dimension(values: tuple[Quantity, ...]) -> None:
    first = values[0]
    for value in values[1:]:
        if value.dimensionality != first.dimensionality:
            raise DimensionalityError(first.units, value.units,
                                      first.dimensionality, value.dimensionality)


def _min(*values: Quantity) -> Quantity:
    _check_same_dimension(values)
    return min(values)


def _max(*values: Quantity) -> Quantity:
    _check_same_dimension(values)
    return max(values)


def _abs(value: Quantity) -> Quantity:
    return abs(value)


def _sqrt(value: Quantity) -> Quantity:
    if value.magnitude < 0:
        raise ArithmeticError('square root of a negative value')
    return value ** 0.5


def _round(value: Quantity, step: Quantity) -> Quantity:
    """Round value to the nearest multiple of step (half to even)."""
    _check_same_dimension((value, step))
    step_mag = step.to(value.units).magnitude
    if step_mag == 0:
        raise ZeroDivisionError('round step is zero')
    return round(value.magnitude / step_mag) * step_mag * value.units


BUILTINS: dict[str, Builtin] = {b.name: b for b in (
    Builtin('min', _min, 1, None),
    Builtin('max', _max, 1, None),
    Builtin('abs', _abs, 1, 1),
    Builtin('sqrt', _sqrt, 1, 1),
    Builtin('round', _round, 2, 2),
)}
