"""
Length units shared by the parameter language, the store and the CLI.

Parameter values are integer nanometers. The language and the CLI accept a
fixed set of length suffixes which are converted to nanometers up front.
"""

import re
from typing import Any

from pint import Quantity

from padstack import ureg, Q_
from padstack.errors import ParameterValueError

NANOMETER = ureg.nanometer
LENGTH = NANOMETER.dimensionality

# Suffix -> nanometers per unit
LENGTH_UNITS = {
    'nm': 1,
    'um': 1_000,
    'mm': 1_000_000,
    'mil': 25_400,
    'in': 25_400_000,
}

_LENGTH_RE = re.compile(r'^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*([A-Za-z]*)\s*$')


def length(magnitude: int | float, unit: str = 'nm') -> Quantity:
    """
    Build a length quantity expressed in nanometers.

    Args:
        magnitude: Numeric value in `unit`
        unit: One of LENGTH_UNITS

    Raises:
        KeyError: If unit is not a known length suffix
    """
    return Q_(magnitude * LENGTH_UNITS[unit], NANOMETER)


def is_length(value: Any) -> bool:
    """True if value is a pint quantity with the dimension of a length."""
    return isinstance(value, Quantity) and value.dimensionality == LENGTH


def to_nm(value: Any) -> int:
    """
    Normalize a parameter value to integer nanometers.

    Accepts an int (already nanometers) or a pint length quantity. Fractional
    nanometers are rounded half to even.

    Raises:
        ParameterValueError: If value is not an int or a length quantity
    """
    if isinstance(value, bool):
        raise ParameterValueError(f'Expected a length, got {value!r}')
    if isinstance(value, int):
        return value
    if is_length(value):
        return int(round(value.to(NANOMETER).magnitude))
    if isinstance(value, Quantity):
        raise ParameterValueError(f'Expected a length, got a quantity of dimension {value.dimensionality}')
    raise ParameterValueError(f'Expected a length, got {type(value).__name__} {value!r}')


def parse_length(text: str, default_unit: str = 'nm') -> int:
    """
    Parse a length such as '0.8mm', '800', or '31.5 mil' to nanometers.

    Args:
        text: Length text
        default_unit: Unit assumed when the text has no suffix

    Raises:
        ParameterValueError: If the text is not a number with a known suffix
    """
    m = _LENGTH_RE.match(text)
    if not m:
        raise ParameterValueError(f"Invalid length '{text}'")
    number, unit = m.groups()
    unit = unit or default_unit
    if unit not in LENGTH_UNITS:
        raise ParameterValueError(f"Unknown length unit '{unit}' in '{text}'")
    value = float(number) if any(c in number for c in '.eE') else int(number)
    return to_nm(length(value, unit))


def format_length(nm: int, unit: str = 'mm') -> str:
    """Format integer nanometers in the given display unit."""
    if unit == 'nm':
        return f'{nm} nm'
    return f'{nm / LENGTH_UNITS[unit]:g} {unit}'
