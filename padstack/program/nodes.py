"""
Syntax tree of a parameter program.

Every node records the 1-based line and column of the token that starts it
so that run-time faults can point back into the source.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Number:
    """Numeric literal. Lengths are already scaled to nanometers."""
    magnitude: Union[int, float]
    is_length: bool
    line: int
    column: int


@dataclass(frozen=True)
class Name:
    """Read of a local or a parameter."""
    name: str
    line: int
    column: int


@dataclass(frozen=True)
class Unary:
    op: str
    operand: 'Expr'
    line: int
    column: int


@dataclass(frozen=True)
class Binary:
    op: str
    left: 'Expr'
    right: 'Expr'
    line: int
    column: int


@dataclass(frozen=True)
class Call:
    function: str
    args: tuple['Expr', ...]
    line: int
    column: int


Expr = Union[Number, Name, Unary, Binary, Call]


@dataclass(frozen=True)
class Assign:
    """
    `target = expr` writes a parameter; `let target = expr` binds a local.
    """
    target: str
    expr: Expr
    local: bool
    line: int
    column: int


@dataclass(frozen=True)
class Program:
    statements: tuple[Assign, ...]
