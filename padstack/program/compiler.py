"""
Compiles a parsed Program into closures over a run-time Frame.

The compiled form is immutable: running it only touches the ParameterSet
handed to `CompiledProgram.execute`, which ParameterProgram always makes a
working copy.
"""

import math
import operator
from dataclasses import dataclass
from typing import Callable

from pint import Quantity
from pint.errors import DimensionalityError

from padstack import Q_
from padstack.errors import RunError
from padstack.parameters import ParameterSet
from padstack.program.builtins import BUILTINS
from padstack.program.nodes import Assign, Binary, Call, Expr, Name, Number, Program, Unary
from padstack.units import NANOMETER, is_length


class Frame:
    """Run-time state of one execution: working parameters and locals."""
    __slots__ = ('parameters', 'locals')

    def __init__(self, parameters: ParameterSet):
        self.parameters = parameters
        self.locals: dict[str, Quantity] = {}


Evaluator = Callable[[Frame], Quantity]
Step = Callable[[Frame], None]


def describe(value: Quantity) -> str:
    """Short name for the dimension of a value, used in error messages."""
    if is_length(value):
        return 'length'
    if value.dimensionless:
        return 'dimensionless value'
    return f'value of dimension {value.dimensionality}'


def _mod(a: Quantity, b: Quantity) -> Quantity:
    b = b.to(a.units)
    if b.magnitude == 0:
        raise ZeroDivisionError('modulo by zero')
    return Q_(a.magnitude % b.magnitude, a.units)


_BINARY_OPS = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': operator.truediv,
    '%': _mod,
}


@dataclass(frozen=True)
class CompiledProgram:
    """
    Executable form of a parameter program.

    Attributes:
        source: Source text it was compiled from
        steps: One closure per statement, in source order
        assigned: Parameter ids written by the program, in first-write order
        referenced: Names read by the program, in first-read order
    """
    source: str
    steps: tuple[Step, ...]
    assigned: tuple[str, ...]
    referenced: tuple[str, ...]

    def execute(self, parameters: ParameterSet) -> None:
        """
        Run every statement against parameters, mutating it.

        Raises:
            RunError: On the first run-time fault
        """
        frame = Frame(parameters)
        for step in self.steps:
            step(frame)


class Compiler:

    def __init__(self):
        self.assigned: dict[str, None] = {}
        self.referenced: dict[str, None] = {}

    def compile(self, program: Program, source: str) -> CompiledProgram:
        steps = tuple(self.compile_statement(s) for s in program.statements)
        return CompiledProgram(source, steps, tuple(self.assigned), tuple(self.referenced))

    def compile_statement(self, node: Assign) -> Step:
        value_of = self.compile_expr(node.expr)
        target = node.target

        if node.local:
            def bind(frame: Frame) -> None:
                frame.locals[target] = value_of(frame)
            return bind

        self.assigned.setdefault(target)
        line, column = node.line, node.column

        def assign(frame: Frame) -> None:
            value = value_of(frame)
            if not is_length(value):
                raise RunError(f"type mismatch: parameter '{target}' must be a length, "
                               f"got a {describe(value)}", line, column)
            magnitude = value.to(NANOMETER).magnitude
            if not math.isfinite(magnitude):
                raise RunError(f"arithmetic fault: '{target}' is not finite", line, column)
            frame.parameters.set(target, int(round(magnitude)))
        return assign

    def compile_expr(self, node: Expr) -> Evaluator:
        if isinstance(node, Number):
            value = Q_(node.magnitude, NANOMETER) if node.is_length else Q_(node.magnitude)
            return lambda frame: value
        if isinstance(node, Name):
            return self.compile_name(node)
        if isinstance(node, Unary):
            return self.compile_unary(node)
        if isinstance(node, Binary):
            return self.compile_binary(node)
        if isinstance(node, Call):
            return self.compile_call(node)
        raise TypeError(f'Unknown node {node!r}')

    def compile_name(self, node: Name) -> Evaluator:
        name, line, column = node.name, node.line, node.column
        self.referenced.setdefault(name)

        def load(frame: Frame) -> Quantity:
            if name in frame.locals:
                return frame.locals[name]
            value = frame.parameters.get(name)
            if value is None:
                raise RunError(f"undefined parameter '{name}'", line, column)
            return Q_(value, NANOMETER)
        return load

    def compile_unary(self, node: Unary) -> Evaluator:
        operand = self.compile_expr(node.operand)
        if node.op == '+':
            return operand
        return lambda frame: -operand(frame)

    def compile_binary(self, node: Binary) -> Evaluator:
        left = self.compile_expr(node.left)
        right = self.compile_expr(node.right)
        op, symbol, line, column = _BINARY_OPS[node.op], node.op, node.line, node.column

        def binary(frame: Frame) -> Quantity:
            a = left(frame)
            b = right(frame)
            try:
                return op(a, b)
            except DimensionalityError:
                raise RunError(f"unit mismatch: cannot apply '{symbol}' to "
                               f"{describe(a)} and {describe(b)}", line, column) from None
            except ZeroDivisionError:
                what = 'modulo' if symbol == '%' else 'division'
                raise RunError(f'arithmetic fault: {what} by zero', line, column) from None
            except ArithmeticError as e:
                raise RunError(f'arithmetic fault: {e}', line, column) from None
        return binary

    def compile_call(self, node: Call) -> Evaluator:
        args = tuple(self.compile_expr(a) for a in node.args)
        func, name, line, column = BUILTINS[node.function].func, node.function, node.line, node.column

        def call(frame: Frame) -> Quantity:
            values = [a(frame) for a in args]
            try:
                return func(*values)
            except DimensionalityError:
                kinds = ', '.join(describe(v) for v in values)
                raise RunError(f'unit mismatch in {name}(): got {kinds}', line, column) from None
            except ArithmeticError as e:
                raise RunError(f'arithmetic fault in {name}(): {e}', line, column) from None
        return call


def compile_program(program: Program, source: str) -> CompiledProgram:
    return Compiler().compile(program, source)
