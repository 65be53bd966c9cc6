"""
Recursive descent parser for the parameter language.

Grammar:
    program    := { statement (NEWLINE | ';') }
    statement  := [ 'let' ] IDENT '=' expr
    expr       := term { ('+' | '-') term }
    term       := unary { ('*' | '/' | '%') unary }
    unary      := ('-' | '+') unary | atom
    atom       := NUMBER [UNIT] | IDENT | IDENT '(' [expr {',' expr}] ')' | '(' expr ')'

Static checks (unknown function, argument count, unknown unit suffix) are
done here so that every CompileError is reported at SetCode time.
"""

from typing import Optional, Sequence

from padstack.errors import CompileError
from padstack.program.builtins import BUILTINS
from padstack.program.lexer import Token, tokenize
from padstack.program.nodes import Assign, Binary, Call, Expr, Name, Number, Program, Unary
from padstack.units import LENGTH_UNITS


class Parser:
    """Turns a token list into a Program. Stops at the first error."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.i = 0

    def cur(self) -> Token:
        return self.tokens[self.i]

    def peek(self, offset: int = 1) -> Token:
        j = min(self.i + offset, len(self.tokens) - 1)
        return self.tokens[j]

    def match(self, kind: str, value: Optional[str] = None) -> Optional[Token]:
        t = self.cur()
        if t.kind != kind or (value is not None and t.value != value):
            return None
        self.i += 1
        return t

    def expect(self, kind: str, value: Optional[str] = None, what: Optional[str] = None) -> Token:
        t = self.match(kind, value)
        if t is None:
            t = self.cur()
            want = what or (f"'{value}'" if value else kind.lower())
            raise CompileError(f'expected {want}, got {t.describe()}', t.line, t.column)
        return t

    def at_separator(self) -> bool:
        t = self.cur()
        return t.kind in ('NEWLINE', 'EOF') or (t.kind == 'OP' and t.value == ';')

    def skip_separators(self) -> None:
        while self.match('NEWLINE') or self.match('OP', ';'):
            pass

    def parse(self) -> Program:
        statements = []
        self.skip_separators()
        while self.cur().kind != 'EOF':
            statements.append(self.parse_statement())
            if not self.at_separator():
                t = self.cur()
                raise CompileError(f'expected end of statement, got {t.describe()}', t.line, t.column)
            self.skip_separators()
        return Program(tuple(statements))

    def parse_statement(self) -> Assign:
        start = self.cur()
        local = self.match('KW', 'let') is not None
        target = self.expect('ID', what='parameter name')
        self.expect('OP', '=')
        expr = self.parse_expr()
        return Assign(target.value, expr, local, start.line, start.column)

    def parse_expr(self) -> Expr:
        left = self.parse_term()
        while True:
            t = self.match('OP', '+') or self.match('OP', '-')
            if t is None:
                return left
            left = Binary(t.value, left, self.parse_term(), t.line, t.column)

    def parse_term(self) -> Expr:
        left = self.parse_unary()
        while True:
            t = self.match('OP', '*') or self.match('OP', '/') or self.match('OP', '%')
            if t is None:
                return left
            left = Binary(t.value, left, self.parse_unary(), t.line, t.column)

    def parse_unary(self) -> Expr:
        t = self.match('OP', '-') or self.match('OP', '+')
        if t is not None:
            return Unary(t.value, self.parse_unary(), t.line, t.column)
        return self.parse_atom()

    def parse_atom(self) -> Expr:
        t = self.cur()
        if self.match('NUMBER'):
            return self.parse_number(t)
        if self.match('ID'):
            if self.cur().kind == 'OP' and self.cur().value == '(':
                return self.parse_call(t)
            return Name(t.value, t.line, t.column)
        if self.match('OP', '('):
            expr = self.parse_expr()
            self.expect('OP', ')')
            return expr
        raise CompileError(f'unexpected {t.describe()}', t.line, t.column)

    def parse_number(self, t: Token) -> Number:
        text = t.value
        magnitude = float(text) if any(c in text for c in '.eE') else int(text)
        unit = self.match('ID')
        if unit is None:
            return Number(magnitude, False, t.line, t.column)
        if unit.value not in LENGTH_UNITS:
            raise CompileError(f"unknown unit '{unit.value}'", unit.line, unit.column)
        return Number(magnitude * LENGTH_UNITS[unit.value], True, t.line, t.column)

    def parse_call(self, name: Token) -> Call:
        builtin = BUILTINS.get(name.value)
        if builtin is None:
            raise CompileError(f"unknown function '{name.value}'", name.line, name.column)
        self.expect('OP', '(')
        args = []
        if not self.match('OP', ')'):
            args.append(self.parse_expr())
            while self.match('OP', ','):
                args.append(self.parse_expr())
            self.expect('OP', ')')
        n = len(args)
        if n < builtin.min_args or (builtin.max_args is not None and n > builtin.max_args):
            raise CompileError(f'{builtin.name}() takes {builtin.arity()} argument(s), got {n}',
                               name.line, name.column)
        return Call(builtin.name, tuple(args), name.line, name.column)


def parse(source: str) -> Program:
    """
    Parse source text into a Program.

    Raises:
        CompileError: On the first lexical, syntactic or static error
    """
    return Parser(tokenize(source)).parse()
