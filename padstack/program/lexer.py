"""
Tokenizer for the parameter language.
"""

import re
from dataclasses import dataclass

from padstack.errors import CompileError
from padstack.parameters import KEYWORDS


@dataclass(frozen=True)
class Token:
    """A lexical token with its 1-based source position."""
    kind: str  # NUMBER, ID, KW, OP, NEWLINE, EOF
    value: str
    line: int
    column: int

    def describe(self) -> str:
        if self.kind == 'EOF':
            return 'end of input'
        if self.kind == 'NEWLINE':
            return 'end of line'
        return f"'{self.value}'"


TOKEN_RE = re.compile(
    r"""
    (?P<COMMENT>\#[^\n]*)
  | (?P<NUMBER>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<ID>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<OP>[+\-*/%(),;=])
  | (?P<NEWLINE>\n)
  | (?P<SKIP>[ \t\r]+)
  | (?P<MISMATCH>.)
    """,
    re.VERBOSE,
)


def tokenize(source: str) -> list[Token]:
    """
    Split source into tokens.

    Newlines inside parentheses are dropped so long expressions may be
    wrapped; elsewhere they end a statement.

    Raises:
        CompileError: On a character that starts no token
    """
    line = 1
    col = 1
    pos = 0
    depth = 0
    tokens: list[Token] = []
    while pos < len(source):
        m = TOKEN_RE.match(source, pos)
        kind = m.lastgroup
        value = m.group(0)
        if kind == 'MISMATCH':
            raise CompileError(f'unexpected character {value!r}', line, col)
        if kind == 'NEWLINE':
            if depth == 0:
                tokens.append(Token('NEWLINE', value, line, col))
            line += 1
            col = 1
            pos = m.end()
            continue
        if kind == 'ID' and value in KEYWORDS:
            tokens.append(Token('KW', value, line, col))
        elif kind not in ('SKIP', 'COMMENT'):
            tokens.append(Token(kind, value, line, col))
            if value == '(':
                depth += 1
            elif value == ')' and depth > 0:
                depth -= 1
        pos = m.end()
        col += len(value)
    tokens.append(Token('EOF', '', line, col))
    return tokens
