"""
Error taxonomy for the parameter engine.

CompileError and RunError are raised by ParameterProgram, BusyError by the
apply transaction. All of them are recovered at the ApplyController (or CLI)
boundary and turned into a single user-facing message.
"""

from typing import Optional


class PadstackError(Exception):
    """Base class for padstack engine errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self):
        return self.message


class _PositionedError(PadstackError):
    """Error with an optional 1-based source position."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self):
        if self.line is None:
            return self.message
        return f'{self.line}:{self.column}: {self.message}'


class CompileError(_PositionedError):
    """
    Source text is syntactically or statically invalid.

    Attributes:
        message: Human readable description
        line: 1-based line of the offending token (None if unknown)
        column: 1-based column of the offending token (None if unknown)
    """


class RunError(_PositionedError):
    """
    Dynamic fault during execution, or a required parameter left undefined.
    """


class BusyError(PadstackError):
    """Apply rejected because a tool session is active."""

    def __init__(self, message: str = 'a tool is active'):
        super().__init__(message)


class ParameterValueError(PadstackError, ValueError):
    """Value cannot be stored as a parameter (not a length in nanometers)."""
