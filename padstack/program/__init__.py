"""
The embedded parameter language: tokenizer, parser, compiler and the
ParameterProgram that ties them together.
"""

from padstack.program.compiler import CompiledProgram
from padstack.program.parser import parse
from padstack.program.program import ParameterProgram, compile_source

__all__ = [
    'CompiledProgram',
    'ParameterProgram',
    'compile_source',
    'parse',
]
