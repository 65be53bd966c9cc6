"""
ParameterProgram - compile once, run against working copies.
"""

from typing import Optional

from padstack.errors import CompileError, RunError
from padstack.logging import logger
from padstack.parameters import ParameterSet, RequiredSet
from padstack.program.compiler import CompiledProgram, compile_program
from padstack.program.parser import parse


def compile_source(source: str) -> CompiledProgram:
    """
    Parse and compile source text.

    Raises:
        CompileError: On the first error, with line and column
    """
    if not isinstance(source, str):
        raise CompileError(f'program source must be text, got {type(source).__name__}')
    return compile_program(parse(source), source)


class ParameterProgram:
    """
    Holds the source and compiled form of a padstack's parameter program.

    The program starts Empty. `set_code` moves it to Compiled, or leaves it
    exactly as it was if compilation fails. `run` never modifies the caller's
    parameter set unless the whole program succeeded.

    Example:
        program = ParameterProgram()
        program.set_code('pad_diameter = hole_diameter + clearance * 2')
        ps = ParameterSet({'hole_diameter': 800, 'clearance': 50})
        program.run(ps)
        ps.get('pad_diameter')  # 900
    """

    def __init__(self, source: Optional[str] = None):
        self._compiled: Optional[CompiledProgram] = None
        if source is not None:
            self.set_code(source)

    @property
    def compiled(self) -> Optional[CompiledProgram]:
        return self._compiled

    @property
    def source(self) -> Optional[str]:
        """Source of the current compiled program (None when Empty)."""
        return self._compiled.source if self._compiled else None

    @property
    def is_empty(self) -> bool:
        return self._compiled is None

    def set_code(self, source: str) -> None:
        """
        Compile source and make it the current program.

        Args:
            source: Program text

        Raises:
            CompileError: If source does not compile. The previously compiled
                program (or the Empty state) is kept.
        """
        try:
            compiled = compile_source(source)
        except CompileError as e:
            logger.debug(f'Parameter program did not compile: {e}')
            raise
        self._compiled = compiled
        logger.debug(f'Compiled parameter program ({len(compiled.steps)} statement(s))')

    def run(self, parameter_set: ParameterSet, required: Optional[RequiredSet] = None) -> None:
        """
        Run the program against parameter_set.

        Execution happens on a working copy; the results are written back in
        place only if every statement succeeded and every required parameter
        is defined afterwards. Running an Empty program is a no-op.

        Args:
            parameter_set: Input values, updated in place on success
            required: Ids that must be defined after the run

        Raises:
            RunError: On a run-time fault or a missing required parameter.
                parameter_set is left unchanged.
        """
        if self._compiled is None:
            return
        working = parameter_set.clone()
        self._compiled.execute(working)
        if required is not None:
            missing = required.missing_from(working)
            if missing:
                names = ', '.join(f"'{pid}'" for pid in missing)
                raise RunError(f'missing required parameter {names}')
        parameter_set.replace(working)
        logger.debug(f'Parameter program ran, {len(parameter_set)} parameter(s) defined')

    def restore(self, compiled: Optional[CompiledProgram]) -> None:
        """
        Reinstate a compiled form taken earlier from `compiled`.

        Used by the apply transaction to roll back a SetCode whose run failed.
        """
        self._compiled = compiled
