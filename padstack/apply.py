"""
ApplyController - compile, run and commit as one transaction.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from padstack.editor import ParameterEditor
from padstack.errors import BusyError, CompileError, PadstackError, RunError
from padstack.logging import logger
from padstack.parameters import ParameterSet, RequiredSet
from padstack.program import ParameterProgram


@dataclass
class ApplyResult:
    """
    Outcome of one Apply.

    Attributes:
        ok: True if the new parameter set was committed
        message: User-facing message ('' on success)
        error: The recovered error, if any
    """
    ok: bool
    message: str = ''
    error: Optional[PadstackError] = None

    def __bool__(self):
        return self.ok


class ApplyController:
    """
    Runs the Apply transaction for a padstack session.

    Either the live parameter set advances to a fully validated new state
    and the rebuild/redraw hooks run, or nothing changes at all: not the live
    store, not the committed required ids, not the compiled program.

    Args:
        program: Live ParameterProgram
        store: Live ParameterSet, replaced in place on commit
        required: Committed RequiredSet, replaced in place on commit
        editor: Editor surface the pending values are pulled from
        tool_active: Returns True while a tool session is running
        rebuild: Called with a reason after a commit to regenerate geometry
        redraw: Called after rebuild
    """

    def __init__(self,
                 program: ParameterProgram,
                 store: ParameterSet,
                 required: RequiredSet,
                 editor: ParameterEditor,
                 tool_active: Callable[[], bool],
                 rebuild: Callable[[str], None],
                 redraw: Callable[[], None]):
        self.program = program
        self.store = store
        self.required = required
        self.editor = editor
        self.tool_active = tool_active
        self.rebuild = rebuild
        self.redraw = redraw

    def apply(self) -> ApplyResult:
        """
        Compile the editor's program, run it on the editor's pending values
        and commit the result.

        All engine errors are recovered here and reported in the result.
        """
        try:
            working, required = self._run_transaction()
        except BusyError as e:
            logger.info(f'Apply rejected: {e}')
            return ApplyResult(False, f'Apply not possible: {e}', e)
        except CompileError as e:
            return self._fail(f'Compile error: {e}', e)
        except RunError as e:
            return self._fail(f'Run error: {e}', e)

        self.store.replace(working)
        self.required.replace(required)
        self.editor.set_error_message('')
        logger.info(f'Applied parameter set ({len(working)} parameter(s))')
        self.rebuild('apply parameter set')
        self.redraw()
        return ApplyResult(True)

    def _run_transaction(self) -> tuple[ParameterSet, RequiredSet]:
        if self.tool_active():
            raise BusyError()

        working = self.editor.snapshot_parameters()
        required = self.editor.snapshot_required()
        source = self.editor.snapshot_source()

        previous = self.program.compiled
        self.program.set_code(source)
        try:
            self.program.run(working, required)
        except RunError:
            self.program.restore(previous)
            raise
        return working, required

    def _fail(self, message: str, error: PadstackError) -> ApplyResult:
        logger.warning(message)
        self.editor.set_error_message(message)
        return ApplyResult(False, message, error)
