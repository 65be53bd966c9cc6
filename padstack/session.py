"""
PadstackSession - owns a padstack document and its live parameter state.

The session is what a padstack editor window talks to. Lifecycle events
are plain method calls made at defined points:

    session.before_save()                # editor fields -> document
    session.apply()                      # Apply transaction
    session.on_tool_state_changed(True)  # a tool started / stopped
"""

from pathlib import Path
from typing import Callable, Optional

from padstack.apply import ApplyController, ApplyResult
from padstack.document import Padstack, resolve_save_path
from padstack.editor import ParameterEditor
from padstack.errors import CompileError
from padstack.logging import logger
from padstack.parameters import ParameterSet, RequiredSet
from padstack.program import ParameterProgram


class PadstackSession:
    """
    Live state of one open padstack.

    Attributes:
        padstack: The document
        parameter_set: Live (committed) parameter values
        parameters_required: Committed required ids
        program: Live ParameterProgram
        editor: Pending edits
        tool_active: True while a tool session is running
        needs_save: True once anything changed since the last save

    Args:
        padstack: Document to open
        rebuild: Geometry rebuild hook, called with (parameter_set, reason)
        redraw: Canvas redraw hook
    """

    def __init__(self,
                 padstack: Padstack,
                 rebuild: Optional[Callable[[ParameterSet, str], None]] = None,
                 redraw: Optional[Callable[[], None]] = None):
        self._rebuild_hook = rebuild
        self._redraw_hook = redraw
        self.parameter_set = ParameterSet()
        self.parameters_required = RequiredSet()
        self.program = ParameterProgram()
        self.editor = ParameterEditor(padstack)
        self.editor.connect_changed(self.set_needs_save)
        self.tool_active = False
        self.needs_save = False
        self.controller = ApplyController(
            self.program,
            self.parameter_set,
            self.parameters_required,
            self.editor,
            tool_active=lambda: self.tool_active,
            rebuild=self.rebuild,
            redraw=self.redraw,
        )
        self.load(padstack)

    def load(self, padstack: Padstack) -> None:
        """
        (Re)load a document: the live state and the editor are reset from it
        and the parameter program is discarded and recompiled.
        """
        self.padstack = padstack
        self.parameter_set.replace(padstack.parameter_set)
        self.parameters_required.replace(padstack.parameters_required)
        self.editor.load(padstack)
        self.program = ParameterProgram()
        self.controller.program = self.program
        try:
            self.program.set_code(padstack.parameter_program)
        except CompileError as e:
            logger.warning(f'Parameter program of {padstack.name!r} does not compile: {e}')
        self.needs_save = False

    def reload(self) -> None:
        self.load(self.padstack)

    def set_needs_save(self) -> None:
        self.needs_save = True

    def before_save(self) -> None:
        """Collect the editor's current fields into the document."""
        doc = self.padstack
        editor = self.editor
        doc.name = editor.name
        doc.well_known_name = editor.well_known_name
        doc.type = editor.type
        doc.parameter_program = editor.snapshot_source()
        doc.parameter_set = editor.snapshot_parameters()
        doc.parameters_required = editor.snapshot_required()

    def save(self, path: str | Path, indent: int = 4) -> Path:
        """Run the save hook and write the document."""
        self.before_save()
        path = self.padstack.save(path, indent)
        self.needs_save = False
        return path

    def save_as(self, filename: str | Path, package_dir: Optional[str | Path] = None,
                indent: int = 4) -> Path:
        """
        Save under a user-chosen filename.

        Raises:
            ValueError: If a package-local padstack is saved outside package_dir
        """
        return self.save(resolve_save_path(filename, package_dir), indent)

    def apply(self) -> ApplyResult:
        result = self.controller.apply()
        if result.ok:
            self.editor.show_parameters(self.parameter_set)
            self.needs_save = True
        return result

    def on_tool_state_changed(self, active: bool) -> None:
        self.tool_active = active
        self.editor.can_apply = not active

    def rebuild(self, reason: str) -> None:
        logger.debug(f'Rebuild: {reason}')
        if self._rebuild_hook is not None:
            self._rebuild_hook(self.parameter_set, reason)

    def redraw(self) -> None:
        if self._redraw_hook is not None:
            self._redraw_hook()
