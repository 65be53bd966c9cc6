"""
ParameterEditor - the editor surface without any widget toolkit.

Holds what the user has typed but not yet applied or saved. The apply
transaction and the save hook pull snapshots from it; nothing here writes
to the live store or the document.
"""

from typing import Any, Callable

from padstack.document import Padstack, PadstackType
from padstack.parameters import ParameterID, ParameterSet, RequiredSet


class ParameterEditor:
    """
    Pending edits for one padstack.

    Every edit notifies the change listeners (the session uses this to mark
    the document as needing a save).

    Attributes:
        error_message: Message shown to the user ('' when there is none)
        can_apply: False while a tool is active
    """

    def __init__(self, padstack: Padstack):
        self._listeners: list[Callable[[], None]] = []
        self.error_message = ''
        self.can_apply = True
        self.load(padstack)

    def load(self, padstack: Padstack) -> None:
        """Reflect the contents of a document, discarding pending edits."""
        self._name = padstack.name
        self._well_known_name = padstack.well_known_name
        self._type = padstack.type
        self._code = padstack.parameter_program
        self._parameters = padstack.parameter_set.clone()
        self._required = padstack.parameters_required.clone()
        self.error_message = ''

    def connect_changed(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _changed(self) -> None:
        for callback in self._listeners:
            callback()

    # Edits

    def set_name(self, name: str) -> None:
        self._name = name
        self._changed()

    def set_well_known_name(self, name: str) -> None:
        self._well_known_name = name
        self._changed()

    def set_type(self, padstack_type: PadstackType | str) -> None:
        if isinstance(padstack_type, str):
            padstack_type = PadstackType.parse(padstack_type)
        self._type = padstack_type
        self._changed()

    def set_code(self, source: str) -> None:
        self._code = source
        self._changed()

    def set_parameter(self, pid: ParameterID, value: Any) -> None:
        """
        Add or edit a pending parameter value.

        Raises:
            ValueError: If pid is invalid or value is not a length
        """
        self._parameters.set(pid, value)
        self._changed()

    def remove_parameter(self, pid: ParameterID) -> None:
        """Remove a pending parameter together with its required flag."""
        self._parameters.remove(pid)
        self._required.remove(pid)
        self._changed()

    def set_required(self, pid: ParameterID, required: bool) -> None:
        if required:
            self._required.add(pid)
        else:
            self._required.remove(pid)
        self._changed()

    def show_parameters(self, parameter_set: ParameterSet) -> None:
        """Replace the pending values with parameter_set without marking a change."""
        self._parameters = parameter_set.clone()

    def set_error_message(self, message: str) -> None:
        self.error_message = message

    # Snapshots

    @property
    def name(self) -> str:
        return self._name

    @property
    def well_known_name(self) -> str:
        return self._well_known_name

    @property
    def type(self) -> PadstackType:
        return self._type

    def snapshot_source(self) -> str:
        return self._code

    def snapshot_parameters(self) -> ParameterSet:
        """Independent copy of the pending parameter values."""
        return self._parameters.clone()

    def snapshot_required(self) -> RequiredSet:
        """Independent copy of the pending required flags."""
        return self._required.clone()
