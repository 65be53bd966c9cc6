# Units
from pint import UnitRegistry
ureg = UnitRegistry(case_sensitive=True)
Q_ = ureg.Quantity

from padstack.logging import logger, set_log_level
from padstack.errors import PadstackError, CompileError, RunError, BusyError, ParameterValueError
from padstack.parameters import ParameterSet, RequiredSet, parameter_id
from padstack.program import ParameterProgram
from padstack.document import Padstack, PadstackType
from padstack.editor import ParameterEditor
from padstack.apply import ApplyController, ApplyResult
from padstack.session import PadstackSession

__all__ = [
    'ureg',
    'Q_',
    'logger',
    'set_log_level',
    'PadstackError',
    'CompileError',
    'RunError',
    'BusyError',
    'ParameterValueError',
    'ParameterSet',
    'RequiredSet',
    'parameter_id',
    'ParameterProgram',
    'Padstack',
    'PadstackType',
    'ParameterEditor',
    'ApplyController',
    'ApplyResult',
    'PadstackSession',
]
