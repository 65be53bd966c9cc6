"""
Padstack document - what gets persisted to a padstack .json file.

Geometry (shapes, holes, polygons) belongs to another layer; any keys this
module does not know are carried through untouched in `Padstack.extra`.
"""

import json
import uuid as uuid_lib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from padstack.logging import logger
from padstack.parameters import ParameterSet, RequiredSet


class PadstackType(Enum):
    TOP = 'top'
    BOTTOM = 'bottom'
    THROUGH = 'through'
    VIA = 'via'
    HOLE = 'hole'
    MECHANICAL = 'mechanical'

    @classmethod
    def parse(cls, name: str) -> 'PadstackType':
        """Look up a type by its lowercase name ('top', 'via', ...)."""
        try:
            return cls(name)
        except ValueError:
            choices = ', '.join(t.value for t in cls)
            raise ValueError(f"Unknown padstack type '{name}' (expected one of {choices})") from None

    @property
    def label(self) -> str:
        return self.value.capitalize()


_KNOWN_KEYS = {'type', 'uuid', 'name', 'well_known_name', 'padstack_type',
               'parameter_set', 'parameters_required', 'parameter_program'}


@dataclass
class Padstack:
    """
    A padstack document.

    Attributes:
        name: Display name
        well_known_name: Optional well-known name used for lookups
        type: Padstack type
        parameter_program: Parameter program source text
        parameter_set: Committed parameter values (nm)
        parameters_required: Ids that must be defined by the program
        uuid: Document uuid
        extra: JSON keys owned by other layers (geometry), kept verbatim
    """
    name: str = ''
    well_known_name: str = ''
    type: PadstackType = PadstackType.TOP
    parameter_program: str = ''
    parameter_set: ParameterSet = field(default_factory=ParameterSet)
    parameters_required: RequiredSet = field(default_factory=RequiredSet)
    uuid: str = field(default_factory=lambda: str(uuid_lib.uuid4()))
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d = {
            'type': 'padstack',
            'uuid': self.uuid,
            'name': self.name,
            'well_known_name': self.well_known_name,
            'padstack_type': self.type.value,
            'parameter_set': self.parameter_set.to_dict(),
            'parameters_required': list(self.parameters_required.iterate()),
            'parameter_program': self.parameter_program,
        }
        d.update(self.extra)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'Padstack':
        """
        Build a padstack from its JSON object.

        Raises:
            ValueError: If the object is not a padstack or holds invalid values
        """
        if not isinstance(d, dict):
            raise ValueError(f'Not a padstack document (got a JSON {type(d).__name__})')
        if d.get('type') != 'padstack':
            raise ValueError(f"Not a padstack document (type is {d.get('type')!r})")
        return cls(
            name=d.get('name', ''),
            well_known_name=d.get('well_known_name', ''),
            type=PadstackType.parse(d.get('padstack_type', 'top')),
            parameter_program=d.get('parameter_program', ''),
            parameter_set=ParameterSet(d.get('parameter_set', {})),
            parameters_required=RequiredSet(d.get('parameters_required', [])),
            uuid=d.get('uuid') or str(uuid_lib.uuid4()),
            extra={k: v for k, v in d.items() if k not in _KNOWN_KEYS},
        )

    def to_json(self, indent: int = 4) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> 'Padstack':
        return cls.from_dict(json.loads(text))

    @classmethod
    def load(cls, path: str | Path) -> 'Padstack':
        path = Path(path)
        padstack = cls.from_json(path.read_text())
        logger.debug(f'Loaded padstack {padstack.name!r} from {path}')
        return padstack

    def save(self, path: str | Path, indent: int = 4) -> Path:
        path = Path(path)
        path.write_text(self.to_json(indent) + '\n')
        logger.info(f'Padstack written to {path}')
        return path

    def default_filename(self) -> str:
        return f'{self.name}.json'


def resolve_save_path(filename: str | Path, package_dir: Optional[str | Path] = None) -> Path:
    """
    Apply the save-as rules to a chosen filename.

    '.json' is appended when missing. A package-local padstack must be saved
    inside its package directory.

    Args:
        filename: Filename picked by the user
        package_dir: Package-local base directory, if any

    Raises:
        ValueError: If filename lies outside package_dir
    """
    path = Path(filename)
    if path.suffix != '.json':
        path = path.with_name(path.name + '.json')
    if package_dir is not None:
        base = Path(package_dir).resolve()
        if not path.resolve().is_relative_to(base):
            raise ValueError(f'package-local padstack must be in {package_dir}')
    return path
