"""Padstack tool configuration (log level, display unit, package directory)."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from padstack.units import LENGTH_UNITS

CONFIG_ENV = 'PADSTACK_CONFIG'


class PadstackConfig:
    """Configuration for the padstack tools.

    Values come from a YAML file; keys that are not in the file keep their
    defaults. The file is taken from the `path` argument, else from the
    PADSTACK_CONFIG environment variable. A missing file means defaults.

    Attributes:
        log_level: Logging level name for the padstack logger
        display_unit: Length unit used when printing values ('mm', 'mil', ...)
        package_dir: Package-local directory padstacks must be saved into
        json_indent: Indentation of written padstack files

    Example:
        # padstack.yaml
        log_level: WARNING
        display_unit: mil

        config = PadstackConfig.load('padstack.yaml')
    """

    DEFAULTS = {
        'log_level': 'INFO',
        'display_unit': 'mm',
        'package_dir': None,
        'json_indent': 4,
    }

    def __init__(self, **values: Any):
        unknown = set(values) - set(self.DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")
        merged = {**self.DEFAULTS, **values}
        self.log_level: str = str(merged['log_level'])
        self.display_unit: str = merged['display_unit']
        self.package_dir: Optional[Path] = Path(merged['package_dir']) if merged['package_dir'] else None
        self.json_indent: int = int(merged['json_indent'])
        if self.display_unit not in LENGTH_UNITS:
            raise ValueError(f"Unknown display_unit '{self.display_unit}'")

    @classmethod
    def load(cls, path: str | Path | None = None) -> 'PadstackConfig':
        """
        Load configuration from YAML.

        Args:
            path: Config file (defaults to $PADSTACK_CONFIG)

        Raises:
            ValueError: If the file is not a mapping or holds unknown keys
        """
        path = path or os.environ.get(CONFIG_ENV)
        if not path or not Path(path).exists():
            return cls()
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f'Configuration file {path} must contain a mapping')
        return cls(**data)

    def __repr__(self) -> str:
        return (f'PadstackConfig(log_level={self.log_level!r}, display_unit={self.display_unit!r}, '
                f'package_dir={self.package_dir!r}, json_indent={self.json_indent})')
