"""
ParameterSet and RequiredSet - the data the parameter program works on.
"""

import re
from typing import Any, Iterable, Iterator, Optional

from padstack.units import to_nm

ParameterID = str

_ID_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
KEYWORDS = frozenset({'let'})


def parameter_id(name: str) -> ParameterID:
    """
    Validate a parameter identifier.

    Args:
        name: Candidate identifier (e.g. 'pad_diameter')

    Returns:
        The identifier unchanged

    Raises:
        ValueError: If name is not an identifier or is a language keyword
    """
    if not isinstance(name, str) or not _ID_RE.match(name):
        raise ValueError(f'Invalid parameter id {name!r}')
    if name in KEYWORDS:
        raise ValueError(f"'{name}' is reserved and cannot be used as a parameter id")
    return name


class ParameterSet:
    """
    Ordered mapping of parameter ids to integer nanometer values.

    Iteration follows insertion order so editors render parameters in a
    stable order. Overwriting an existing id keeps its position.
    No internal locking: callers serialize access.

    Example:
        ps = ParameterSet({'hole_diameter': 800, 'clearance': 50})
        ps.set('pad_diameter', 900)
        list(ps.iterate())
        # [('hole_diameter', 800), ('clearance', 50), ('pad_diameter', 900)]
    """

    def __init__(self, values: Optional[dict[str, Any] | Iterable[tuple[str, Any]]] = None):
        self._values: dict[ParameterID, int] = {}
        if values is not None:
            pairs = values.items() if isinstance(values, dict) else values
            for pid, value in pairs:
                self.set(pid, value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> 'ParameterSet':
        return cls(list(pairs))

    def get(self, pid: ParameterID, default: Optional[int] = None) -> Optional[int]:
        """Return the value of pid, or default if it is not defined."""
        return self._values.get(pid, default)

    def set(self, pid: ParameterID, value: Any) -> None:
        """
        Define or overwrite a parameter.

        Args:
            pid: Parameter id
            value: int nanometers or a pint length quantity

        Raises:
            ValueError: If pid is not a valid id
            ParameterValueError: If value is not a length
        """
        self._values[parameter_id(pid)] = to_nm(value)

    def remove(self, pid: ParameterID) -> None:
        """Remove pid. Removing an undefined id is a no-op."""
        self._values.pop(pid, None)

    def iterate(self) -> Iterator[tuple[ParameterID, int]]:
        """Yield (id, value) pairs in display order."""
        return iter(list(self._values.items()))

    def keys(self) -> list[ParameterID]:
        return list(self._values)

    def clone(self) -> 'ParameterSet':
        """Return an independent copy."""
        other = ParameterSet()
        other._values = dict(self._values)
        return other

    def update(self, other: 'ParameterSet') -> None:
        """Set every parameter of other, in other's order."""
        for pid, value in other.iterate():
            self._values[pid] = value

    def replace(self, other: 'ParameterSet') -> None:
        """Make this set's contents an exact copy of other, in place."""
        self._values = dict(other._values)

    def to_dict(self) -> dict[ParameterID, int]:
        return dict(self._values)

    def __contains__(self, pid: object) -> bool:
        return pid in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[ParameterID]:
        return iter(list(self._values))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParameterSet):
            return list(self._values.items()) == list(other._values.items())
        return NotImplemented

    def __repr__(self) -> str:
        items = ', '.join(f'{k}={v}' for k, v in self._values.items())
        return f'ParameterSet({items})'


class RequiredSet:
    """
    Set of parameter ids that must be defined after a successful run.

    Membership is independent of what the ParameterSet currently holds;
    enforcement is done by ParameterProgram.run.
    """

    def __init__(self, ids: Optional[Iterable[ParameterID]] = None):
        self._ids: set[ParameterID] = set()
        for pid in ids or ():
            self.add(pid)

    def add(self, pid: ParameterID) -> None:
        self._ids.add(parameter_id(pid))

    def remove(self, pid: ParameterID) -> None:
        """Remove pid. Removing a non-member is a no-op."""
        self._ids.discard(pid)

    def contains(self, pid: ParameterID) -> bool:
        return pid in self._ids

    def iterate(self) -> Iterator[ParameterID]:
        """Yield ids in sorted order."""
        return iter(sorted(self._ids))

    def missing_from(self, parameter_set: ParameterSet) -> list[ParameterID]:
        """Return the required ids not defined in parameter_set, sorted."""
        return [pid for pid in self.iterate() if pid not in parameter_set]

    def clone(self) -> 'RequiredSet':
        return RequiredSet(self._ids)

    def replace(self, other: 'RequiredSet') -> None:
        self._ids = set(other._ids)

    def __contains__(self, pid: object) -> bool:
        return pid in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[ParameterID]:
        return self.iterate()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RequiredSet):
            return self._ids == other._ids
        return NotImplemented

    def __repr__(self) -> str:
        return f"RequiredSet({', '.join(self.iterate())})"
