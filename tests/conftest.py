import pytest

from padstack import Padstack, PadstackType, ParameterSet, RequiredSet


@pytest.fixture
def via():
    """Via padstack whose program derives the pad from hole and clearance."""
    return Padstack(
        name='via_0.8',
        type=PadstackType.VIA,
        parameter_program='pad_diameter = hole_diameter + clearance * 2',
        parameter_set=ParameterSet({'hole_diameter': 800, 'clearance': 50}),
        parameters_required=RequiredSet(['pad_diameter']),
    )
