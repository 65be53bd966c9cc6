import pytest

from padstack import Q_, ParameterValueError
from padstack.units import format_length, is_length, length, parse_length, to_nm


def test_length_literals():
    assert length(800) == Q_(800, 'nanometer')
    assert length(2, 'um').to('nanometer').magnitude == 2000
    assert length(1, 'mil').to('nanometer').magnitude == 25400
    assert is_length(length(1, 'in'))
    assert not is_length(Q_(3))
    assert not is_length(800)


def test_to_nm():
    assert to_nm(900) == 900
    assert to_nm(Q_(1.2, 'micrometer')) == 1200
    with pytest.raises(ParameterValueError):
        to_nm(Q_(1, 'second'))
    with pytest.raises(ParameterValueError):
        to_nm(False)


def test_parse_length():
    assert parse_length('800') == 800
    assert parse_length('0.8mm') == 800000
    assert parse_length(' 31.5 mil ') == 800100
    assert parse_length('-50um') == -50000
    assert parse_length('2', default_unit='mm') == 2000000
    for bad in ['', 'mm', '1.2.3', '5 parsecs']:
        with pytest.raises(ParameterValueError):
            parse_length(bad)


def test_format_length():
    assert format_length(900, 'nm') == '900 nm'
    assert format_length(800000, 'mm') == '0.8 mm'
    assert format_length(25400, 'mil') == '1 mil'
