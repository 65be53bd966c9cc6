import pytest

from padstack import Q_, ParameterSet, ParameterValueError, RequiredSet, parameter_id


def test_parameter_id_validation():
    """Ids follow identifier rules and may not be the 'let' keyword."""
    assert parameter_id('pad_diameter') == 'pad_diameter'
    assert parameter_id('_x1') == '_x1'
    # Built-in function names are only special in call position
    assert parameter_id('min') == 'min'
    for bad in ['', '1abc', 'pad-diameter', 'a b', 'let', None]:
        with pytest.raises(ValueError):
            parameter_id(bad)


def test_set_keeps_display_order():
    ps = ParameterSet()
    ps.set('b', 2)
    ps.set('a', 1)
    ps.set('c', 3)
    ps.set('b', 20)  # overwrite keeps position
    assert list(ps.iterate()) == [('b', 20), ('a', 1), ('c', 3)]
    assert ps.keys() == ['b', 'a', 'c']
    assert len(ps) == 3


def test_get_and_remove():
    ps = ParameterSet({'hole_diameter': 800})
    assert ps.get('hole_diameter') == 800
    assert ps.get('missing') is None
    assert ps.get('missing', 5) == 5
    ps.remove('hole_diameter')
    ps.remove('hole_diameter')  # absent id is a no-op
    assert 'hole_diameter' not in ps
    assert len(ps) == 0


def test_set_normalizes_lengths():
    """Lengths are stored as integer nanometers."""
    ps = ParameterSet()
    ps.set('a', Q_(0.8, 'millimeter'))
    ps.set('b', Q_(31.5, 'nanometer'))
    assert ps.get('a') == 800000
    assert isinstance(ps.get('a'), int)
    assert ps.get('b') == 32  # half to even


def test_set_rejects_non_lengths():
    ps = ParameterSet()
    for bad in [1.5, True, '800', Q_(2), Q_(1, 'nanometer') ** 2]:
        with pytest.raises(ParameterValueError):
            ps.set('a', bad)
    assert len(ps) == 0


def test_clone_is_independent():
    ps = ParameterSet({'a': 1, 'b': 2})
    copy = ps.clone()
    copy.set('a', 10)
    copy.set('c', 3)
    assert ps.to_dict() == {'a': 1, 'b': 2}
    assert copy == ParameterSet([('a', 10), ('b', 2), ('c', 3)])


def test_equality_includes_order():
    assert ParameterSet([('a', 1), ('b', 2)]) == ParameterSet([('a', 1), ('b', 2)])
    assert ParameterSet([('a', 1), ('b', 2)]) != ParameterSet([('b', 2), ('a', 1)])


def test_update_and_replace():
    ps = ParameterSet({'a': 1, 'b': 2})
    ps.update(ParameterSet({'b': 20, 'c': 3}))
    assert list(ps.iterate()) == [('a', 1), ('b', 20), ('c', 3)]

    target = ParameterSet({'x': 1})
    alias = target
    target.replace(ParameterSet([('c', 3), ('a', 1)]))
    assert alias is target
    assert list(target.iterate()) == [('c', 3), ('a', 1)]


def test_from_pairs():
    ps = ParameterSet.from_pairs(iter([('b', 2), ('a', 1)]))
    assert ps.keys() == ['b', 'a']


def test_required_set_membership():
    req = RequiredSet(['pad_diameter'])
    req.add('hole_diameter')
    assert req.contains('pad_diameter')
    assert 'hole_diameter' in req
    req.remove('pad_diameter')
    req.remove('never_added')  # no-op
    assert not req.contains('pad_diameter')
    assert list(req.iterate()) == ['hole_diameter']
    with pytest.raises(ValueError):
        req.add('not an id')


def test_required_set_is_independent_of_store():
    """Membership does not depend on presence in the parameter set."""
    req = RequiredSet(['pad_width', 'pad_height'])
    ps = ParameterSet({'pad_height': 500})
    assert req.missing_from(ps) == ['pad_width']
    assert len(req) == 2


def test_required_set_iterates_sorted():
    req = RequiredSet(['c', 'a', 'b'])
    assert list(req) == ['a', 'b', 'c']
    copy = req.clone()
    copy.remove('a')
    assert 'a' in req
