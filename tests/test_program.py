import pytest

from padstack import CompileError, ParameterProgram, ParameterSet, RequiredSet, RunError


def run(source, values, required=None):
    program = ParameterProgram(source)
    ps = ParameterSet(values)
    program.run(ps, RequiredSet(required) if required else None)
    return ps


def test_derived_pad_diameter():
    """Pad = hole + 2 * clearance, committed after the inputs."""
    program = ParameterProgram()
    program.set_code('pad_diameter = hole_diameter + clearance * 2')
    ps = ParameterSet({'hole_diameter': 800, 'clearance': 50})
    program.run(ps)
    assert list(ps.iterate()) == [('hole_diameter', 800), ('clearance', 50), ('pad_diameter', 900)]


def test_undefined_parameter_is_a_run_error():
    program = ParameterProgram('pad_diameter = unknown_id + 100')
    ps = ParameterSet({'hole_diameter': 800})
    with pytest.raises(RunError) as excinfo:
        program.run(ps)
    assert "undefined parameter 'unknown_id'" in str(excinfo.value)
    assert (excinfo.value.line, excinfo.value.column) == (1, 16)
    assert ps == ParameterSet({'hole_diameter': 800})


def test_empty_program_run_is_noop():
    program = ParameterProgram()
    assert program.is_empty
    ps = ParameterSet({'a': 1})
    program.run(ps, RequiredSet(['missing']))
    assert ps == ParameterSet({'a': 1})


def test_failed_set_code_keeps_previous_program():
    program = ParameterProgram()
    with pytest.raises(CompileError):
        program.set_code('pad_diameter = (')
    assert program.is_empty

    program.set_code('a = 1mm')
    compiled = program.compiled
    with pytest.raises(CompileError):
        program.set_code('pad_diameter = (')
    assert program.compiled is compiled
    assert program.source == 'a = 1mm'
    ps = ParameterSet()
    program.run(ps)
    assert ps.get('a') == 1000000


def test_non_text_source_is_a_compile_error():
    program = ParameterProgram()
    with pytest.raises(CompileError):
        program.set_code(None)
    assert program.is_empty


def test_run_is_all_or_nothing():
    """Earlier assignments are discarded when a later statement faults."""
    program = ParameterProgram('a = 1mm\nhole_diameter = 5nm\nb = 1mm / 0')
    ps = ParameterSet({'hole_diameter': 800})
    with pytest.raises(RunError) as excinfo:
        program.run(ps)
    assert 'division by zero' in str(excinfo.value)
    assert excinfo.value.line == 3
    assert ps == ParameterSet({'hole_diameter': 800})


def test_missing_required_parameter():
    program = ParameterProgram('pad_width = hole_diameter * 2')
    ps = ParameterSet({'hole_diameter': 800})
    with pytest.raises(RunError) as excinfo:
        program.run(ps, RequiredSet(['pad_width', 'pad_height']))
    assert "missing required parameter 'pad_height'" in str(excinfo.value)
    assert 'pad_width' not in ps


def test_required_parameter_from_input_is_satisfied():
    ps = run('pad_width = hole_diameter * 2', {'hole_diameter': 800, 'pad_height': 3},
             required=['pad_width', 'pad_height'])
    assert ps.get('pad_width') == 1600


@pytest.mark.parametrize('source, expected', [
    ('x = 0.1mm', 100000),
    ('x = 1mil', 25400),
    ('x = 0.01in', 254000),
    ('x = 2um + 3nm', 2003),
    ('x = hole_diameter / 3', 267),
    ('x = -hole_diameter', -800),
    ('x = +hole_diameter', 800),
    ('x = (hole_diameter + 200) * 2', None),
    ('x = 1050nm % 100nm', 50),
    ('x = max(hole_diameter, 1mm)', 1000000),
    ('x = min(hole_diameter, 1mm, 0.5mm)', 800),
    ('x = abs(0 - hole_diameter)', None),
    ('x = abs(100nm - hole_diameter)', 700),
    ('x = sqrt(hole_diameter * hole_diameter)', 800),
    ('x = round(1260nm, 100nm)', 1300),
    ('x = round(hole_diameter / 3, 10nm)', 270),
    ('x = hole_diameter * 2 / 4', 400),
    ('x = hole_diameter * 1.5', 1200),
])
def test_arithmetic(source, expected):
    if expected is None:
        # Dimension errors caught at run time
        with pytest.raises(RunError):
            run(source, {'hole_diameter': 800})
        return
    ps = run(source, {'hole_diameter': 800})
    assert ps.get('x') == expected


def test_locals_are_not_written_back():
    ps = run('let ring = 150nm\nlet k = 2\npad = hole_diameter + ring * k', {'hole_diameter': 800})
    assert ps.to_dict() == {'hole_diameter': 800, 'pad': 1100}


def test_locals_shadow_parameters():
    ps = run('let hole_diameter = 1mm\npad = hole_diameter', {'hole_diameter': 800})
    assert ps.to_dict() == {'hole_diameter': 800, 'pad': 1000000}


def test_later_statements_see_earlier_assignments():
    ps = run('a = 1mm; b = a + 1nm; a = 2nm', {})
    assert list(ps.iterate()) == [('a', 2), ('b', 1000001)]


@pytest.mark.parametrize('source, text', [
    ('x = hole_diameter + 2', "unit mismatch: cannot apply '+' to length and dimensionless value"),
    ('x = 2 - hole_diameter', 'unit mismatch'),
    ('x = hole_diameter % 3', 'unit mismatch'),
    ('x = min(hole_diameter, 2)', 'unit mismatch in min()'),
    ('x = round(hole_diameter, 2)', 'unit mismatch in round()'),
    ('x = 2', "type mismatch: parameter 'x' must be a length, got a dimensionless value"),
    ('x = hole_diameter * hole_diameter', "type mismatch: parameter 'x'"),
    ('x = hole_diameter / 0', 'arithmetic fault: division by zero'),
    ('x = hole_diameter % 0nm', 'arithmetic fault: modulo by zero'),
    ('x = sqrt(0 - 4)', 'arithmetic fault in sqrt()'),
    ('x = round(hole_diameter, 0nm)', 'arithmetic fault in round()'),
    ('let k = 1e308 * 10\nx = hole_diameter * k', 'not finite'),
])
def test_run_errors(source, text):
    ps = ParameterSet({'hole_diameter': 800})
    with pytest.raises(RunError) as excinfo:
        ParameterProgram(source).run(ps)
    assert text in str(excinfo.value)
    assert ps == ParameterSet({'hole_diameter': 800})


def test_parameter_named_like_a_builtin():
    ps = run('max = min + 1nm', {'min': 5})
    assert ps.get('max') == 6


def test_rerun_is_a_fixed_point():
    """Reapplying a purely derived program to its own output changes nothing."""
    program = ParameterProgram('pad = hole_diameter + ring * 2\nmask = pad + 50um')
    ps = ParameterSet({'hole_diameter': 800, 'ring': 150})
    program.run(ps)
    first = ps.clone()
    program.run(ps)
    assert ps == first


def test_deterministic():
    source = 'let r = round(hole_diameter / 7, 1nm)\nx = sqrt(r * r + hole_diameter * hole_diameter)'
    results = [run(source, {'hole_diameter': 800}) for _ in range(3)]
    assert results[0] == results[1] == results[2]


def test_compiled_program_metadata():
    program = ParameterProgram('let r = ring\npad = hole + r\nmask = pad + r')
    assert program.compiled.assigned == ('pad', 'mask')
    assert program.compiled.referenced == ('ring', 'hole', 'r', 'pad')
