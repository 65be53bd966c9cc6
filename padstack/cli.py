import click

from padstack.config import PadstackConfig
from padstack.document import Padstack
from padstack.errors import CompileError, ParameterValueError
from padstack.logging import set_log_level
from padstack.program import compile_source
from padstack.session import PadstackSession
from padstack.units import format_length, parse_length


def _load(path):
    try:
        return Padstack.load(path)
    except ValueError as e:
        raise click.ClickException(f'Cannot read {path}: {e}')


def _echo_parameters(parameter_set, required, unit):
    for pid, value in parameter_set.iterate():
        flag = ' (required)' if pid in required else ''
        click.echo(f'  {pid} = {format_length(value, unit)}{flag}')
    missing = required.missing_from(parameter_set)
    for pid in missing:
        click.echo(f'  {pid} = <undefined> (required)')


def _parse_override(text):
    pid, sep, value = text.partition('=')
    if not sep:
        raise click.BadParameter(f"expected id=value, got '{text}'")
    try:
        return pid.strip(), parse_length(value, default_unit='nm')
    except ParameterValueError as e:
        raise click.BadParameter(str(e))


@click.group()
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False),
              help='YAML configuration file (default: $PADSTACK_CONFIG)')
@click.option('-v', '--verbose', is_flag=True, help='Log compile and run details')
@click.pass_context
def cli(ctx, config_path, verbose):
    """ Parametric padstack tools """
    try:
        config = PadstackConfig.load(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))
    set_log_level('DEBUG' if verbose else config.log_level)
    ctx.obj = config


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def check(config, file):
    """ Compile the parameter program of padstack FILE """
    padstack = _load(file)
    try:
        compiled = compile_source(padstack.parameter_program)
    except CompileError as e:
        raise click.ClickException(f'Compile error: {e}')
    click.echo(f'{padstack.name}: program OK ({len(compiled.steps)} statement(s))')
    if compiled.assigned:
        click.echo(f"  computes: {', '.join(compiled.assigned)}")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('-s', '--set', 'overrides', multiple=True, metavar='ID=VALUE',
              help='Pending parameter edit, e.g. -s clearance=0.05mm (repeatable)')
@click.option('-w', '--write', is_flag=True, help='Save the applied padstack back to FILE')
@click.pass_obj
def apply(config, file, overrides, write):
    """ Apply the parameter program of padstack FILE """
    padstack = _load(file)
    session = PadstackSession(padstack)
    for text in overrides:
        pid, value = _parse_override(text)
        try:
            session.editor.set_parameter(pid, value)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint='--set')

    result = session.apply()
    if not result:
        raise click.ClickException(result.message)

    click.echo(f'{padstack.name}: applied')
    _echo_parameters(session.parameter_set, session.parameters_required, config.display_unit)
    if write:
        session.save(file, indent=config.json_indent)
        click.echo(f'Written {file}')


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def show(config, file):
    """ Show name, type and parameters of padstack FILE """
    padstack = _load(file)
    click.echo(f'Name: {padstack.name}')
    if padstack.well_known_name:
        click.echo(f'Well-known name: {padstack.well_known_name}')
    click.echo(f'Type: {padstack.type.label}')
    click.echo('Parameters:')
    _echo_parameters(padstack.parameter_set, padstack.parameters_required, config.display_unit)
