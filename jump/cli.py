"""Jump command line interface."""

import click
import yaml

from . import __version__
from .commands import add, clear, complete, remove, search, show
from .config import (
    BOOLEAN_KEYS,
    PATTERN_KEYS,
    get_config_location,
    get_db_location,
    get_verbosity,
    load_config,
    load_options,
    save_config,
    set_verbosity,
)
from .errors import reports_errors
from .search.scanner import compile_ignore_rules
from .utils import log_info, set_log_level


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="jump")
@click.option("--verbose", "-v", count=True, help="More output, repeat for debug output")
@click.option("--quiet", "-q", is_flag=True, help="Only print results, warnings and errors")
def cli(verbose: int, quiet: bool):
    """Navigate your filesystem by fuzzy memory.

    Jump keeps a weighted database of the directories you visit and
    resolves a few path fragments to the most plausible one.

    \b
    Files:
        ~/.jump_db                    database (JUMP_DB)
        ~/.config/jump/config.yaml    configuration (JUMP_CONFIG)
    """
    set_log_level(0 if quiet else get_verbosity() + verbose)


@click.group()
def config():
    """Show and change configuration."""
    pass


@config.command(name="files")
def config_files():
    """Print the database and configuration file locations."""
    click.echo(str(get_db_location()))
    click.echo(str(get_config_location()))


@config.command(name="show")
def config_show():
    """Print the configuration in effect."""
    values = load_options().to_dict()
    values["verbosity"] = get_verbosity()
    click.echo(yaml.dump(values, default_flow_style=False), nl=False)


@config.command(name="set")
@click.argument("key", type=click.Choice([*BOOLEAN_KEYS, *PATTERN_KEYS, "verbosity"]))
@click.argument("values", nargs=-1, required=True)
@reports_errors
def config_set(key: str, values: tuple):
    """Set KEY to VALUES.

    Boolean keys take one of on/off, true/false, 1/0. ignore_path and
    black_listed_directories take one or more regular expressions.

    Examples:
        jump config set ignore_case on
        jump config set ignore_path '^\\.git$' '^node_modules$'
        jump config set verbosity 2
    """
    if key == "verbosity":
        try:
            set_verbosity(int(values[0]))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="VALUES")
        log_info(f"verbosity: {values[0]}")
        return

    settings = load_config()
    if key in BOOLEAN_KEYS:
        settings[key] = click.BOOL.convert(values[0], None, None)
    else:
        compile_ignore_rules(values)
        settings[key] = list(values)
    save_config(settings)
    log_info(f"{key}: {settings[key]}")


cli.add_command(search)
cli.add_command(complete)
cli.add_command(add)
cli.add_command(remove)
cli.add_command(clear)
cli.add_command(show)
cli.add_command(config)


def main():
    cli()


if __name__ == "__main__":
    main()
