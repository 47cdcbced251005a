"""Navigation commands for the jump CLI (search, complete)."""

import shlex

import click

from ..completions import complete_fragments
from ..config import load_options
from ..errors import reports_errors
from ..search import FIND_ALL, FIND_FIRST, resolve
from ..utils import log_verbose


def matching_options(f):
    """Attach the matching switches shared by search and complete."""
    f = click.option("--no-sub-db", is_flag=True,
                     help="Ignore directories under database entries")(f)
    f = click.option("--no-sub-cwd", is_flag=True,
                     help="Ignore directories and sub directories under cwd")(f)
    f = click.option("--no-direct-path", is_flag=True,
                     help="Ignore directories directly under cwd")(f)
    f = click.option("--ignore-case", "-i", is_flag=True,
                     help="Match fragments case insensitively")(f)
    f = click.option("--file", "file_pattern", metavar="GLOB",
                     help="Only directories containing a file matching GLOB")(f)
    return f


def _resolve(fragments, mode, file_pattern, ignore_case, no_direct_path, no_sub_cwd, no_sub_db):
    # Flags only switch things on; unset flags leave the config value alone.
    options = load_options(
        ignore_case=ignore_case or None,
        no_direct_path=no_direct_path or None,
        no_sub_cwd=no_sub_cwd or None,
        no_sub_db=no_sub_db or None,
    )
    return resolve(fragments, mode, options, file_pattern=file_pattern)


@click.command(short_help="Print the best matching directory")
@click.argument("fragments", nargs=-1, required=True, shell_complete=complete_fragments)
@matching_options
@click.option("--quote", is_flag=True, help="Quote the path for use in a shell")
@reports_errors
def search(fragments: tuple, quote: bool, **switches):
    """Print the directory that best matches FRAGMENTS.

    Fragments are regular expressions matched in order, anything may sit
    between them. Exits with status 1 when nothing matches.

    Examples:
        jump search proj
        jump search work api src
        jump search --file '*.toml' api
    """
    matches = _resolve(fragments, FIND_FIRST, **switches)
    if not matches:
        log_verbose("No match.")
        click.get_current_context().exit(1)

    best = matches[0]
    log_verbose(f"{best.tier.description}, weight {best.weight}, path weight {best.cumulated_path_weight}")
    click.echo(shlex.quote(best.path) if quote else best.path)


@click.command(short_help="Print every matching directory")
@click.argument("fragments", nargs=-1, shell_complete=complete_fragments)
@matching_options
@reports_errors
def complete(fragments: tuple, **switches):
    """Print all directories matching FRAGMENTS, best first, one per line.

    Used to drive shell completion. With -v the tier that produced each
    match is printed on stderr.
    """
    for match in _resolve(fragments, FIND_ALL, **switches):
        click.echo(match.path)
        detail = f" ({match.source})" if match.source else ""
        log_verbose(f"  {match.tier.description}{detail}")
