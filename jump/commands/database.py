"""Database commands for the jump CLI (add, remove, clear, show)."""

import os
import re
from typing import Optional

import click

from ..completions import complete_database_entry
from ..config import DEFAULT_WEIGHT, load_options
from ..errors import reports_errors
from ..store import (
    add_path,
    format_db,
    is_blacklisted,
    load_store,
    remove_matching,
    remove_path,
    resolve_entry_path,
    save_store,
)
from ..utils import log_info, log_verbose

WEIGHT_RE = re.compile(r"\d+")


def _is_weight(value: str) -> bool:
    return WEIGHT_RE.fullmatch(value) is not None


def parse_weight_and_path(arguments: tuple) -> tuple[int, Optional[str]]:
    """Split ``[PATH] [WEIGHT]`` arguments, accepted in either order.

    A lone argument is a path when it is a directory or not a number.
    """
    weight, path = None, None
    if len(arguments) == 2:
        first, second = arguments
        if _is_weight(second) and not (_is_weight(first) and os.path.isdir(second)):
            path, weight = first, second
        else:
            weight, path = first, second
    elif len(arguments) == 1:
        (only,) = arguments
        if os.path.isdir(only) or not _is_weight(only):
            path = only
        else:
            weight = only
    elif arguments:
        raise click.UsageError("expected at most a PATH and a WEIGHT")

    if weight is None:
        return DEFAULT_WEIGHT, path
    if not _is_weight(weight):
        raise click.BadParameter(f"weight must be a non-negative integer, got '{weight}'")
    return int(weight), path


@click.command(short_help="Add a directory or increase its weight")
@click.argument("arguments", nargs=-1, metavar="[PATH] [WEIGHT]")
@click.option("--reset", is_flag=True, help="Replace the stored weight instead of adding to it")
@reports_errors
def add(arguments: tuple, reset: bool):
    """Add PATH (default: current directory) to the database.

    If PATH is already stored, WEIGHT (default: 1) is added to its weight.
    Directories matching black_listed_directories are silently skipped.

    Examples:
        jump add
        jump add ~/work/api 10
        jump add --reset ~/work/api 3
    """
    weight, path = parse_weight_and_path(arguments)
    path = resolve_entry_path(path)

    options = load_options()
    if is_blacklisted(path, options.black_listed_directories):
        log_verbose(f"'{path}' is black listed, not adding it.")
        return

    if not os.path.isdir(path):
        raise click.ClickException(f"'{path}' is not a directory")

    db = load_store()
    if reset:
        db.pop(path, None)
    new_weight = add_path(db, path, weight)
    save_store(db)
    log_info(f"{new_weight} {path}")


@click.command(short_help="Remove a directory from the database")
@click.argument("path", required=False, shell_complete=complete_database_entry)
@reports_errors
def remove(path: Optional[str]):
    """Remove PATH (default: current directory) from the database."""
    path = resolve_entry_path(path)
    db = load_store()
    if not remove_path(db, path):
        log_info(f"Not in database: {path}")
        return
    save_store(db)
    log_info(f"Removed: {path}")


@click.command(short_help="Remove all or matching entries")
@click.argument("patterns", nargs=-1, metavar="[REGEX]...")
@click.option("--force", "-f", is_flag=True, help="Empty the database without confirmation")
@reports_errors
def clear(patterns: tuple, force: bool):
    """Remove database entries matching any REGEX.

    Without REGEX the whole database is emptied.

    Examples:
        jump clear /tmp/
        jump clear -f
    """
    if not patterns:
        if not force and not click.confirm("Remove all database entries?"):
            log_info("Cancelled.")
            return
        save_store({})
        log_info("Database cleared.")
        return

    db = load_store()
    kept = remove_matching(db, patterns)
    save_store(kept)
    log_info(f"Removed {len(db) - len(kept)} entries.")


@click.command(short_help="Show database entries")
@reports_errors
def show():
    """Print database entries, heaviest first."""
    click.echo(format_db(load_store()), nl=False)
