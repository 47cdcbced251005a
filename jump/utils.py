"""Shared helpers: leveled output and path normalisation."""

import click

_log_level = 1


def set_log_level(level: int) -> None:
    """Set how chatty log_* helpers are (0 silent .. 3 debug)."""
    global _log_level
    _log_level = max(0, level)


def log_info(message: str) -> None:
    """Print a message at normal verbosity (level >= 1)."""
    if _log_level >= 1:
        click.echo(message)


def log_verbose(message: str) -> None:
    """Print to stderr at verbose level (>= 2)."""
    if _log_level >= 2:
        click.echo(message, err=True)


def log_debug(message: str) -> None:
    """Print to stderr at debug level (>= 3)."""
    if _log_level >= 3:
        click.echo(click.style(message, dim=True), err=True)


def log_warning(message: str) -> None:
    """Always print a warning to stderr."""
    click.echo(click.style(f"Jump: Warning, {message}", fg="yellow"), err=True)


def normalize_path(path: str) -> str:
    """Strip trailing separators, keeping the filesystem root intact."""
    return path.rstrip("/") or "/"
