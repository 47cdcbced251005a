"""Error types raised by the jump engine and their CLI translation."""

import functools

import click


class JumpError(Exception):
    """Base class for jump failures."""


class DatabaseError(JumpError):
    """The weight database could not be read or written."""


class DatabaseUnreadable(DatabaseError):
    """The database file exists but cannot be opened for reading."""


class DatabaseWriteFailed(DatabaseError):
    """Rewriting the database file failed; the previous file is untouched."""


class PatternError(JumpError, ValueError):
    """A path fragment or ignore rule is not a usable regular expression."""


def reports_errors(f):
    """Decorator turning engine errors into click errors (non-zero exit)."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except JumpError as e:
            raise click.ClickException(str(e)) from e

    return wrapper
