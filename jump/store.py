"""Weighted directory database.

The database is a flat text file, one ``<weight> <absolute-path>`` line per
directory. Lines of any other shape are ignored when reading. Writing always
replaces the whole file.
"""

import contextlib
import os
import re
import shutil
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Optional

from .config import DEFAULT_WEIGHT, get_db_location
from .errors import DatabaseUnreadable, DatabaseWriteFailed, PatternError
from .utils import log_debug, log_verbose, log_warning, normalize_path

ENTRY_RE = re.compile(r"(\d+) (.*)")


def parse_db(text: str) -> dict[str, int]:
    """Parse database text into a path -> weight mapping."""
    db = {}
    for line in text.split("\n"):
        match = ENTRY_RE.fullmatch(line)
        if match:
            db[match.group(2)] = int(match.group(1))
    return db


def format_db(db: Mapping[str, int]) -> str:
    """Render entries heaviest first, ties in path order."""
    entries = sorted(db.items(), key=lambda item: (-item[1], item[0]))
    return "".join(f"{weight} {path}\n" for path, weight in entries)


def load_store(location: Optional[Path] = None) -> dict[str, int]:
    """Read the database.

    A missing file is an empty database. A file that exists but cannot be
    read raises DatabaseUnreadable.
    """
    db_file = Path(location) if location is not None else get_db_location()
    try:
        text = db_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        log_debug(f"no database at '{db_file}', starting empty")
        return {}
    except (OSError, UnicodeDecodeError) as e:
        raise DatabaseUnreadable(f"can't read database '{db_file}': {e}") from e
    return parse_db(text)


def save_store(db: Mapping[str, int], location: Optional[Path] = None) -> None:
    """Rewrite the database from *db*.

    Entries that are no longer directories are dropped and negative weights
    are written as zero; both are reported as warnings. The new content goes
    to a temporary file that then replaces the database in one rename. A
    symlinked database is written through to its target, keeping the mode
    of the existing file.
    """
    db_file = Path(location) if location is not None else get_db_location()

    entries: dict[str, int] = {}
    for path, weight in db.items():
        if "\n" in path:
            log_warning(f"directory '{path!r}' contains a newline, ignoring it.")
            continue
        if not os.path.isdir(path):
            log_warning(f"directory '{path}' does not exist, ignoring it.")
            continue
        if weight < 0:
            log_warning(f"weight {weight} of '{path}' is negative, setting it to zero.")
            weight = 0
        path = normalize_path(path)
        entries[path] = entries.get(path, 0) + weight

    content = format_db(entries)
    try:
        db_file = db_file.resolve()
        db_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=db_file.parent, prefix=f".{db_file.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            with contextlib.suppress(FileNotFoundError):
                shutil.copymode(db_file, tmp_name)
            os.replace(tmp_name, db_file)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise
    except OSError as e:
        raise DatabaseWriteFailed(f"can't write database '{db_file}': {e}") from e

    log_debug(f"wrote {len(entries)} entries to '{db_file}'")


def resolve_entry_path(path: Optional[str], cwd: Optional[str] = None) -> str:
    """Absolute, normalised form of a path given on the command line."""
    cwd = cwd or os.getcwd()
    if path is None:
        return normalize_path(cwd)
    return normalize_path(os.path.normpath(os.path.join(cwd, path)))


def add_path(db: dict[str, int], path: str, weight: int = DEFAULT_WEIGHT) -> int:
    """Add *weight* to *path*, creating the entry if needed. Returns the new weight."""
    path = normalize_path(path)
    db[path] = db.get(path, 0) + weight
    return db[path]


def remove_path(db: dict[str, int], path: str) -> bool:
    path = normalize_path(path)
    if path not in db:
        log_verbose(f"'{path}' is not in the database")
        return False
    del db[path]
    return True


def _compile_all(patterns: Iterable[str]) -> list[re.Pattern]:
    try:
        return [re.compile(p) for p in patterns]
    except re.error as e:
        raise PatternError(f"invalid regular expression: {e}") from e


def remove_matching(db: Mapping[str, int], patterns: Iterable[str]) -> dict[str, int]:
    """Copy of *db* without entries matching any pattern; no patterns clears all."""
    regexes = _compile_all(patterns)
    if not regexes:
        return {}
    return {
        path: weight
        for path, weight in db.items()
        if not any(r.search(path) for r in regexes)
    }


def is_blacklisted(path: str, patterns: Iterable[str]) -> bool:
    """True if *path* matches one of the black listed directory patterns."""
    return any(r.search(path) for r in _compile_all(patterns))
