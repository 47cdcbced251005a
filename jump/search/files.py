"""Keep only candidate directories holding a file with a given name."""

import fnmatch
import os
from collections.abc import Iterable
from typing import Optional

from ..utils import log_debug


def directory_contains_file(directory: str, name_pattern: str, case_insensitive: bool = False) -> bool:
    """True if an immediate child file of *directory* matches the glob *name_pattern*."""
    if case_insensitive:
        name_pattern = name_pattern.lower()
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if not entry.is_file():
                        continue
                except OSError:
                    continue
                name = entry.name.lower() if case_insensitive else entry.name
                if fnmatch.fnmatchcase(name, name_pattern):
                    log_debug(f"'{directory}' contains '{entry.name}'")
                    return True
    except OSError as e:
        log_debug(f"can't list '{directory}': {e}")
    return False


def filter_by_file(
    candidates: Iterable,
    name_pattern: Optional[str],
    *,
    cwd: Optional[str] = None,
    case_insensitive: bool = False,
) -> list:
    """Filter match candidates on the files they contain.

    The candidate's source directory is inspected when it has one, its path
    otherwise. Relative paths are taken relative to *cwd*.
    """
    candidates = list(candidates)
    if name_pattern is None:
        return candidates
    cwd = cwd or os.getcwd()
    return [
        candidate
        for candidate in candidates
        if directory_contains_file(
            os.path.join(cwd, candidate.source or candidate.path),
            name_pattern,
            case_insensitive,
        )
    ]
