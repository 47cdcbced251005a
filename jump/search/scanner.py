"""Recursive directory listing that prunes ignored subtrees."""

import os
import re
from collections.abc import Iterable, Iterator

from ..errors import PatternError
from ..utils import log_debug


def compile_ignore_rules(patterns: Iterable[str], case_insensitive: bool = False) -> tuple[re.Pattern, ...]:
    """Compile ignore_path patterns; they are searched in directory basenames."""
    flags = re.IGNORECASE if case_insensitive else 0
    try:
        return tuple(re.compile(p, flags) for p in patterns)
    except re.error as e:
        raise PatternError(f"invalid ignore_path pattern: {e}") from e


def is_ignored(name: str, ignore_rules: Iterable[re.Pattern]) -> bool:
    return any(rule.search(name) for rule in ignore_rules)


def is_inside_ignored(path: str, ignore_rules: Iterable[re.Pattern]) -> bool:
    """True if any directory name along *path* matches an ignore rule."""
    ignore_rules = tuple(ignore_rules)
    return any(is_ignored(name, ignore_rules) for name in path.split("/") if name)


def _skip_unreadable(error: OSError) -> None:
    log_debug(f"skipping unreadable directory '{error.filename}': {error.strerror}")


def scan_directories(root: str, ignore_rules: Iterable[re.Pattern] = ()) -> Iterator[str]:
    """Yield every directory below *root* (root itself excluded).

    Children are visited in name order. A directory whose name matches an
    ignore rule is neither yielded nor descended into. Directories that
    vanish or cannot be listed during the walk are skipped.
    """
    ignore_rules = tuple(ignore_rules)
    for dirpath, dirnames, _ in os.walk(root, onerror=_skip_unreadable):
        dirnames[:] = sorted(d for d in dirnames if not is_ignored(d, ignore_rules))
        for name in dirnames:
            yield os.path.join(dirpath, name)
