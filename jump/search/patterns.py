"""Compile ordered path fragments into match patterns.

Fragments are regular expressions. They are matched in order with anything
in between, so ``["pro", "src"]`` matches ``/home/me/projects/app/src``.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import PatternError

ROOT_MARKER = "/"
CWD_MARKER = "./"
GAP = ".*"


@dataclass(frozen=True)
class PatternSpec:
    """Patterns derived from one fragment sequence."""

    fragments: tuple[str, ...]
    full_pattern: re.Pattern
    end_fragment_pattern: re.Pattern
    # Captures the matched path up to the next separator (or the end).
    prefix_pattern: re.Pattern
    anchored: bool
    case_insensitive: bool

    def for_cwd(self) -> "PatternSpec":
        """Variant used below cwd, where a leading ``./`` means ``/``."""
        first = self.fragments[0]
        if self.anchored or not first.startswith(CWD_MARKER):
            return self
        rewritten = (ROOT_MARKER + first[len(CWD_MARKER):],) + self.fragments[1:]
        return _compile(rewritten, True, self.case_insensitive)


def _group(fragment: str) -> str:
    return f"(?:{fragment})"


def _compile(fragments: tuple[str, ...], anchored: bool, case_insensitive: bool) -> PatternSpec:
    flags = re.IGNORECASE if case_insensitive else 0
    joined = GAP.join(_group(f) for f in fragments)
    anchor = "^" if anchored else ""
    try:
        full_pattern = re.compile(anchor + joined, flags)
        end_fragment_pattern = re.compile(anchor + _group(fragments[-1]), flags)
        prefix_pattern = re.compile(
            "^(" + ("" if anchored else ".*") + joined + ".*?)(?:/|$)", flags
        )
    except re.error as e:
        raise PatternError(f"invalid path fragment in {list(fragments)}: {e}") from e

    return PatternSpec(
        fragments=fragments,
        full_pattern=full_pattern,
        end_fragment_pattern=end_fragment_pattern,
        prefix_pattern=prefix_pattern,
        anchored=anchored,
        case_insensitive=case_insensitive,
    )


def build_patterns(fragments: Sequence[str], case_insensitive: bool = False) -> PatternSpec:
    """Build the PatternSpec for *fragments*.

    A first fragment starting with ``/`` anchors both the full and the end
    fragment pattern to the start of the string.
    """
    fragments = tuple(fragments)
    if not fragments:
        raise PatternError("at least one path fragment is required")
    return _compile(fragments, fragments[0].startswith(ROOT_MARKER), case_insensitive)
