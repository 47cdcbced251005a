"""Resolve path fragments into ranked candidate directories.

Resolution runs a fixed cascade of tiers:

1. direct path: the single fragment is an existing directory
2. database entries whose last directory matches the end fragment exactly
3. database entries whose last directory contains the end fragment
4. the part of a database entry matched by the fragments
5. directories below cwd
6. directories below database entries

Each tier is ranked on its own (weight, then cumulated path weight, both
heaviest first, then path) and the tiers are concatenated in that order.
A path produced by an earlier tier is never repeated by a later one. The two
scanning tiers only run when nothing matched before them, unless every
match is wanted.
"""

import enum
import os
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from ..config import ResolutionOptions
from ..store import load_store
from ..utils import log_debug
from .files import filter_by_file
from .patterns import CWD_MARKER, PatternSpec, build_patterns
from .scanner import compile_ignore_rules, is_inside_ignored, scan_directories

FIND_FIRST = "first"
FIND_ALL = "all"

SUB_DATABASE_WEIGHT = 1


class Tier(enum.IntEnum):
    """Cascade stages, in merge order."""

    DIRECT_PATH = 1
    DIRECTORY_FULL = 2
    DIRECTORY_PARTIAL = 3
    PATH_PARTIAL = 4
    CWD_SUB_DIRECTORY = 5
    SUB_DATABASE = 6

    @property
    def description(self) -> str:
        return _TIER_DESCRIPTIONS[self]


_TIER_DESCRIPTIONS = {
    Tier.DIRECT_PATH: "directory in file system",
    Tier.DIRECTORY_FULL: "end directory in db entry",
    Tier.DIRECTORY_PARTIAL: "part of end directory in db entry",
    Tier.PATH_PARTIAL: "part of path in db entry",
    Tier.CWD_SUB_DIRECTORY: "sub directory under cwd",
    Tier.SUB_DATABASE: "sub directory under a db entry",
}


@dataclass(frozen=True)
class MatchCandidate:
    """One resolved directory and the numbers it is ranked by."""

    path: str
    weight: int
    cumulated_path_weight: int
    tier: Tier
    source: Optional[str] = None  # db entry behind a partial path


def rank_key(candidate: MatchCandidate) -> tuple:
    return (-candidate.weight, -candidate.cumulated_path_weight, candidate.path)


def cumulated_path_weight(db: Mapping[str, int], path: str) -> int:
    """Sum the weights of every prefix of *path* (itself included) that is in *db*."""
    total = 0
    prefix = ""
    # Only named segments build prefixes, so a "/" entry never counts.
    for segment in path.split("/"):
        if not segment:
            continue
        prefix += "/" + segment
        total += db.get(prefix, 0)
    return total


def _last_segment(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]


# Database entry classifiers, tried in order; the first hit decides the tier.

def classify_directory_full(entry: str, spec: PatternSpec) -> Optional[Tier]:
    if spec.end_fragment_pattern.fullmatch(_last_segment(entry)) and spec.full_pattern.search(entry):
        return Tier.DIRECTORY_FULL
    return None


def classify_directory_partial(entry: str, spec: PatternSpec) -> Optional[Tier]:
    if spec.end_fragment_pattern.search(_last_segment(entry)) and spec.full_pattern.search(entry):
        return Tier.DIRECTORY_PARTIAL
    return None


def classify_path_partial(entry: str, spec: PatternSpec) -> Optional[Tier]:
    if spec.full_pattern.search(entry):
        return Tier.PATH_PARTIAL
    return None


ENTRY_CLASSIFIERS: tuple[Callable[[str, PatternSpec], Optional[Tier]], ...] = (
    classify_directory_full,
    classify_directory_partial,
    classify_path_partial,
)


def classify_entry(entry: str, spec: PatternSpec) -> Optional[Tier]:
    for classifier in ENTRY_CLASSIFIERS:
        tier = classifier(entry, spec)
        if tier is not None:
            return tier
    return None


def match_direct_path(fragments: Sequence[str], cwd: str, options: ResolutionOptions) -> list[MatchCandidate]:
    """A single fragment naming an existing directory, absolute or below cwd."""
    if len(fragments) != 1 or options.no_direct_path:
        return []

    fragment = fragments[0]
    if fragment.startswith("/") and os.path.isdir(fragment):
        log_debug(f"matches full path in file system: {fragment}")
        return [MatchCandidate(fragment, 0, 0, Tier.DIRECT_PATH)]

    if os.path.isdir(os.path.join(cwd, fragment)):
        relative = fragment
        while relative.startswith(CWD_MARKER):
            relative = relative[len(CWD_MARKER):].lstrip("/")
        relative = relative.lstrip("/") or "."
        log_debug(f"matches directory under cwd: {relative}")
        return [MatchCandidate(relative, 0, 0, Tier.DIRECT_PATH)]

    return []


def match_database(db: Mapping[str, int], spec: PatternSpec) -> dict[Tier, list[MatchCandidate]]:
    """Classify every database entry into the three database tiers."""
    tiers = {Tier.DIRECTORY_FULL: [], Tier.DIRECTORY_PARTIAL: [], Tier.PATH_PARTIAL: []}

    for entry in sorted(db):
        tier = classify_entry(entry, spec)
        if tier is None:
            continue

        weight = db[entry]
        path_weight = cumulated_path_weight(db, entry)

        if tier is Tier.PATH_PARTIAL:
            match = spec.prefix_pattern.match(entry)
            if not match or not match.group(1):
                continue
            path = match.group(1)
            source = entry if path != entry else None
            tiers[tier].append(MatchCandidate(path, weight, path_weight, tier, source))
        else:
            tiers[tier].append(MatchCandidate(entry, weight, path_weight, tier))
        log_debug(f"{tier.description}: {entry}")

    return tiers


def _match_below(root: str, directory: str, spec: PatternSpec, subject_spec: PatternSpec) -> Optional[str]:
    """Matched path for a scanned *directory* below *root*, or None.

    Anchored patterns are tested on the absolute path, others on the part
    below *root*. Only matches strictly below *root* count.
    """
    base = root.rstrip("/")
    subject = directory if spec.anchored else directory[len(base):]
    match = subject_spec.prefix_pattern.match(subject)
    if not match or not match.group(1):
        return None
    path = match.group(1) if spec.anchored else base + match.group(1)
    if not path.startswith(base + "/"):
        return None
    return path


def match_cwd_sub_directories(
    db: Mapping[str, int], spec: PatternSpec, cwd: str, ignore_rules: Iterable
) -> list[MatchCandidate]:
    """Directories below cwd matching the fragments."""
    if is_inside_ignored(cwd, ignore_rules):
        log_debug(f"cwd '{cwd}' is inside an ignored directory, not scanning it")
        return []

    cwd_spec = spec.for_cwd()
    candidates = []
    for directory in scan_directories(cwd, ignore_rules):
        path = _match_below(cwd, directory, spec, cwd_spec)
        if path is None:
            continue
        log_debug(f"matches sub directory under cwd: {directory}")
        candidates.append(
            MatchCandidate(path, 0, cumulated_path_weight(db, path), Tier.CWD_SUB_DIRECTORY)
        )
    return candidates


def match_sub_database(db: Mapping[str, int], spec: PatternSpec, ignore_rules: Iterable) -> list[MatchCandidate]:
    """Directories below database entries, heaviest entries scanned first."""
    ignore_rules = tuple(ignore_rules)
    candidates = []
    for entry in sorted(db, key=lambda e: (-db[e], e)):
        if is_inside_ignored(entry, ignore_rules):
            continue
        entry_weight = cumulated_path_weight(db, entry)
        for directory in scan_directories(entry, ignore_rules):
            path = _match_below(entry, directory, spec, spec)
            if path is None:
                continue
            log_debug(f"matches sub directory under database entry {entry}: {directory}")
            candidates.append(
                MatchCandidate(path, SUB_DATABASE_WEIGHT, entry_weight, Tier.SUB_DATABASE)
            )
    return candidates


def merge_tiers(tiers: Iterable[Iterable[MatchCandidate]]) -> list[MatchCandidate]:
    """Rank each tier, then concatenate them dropping already seen paths."""
    seen: set[str] = set()
    merged = []
    for candidates in tiers:
        for candidate in sorted(candidates, key=rank_key):
            if candidate.path in seen:
                continue
            seen.add(candidate.path)
            merged.append(candidate)
    return merged


def resolve(
    fragments: Sequence[str],
    mode: str = FIND_FIRST,
    options: Optional[ResolutionOptions] = None,
    *,
    db: Optional[Mapping[str, int]] = None,
    cwd: Optional[str] = None,
    file_pattern: Optional[str] = None,
) -> list[MatchCandidate]:
    """Resolve *fragments* to candidate directories, best first.

    In FIND_FIRST mode the scanning tiers are skipped once something matched
    and at most one candidate is returned. FIND_ALL runs every enabled tier
    and returns all candidates. *file_pattern* keeps only directories with a
    matching file, before the first candidate is picked.
    """
    if mode not in (FIND_FIRST, FIND_ALL):
        raise ValueError(f"unknown resolution mode: {mode!r}")

    fragments = tuple(fragments)
    if not fragments:
        return []

    options = options or ResolutionOptions()
    cwd = cwd or os.getcwd()
    spec = build_patterns(fragments, options.ignore_case)
    ignore_rules = compile_ignore_rules(options.ignore_path, options.ignore_case)
    if db is None:
        db = load_store()
    find_all = mode == FIND_ALL

    log_debug(f"resolving {list(fragments)}: path {spec.full_pattern.pattern!r}, "
              f"end directory {spec.end_fragment_pattern.pattern!r}")

    database_tiers = match_database(db, spec)
    tiers = [
        match_direct_path(fragments, cwd, options),
        database_tiers[Tier.DIRECTORY_FULL],
        database_tiers[Tier.DIRECTORY_PARTIAL],
        database_tiers[Tier.PATH_PARTIAL],
    ]
    matches = merge_tiers(tiers)

    if not options.no_sub_cwd and (find_all or not matches):
        tiers.append(match_cwd_sub_directories(db, spec, cwd, ignore_rules))
        matches = merge_tiers(tiers)

    if not options.no_sub_db and (find_all or not matches):
        tiers.append(match_sub_database(db, spec, ignore_rules))
        matches = merge_tiers(tiers)

    if file_pattern is not None:
        matches = filter_by_file(matches, file_pattern, cwd=cwd, case_insensitive=options.ignore_case)

    return matches if find_all else matches[:1]
