"""Matching engine for jump.

This package contains:
- patterns.py: fragments -> compiled match patterns
- scanner.py: recursive directory listing with pruning
- resolver.py: the tiered resolution cascade
- files.py: filtering candidates on the files they contain
"""

from .files import filter_by_file
from .patterns import PatternSpec, build_patterns
from .resolver import FIND_ALL, FIND_FIRST, MatchCandidate, Tier, resolve
from .scanner import scan_directories

__all__ = [
    "FIND_ALL",
    "FIND_FIRST",
    "MatchCandidate",
    "PatternSpec",
    "Tier",
    "build_patterns",
    "filter_by_file",
    "resolve",
    "scan_directories",
]
