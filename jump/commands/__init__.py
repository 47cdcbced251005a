"""Command modules for the jump CLI."""

from .database import add, clear, remove, show
from .navigate import complete, search

__all__ = [
    "add",
    "clear",
    "complete",
    "remove",
    "search",
    "show",
]
