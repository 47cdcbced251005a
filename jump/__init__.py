"""Jump: navigate the filesystem by fuzzy memory of visited directories."""

__version__ = "0.4.0"
