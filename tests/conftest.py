"""Shared test fixtures for jump tests."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from jump.store import save_store
from jump.utils import set_log_level

# Directory layout used throughout the documentation examples. Upper case
# names keep fragments from accidentally matching the temporary directory.
EXAMPLE_TREE = {
    "A": {},
    "PART": {
        "PART2": {
            "A": {},
            "B_directory": {},
            "C": {"F": {}},
        },
        "PART3": {
            "B": {},
            "B_directory": {},
            "C": {"E": {}, "F": {}},
        },
    },
    "SUB": {"E": {}},
}

EXAMPLE_WEIGHTS = {
    "PART/PART2/A": 10,
    "PART/PART2/B_directory": 10,
    "PART/PART2/C": 10,
    "PART/PART3/B": 1,
    "PART/PART3/B_directory": 20,
    "PART/PART3/C": 10,
}


@pytest.fixture(autouse=True)
def jump_env(tmp_path, monkeypatch):
    """Point the database and config at files inside tmp_path.

    Neither file exists until a test writes it. Log level is reset so a CLI
    test raising it does not leak into the next test.
    """
    monkeypatch.setenv("JUMP_DB", str(tmp_path / "jump_db"))
    monkeypatch.setenv("JUMP_CONFIG", str(tmp_path / "config.yaml"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    set_log_level(1)
    yield tmp_path
    set_log_level(1)


def make_tree(root: Path, structure: dict) -> Path:
    """Create nested directories described by a dict of dicts under root."""
    root.mkdir(parents=True, exist_ok=True)
    for name, children in structure.items():
        make_tree(root / name, children)
    return root


def write_config(tmp_path: Path, text: str) -> Path:
    """Write YAML config text where JUMP_CONFIG points."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(text)
    return config_file


@pytest.fixture
def example(tmp_path, monkeypatch):
    """The documented example tree with its weighted database.

    Creates the tree under tmp_path/fs, stores EXAMPLE_WEIGHTS for it,
    changes into the tree root and returns a namespace with:
    - root: tree root as a string
    - db: the stored mapping
    - path(rel): absolute path string of a directory in the tree
    """
    root = make_tree(tmp_path / "fs", EXAMPLE_TREE)
    db = {str(root / rel): weight for rel, weight in EXAMPLE_WEIGHTS.items()}
    save_store(db)
    monkeypatch.chdir(root)

    return SimpleNamespace(
        root=str(root),
        db=db,
        path=lambda rel: str(root / rel),
    )


@pytest.fixture
def elsewhere(tmp_path, monkeypatch):
    """An empty directory outside the example tree, made the cwd."""
    other = tmp_path / "elsewhere"
    other.mkdir()
    monkeypatch.chdir(other)
    return str(other)
