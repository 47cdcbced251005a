"""Configuration, file locations and matching options."""

import os
from dataclasses import asdict, dataclass
from pathlib import Path

import click
import yaml

DEFAULT_WEIGHT = 1

BOOLEAN_KEYS = ("ignore_case", "no_direct_path", "no_sub_cwd", "no_sub_db")
PATTERN_KEYS = ("ignore_path", "black_listed_directories")


def get_config_dir() -> Path:
    """Directory holding config.yaml ($XDG_CONFIG_HOME/jump or ~/.config/jump)."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / "jump"


def get_config_location() -> Path:
    """Get config file path.

    Priority:
    1. JUMP_CONFIG environment variable
    2. $XDG_CONFIG_HOME/jump/config.yaml (~/.config/jump/config.yaml)
    """
    env_config = os.environ.get("JUMP_CONFIG")
    if env_config:
        return Path(env_config)
    return get_config_dir() / "config.yaml"


def get_db_location() -> Path:
    """Get database file path.

    Priority:
    1. JUMP_DB environment variable
    2. ~/.jump_db
    """
    env_db = os.environ.get("JUMP_DB")
    if env_db:
        return Path(env_db)
    return Path.home() / ".jump_db"


def load_config() -> dict:
    """Load the YAML config; missing or broken files give an empty mapping."""
    config_file = get_config_location()
    if not config_file.exists():
        return {}
    try:
        config = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        click.echo(f"Jump: Warning, couldn't parse {config_file}: {e}", err=True)
        return {}
    if not isinstance(config, dict):
        click.echo(f"Jump: Warning, {config_file} is not a mapping, ignoring it.", err=True)
        return {}
    return config


def save_config(config: dict) -> None:
    """Save config to its YAML file."""
    config_file = get_config_location()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(yaml.dump(config, default_flow_style=False), encoding="utf-8")


def get_verbosity() -> int:
    """Get verbosity level from config (default: 1).

    Levels:
    - 0: Silent (only errors, warnings and results)
    - 1: Normal (confirmation messages)
    - 2: Verbose (which tier produced each match, skipped entries)
    - 3: Debug (pattern details, unreadable directories during scans)
    """
    config = load_config()
    try:
        return int(config.get("verbosity", 1))
    except (TypeError, ValueError):
        return 1


def set_verbosity(level: int) -> None:
    """Save verbosity level to config file (0-3)."""
    if not 0 <= level <= 3:
        raise ValueError("Verbosity level must be between 0 and 3")
    config = load_config()
    config["verbosity"] = level
    save_config(config)


def _as_patterns(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class ResolutionOptions:
    """Matching switches handed to every resolution tier."""

    ignore_case: bool = False
    no_direct_path: bool = False
    no_sub_cwd: bool = False
    no_sub_db: bool = False
    ignore_path: tuple[str, ...] = ()
    black_listed_directories: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: dict, **overrides) -> "ResolutionOptions":
        """Build options from a config mapping; non-None overrides win."""
        values = {key: bool(config.get(key, False)) for key in BOOLEAN_KEYS}
        for key in PATTERN_KEYS:
            values[key] = _as_patterns(config.get(key))

        for key, value in overrides.items():
            if value is None:
                continue
            if key in PATTERN_KEYS:
                value = _as_patterns(value)
            values[key] = value
        return cls(**values)

    def to_dict(self) -> dict:
        values = asdict(self)
        for key in PATTERN_KEYS:
            values[key] = list(values[key])
        return values


def load_options(**overrides) -> ResolutionOptions:
    """Resolution options from the config file plus command line overrides."""
    return ResolutionOptions.from_config(load_config(), **overrides)
