"""Configuration file management for goalsheet."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_LOG_LEVEL = "WARNING"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "goalsheet" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config({"log_level": DEFAULT_LOG_LEVEL}, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, empty if the file doesn't exist.

    Raises:
        tomllib.TOMLDecodeError: If the config file is malformed.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return {}

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def resolve_db_path(config: dict[str, Any]) -> Path | None:
    """Get the database path override from config.

    Returns:
        Configured path with ~ expanded, or None to use the default location.
    """
    db_path = config.get("db_path")
    if not db_path:
        return None
    return Path(str(db_path)).expanduser()


def resolve_log_level(config: dict[str, Any]) -> str:
    """Get the configured log level name.

    Raises:
        ValueError: If the level is not a known logging level.
    """
    level = str(config.get("log_level", DEFAULT_LOG_LEVEL)).upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log_level: {level}")
    return level
