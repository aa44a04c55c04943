"""
Helper utilities for the Yeet launcher.

Provides settings loading: built-in defaults deep-merged with the user's
config.toml.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

DEFAULT_SETTINGS: Dict[str, Any] = {
    "general": {
        "max_results": 10,
        "initial_results": 8,
        "terminal": "foot",
    },
    "search": {
        "min_score": 50,
        "score_threshold": 0.6,
        "prefer_prefix": True,
    },
    "apps": {
        "exclude": [],
        "extra_dirs": [],
        "custom": [],
        "favorites": [],
    },
}


def config_dir() -> Path:
    """Directory holding config.toml ($XDG_CONFIG_HOME/yeet)."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "yeet"


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load launcher settings from TOML file.

    Args:
        settings_path: Explicit config file, defaults to config_dir()/config.toml

    Returns:
        Dictionary containing settings with defaults applied

    Example config.toml:
        [general]
        terminal = "kitty --single-instance"

        [apps]
        favorites = ["Firefox"]

        [[apps.custom]]
        name = "Notes"
        exec = "foot -e nvim ~/notes.md"
    """
    defaults = copy.deepcopy(DEFAULT_SETTINGS)

    if settings_path is None:
        settings_path = config_dir() / "config.toml"

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return defaults

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError):
        logger.warning(f"Could not load settings from {settings_path}, using defaults")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
