"""
Settings Module for Connections

Reads user preferences from config.json in the project root. The file is
edited by hand; values of the wrong type fall back to their defaults one
key at a time, so a typo in one entry does not discard the rest.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "mistakes_allowed": 4,
    "shuffle_on_start": True,
    "log_file": "connections.log",
}


def _valid_value(key: str, value: Any) -> bool:
    default = DEFAULT_SETTINGS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        # bool is an int subclass, but "mistakes_allowed": true is a typo
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    return isinstance(value, type(default)) and bool(value)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file to read (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if the file is missing or not a
        JSON object; keys with invalid values keep their defaults.
    """
    settings_file = path if path is not None else SETTINGS_FILE
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(loaded, dict):
        logger.warning(f"Settings file {settings_file} is not a JSON object, using defaults")
        return DEFAULT_SETTINGS.copy()

    result = DEFAULT_SETTINGS.copy()
    for key, value in loaded.items():
        if key not in DEFAULT_SETTINGS:
            logger.warning(f"Ignoring unknown setting {key!r}")
        elif not _valid_value(key, value):
            logger.warning(f"Invalid value {value!r} for {key!r}, using {DEFAULT_SETTINGS[key]!r}")
        else:
            result[key] = value

    logger.debug(f"Settings loaded: {result}")
    return result
