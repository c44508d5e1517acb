"""
Settings Module - Command line defaults kept in a JSON file.

main.py reads buffer size, timeout, log level and print limit from here when
they are not given on the command line, and writes them back on --save-config.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Looked up relative to the working directory
SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "buffer_size": 4,
    "timeout_sec": None,
    "log_level": "INFO",
    "max_printed_solutions": 20
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read solver defaults, filling in any key the file lacks.

    Args:
        path: JSON file to read instead of SETTINGS_FILE

    Returns:
        A fresh dict; DEFAULT_SETTINGS when the file is absent or unreadable
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    if not settings_file.exists():
        logger.debug(f"No settings at {settings_file}, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            raise ValueError("settings file must hold a JSON object")

        result = DEFAULT_SETTINGS.copy()
        result.update(stored)
        logger.debug(f"Settings read from {settings_file}: {result}")
        return result

    except (ValueError, IOError) as e:
        logger.warning(f"Ignoring settings in {settings_file}: {e}")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Write solver defaults as indented JSON. Write errors are logged, not raised.

    Args:
        settings: Values to store
        path: JSON file to write instead of SETTINGS_FILE
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings written to {settings_file}")
    except IOError as e:
        logger.error(f"Could not write settings to {settings_file}: {e}")
