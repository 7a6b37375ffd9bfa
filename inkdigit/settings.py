"""
Settings Module for Ink Digit

Provides persistent storage for user preferences and recognizer tuning using JSON.
Settings are stored in config.json in the working directory.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from inkdigit.recognizer.config import GestureConfig, RecognizerConfig

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

# Default settings; recognizer/gesture sections override config defaults
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "surface_size": 240,
    "recognizer": {},
    "gesture": {},
}


def _defaults() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return _defaults()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")

        # Merge with defaults to handle missing keys
        result = _defaults()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return _defaults()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    path = path or SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def recognizer_config(settings: Dict[str, Any]) -> RecognizerConfig:
    """Build the recognizer config from the "recognizer" settings section."""
    try:
        return RecognizerConfig.from_dict(settings.get("recognizer") or {})
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid recognizer settings: {e}, using defaults")
        return RecognizerConfig()


def gesture_config(settings: Dict[str, Any]) -> GestureConfig:
    """Build the gesture config from the "gesture" settings section."""
    try:
        return GestureConfig.from_dict(settings.get("gesture") or {})
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid gesture settings: {e}, using defaults")
        return GestureConfig()
