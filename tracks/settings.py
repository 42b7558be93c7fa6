"""
Settings Module for the Tracks puzzle

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Share of path cells revealed as clues per difficulty
DIFFICULTY_CLUE_PERCENT: Dict[str, int] = {
    "easy": 50,
    "medium": 35,
    "hard": 20,
}

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "width": 8,
    "height": 8,
    "difficulty": "medium",
    "strategy_name": "greedy",
    "step_interval_ms": 180,
    "generation_attempts": 50,
    "generation_mode": "split",
    "seed": None,
    "log_level": "INFO",
}


def clue_percent_for(difficulty: str) -> int:
    """
    Map a difficulty name to its clue percentage.

    Args:
        difficulty: "easy", "medium" or "hard" (case-insensitive)

    Returns:
        Clue percentage 0-100

    Raises:
        ValueError: If difficulty is unknown
    """
    key = difficulty.lower()
    if key not in DIFFICULTY_CLUE_PERCENT:
        available = ", ".join(DIFFICULTY_CLUE_PERCENT.keys())
        raise ValueError(f"Unknown difficulty: {difficulty}. Available: {available}")
    return DIFFICULTY_CLUE_PERCENT[key]


def load_settings(path: Path = SETTINGS_FILE) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file to read

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Path = SETTINGS_FILE) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file to write
    """
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
