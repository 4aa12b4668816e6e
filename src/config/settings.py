"""
Settings management for retroterm.
Handles loading, saving, and managing launcher preferences.
"""

import json
import os
import traceback
from typing import Dict, Any, Iterable, Optional, List

from constants import CONFIG_FILE
from utils.logging import log_error


def get_default_settings() -> Dict[str, Any]:
    """Get default settings as a dictionary."""
    home = os.path.expanduser("~")
    return {
        "romsDir": os.path.join(home, "roms"),
        "savesDir": os.path.join(home, ".config", "retroterm", "saves"),
        "recentGames": [],
        "maxRecent": 10,
        # Rendering options passed through to the emulator
        "symbols": "ascii+block",  # block, half, ascii, ascii+block, solid, stipple, quad, sextant, octant, braille
        "colors": "256",  # true, 256, 16, 2
        "fgOnly": True,  # foreground color only (black background)
        "dither": False,
        "contrast": 5,  # 1-10 slider
        "emulatorCommand": "retroemu",
    }


def load_settings(config_file: str = CONFIG_FILE) -> Dict[str, Any]:
    """
    Load settings from config file.

    Args:
        config_file: Path to the JSON settings file

    Returns:
        Dictionary of settings with defaults for missing values
    """
    default_settings = get_default_settings()

    if not os.path.exists(config_file):
        return default_settings

    try:
        with open(config_file, "r") as f:
            loaded_settings = json.load(f)
        if isinstance(loaded_settings, dict):
            # Merge with defaults to handle new settings
            default_settings.update(loaded_settings)
    except (OSError, ValueError) as e:
        log_error(
            "Failed to load settings, using defaults",
            type(e).__name__,
            traceback.format_exc(),
        )

    return default_settings


def save_settings(settings_to_save: Dict[str, Any], config_file: str = CONFIG_FILE) -> bool:
    """
    Save settings to config file.

    Args:
        settings_to_save: Dictionary of settings to save
        config_file: Path to the JSON settings file

    Returns:
        True if successful, False otherwise
    """
    try:
        config_dir = os.path.dirname(config_file)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(config_file, "w") as f:
            json.dump(settings_to_save, f, indent=2)
        return True
    except (OSError, TypeError) as e:
        log_error("Failed to save settings", type(e).__name__, traceback.format_exc())
        return False


class Preferences:
    """
    In-memory preferences backed by the JSON settings file.

    The in-memory copy is authoritative for the session; every write is
    persisted on a best-effort basis.
    """

    def __init__(self, config_file: str = CONFIG_FILE):
        self.config_file = config_file
        self._settings: Dict[str, Any] = load_settings(config_file)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Get a setting, falling back to the documented default."""
        if key in self._settings:
            return self._settings[key]
        return get_default_settings().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a single setting and persist."""
        self._settings[key] = value
        self.save()

    def update(self, values: Dict[str, Any]) -> None:
        """Set several settings at once with a single save."""
        self._settings.update(values)
        self.save()

    def save(self) -> bool:
        return save_settings(self._settings, self.config_file)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._settings)

    def recent_games(self) -> List[str]:
        return list(self.get("recentGames") or [])

    def add_recent_game(self, rom_path: str) -> List[str]:
        """
        Move a ROM path to the front of the recent list.

        Args:
            rom_path: Path of the launched ROM

        Returns:
            The updated recent list, most recent first
        """
        recent = _move_to_front(self.recent_games(), rom_path)
        max_recent = self.get("maxRecent")
        if not isinstance(max_recent, int) or max_recent < 1:
            max_recent = get_default_settings()["maxRecent"]
        self._settings["recentGames"] = recent[:max_recent]
        self.save()
        return list(self._settings["recentGames"])


def _move_to_front(items: Iterable[str], item: str) -> List[str]:
    return [item] + [existing for existing in items if existing != item]
