"""
settings_manager.py
-------------------
Manages persistent loading screen settings.
Every call to snapshot() returns a fresh, read-only view so live edits
are picked up by the next loading screen evaluation.
"""

import copy
import os
from dataclasses import dataclass

from src.core.debug.debug_logger import DebugLogger
from src.core.runtime.game_settings import LoadingScreen
from src.core.services.config_manager import load_config, save_config


# ===========================================================
# Snapshot
# ===========================================================

@dataclass(frozen=True)
class LoadingScreenConfig:
    """Read-only settings consumed by one loading screen evaluation."""
    force_display: bool = False
    hold_additional_seconds: float = LoadingScreen.HOLD_ADDITIONAL_SECS
    log_reasons: bool = False
    show_hold_time_in_editor: bool = False
    indicator_image: str = LoadingScreen.INDICATOR_IMAGE
    z_order: int = LoadingScreen.Z_ORDER


# ===========================================================
# Settings Manager
# ===========================================================

class SettingsManager:
    """Manages persistent loading screen settings with safe defaults."""

    DEFAULTS = {
        "loading_screen": {
            "indicator_image": LoadingScreen.INDICATOR_IMAGE,
            "z_order": LoadingScreen.Z_ORDER,
            "hold_additional_seconds": LoadingScreen.HOLD_ADDITIONAL_SECS,
        },
        "debugging": {
            "force_display": False,
            "log_reasons": False,
            "show_hold_time_in_editor": False,
        },
    }

    def __init__(self, settings_file=None):
        """
        Initialize settings manager.

        Args:
            settings_file: Optional custom path for settings file (.json or .yaml)
        """
        self.settings_file = settings_file or LoadingScreen.SETTINGS_FILE
        self.settings = self._load()

    # ===========================================================
    # Public API
    # ===========================================================

    def get(self, category, key, default=None):
        """
        Get a setting value.

        Args:
            category: Settings category (loading_screen, debugging)
            key: Setting key
            default: Fallback if not found

        Returns:
            Setting value or default
        """
        return self.settings.get(category, {}).get(key, default)

    def set(self, category, key, value):
        """Set a setting value. Takes effect on the next snapshot()."""
        if category not in self.settings:
            self.settings[category] = {}
        self.settings[category][key] = value

    def snapshot(self) -> LoadingScreenConfig:
        """
        Build the read-only config used by a single evaluation.
        Malformed numbers fall back to their defaults instead of raising.
        """
        hold = self._number("loading_screen", "hold_additional_seconds", float,
                            LoadingScreen.HOLD_ADDITIONAL_SECS)
        if hold < 0.0:
            DebugLogger.warn(f"Negative hold time {hold} clamped to 0", category="settings")
            hold = 0.0

        return LoadingScreenConfig(
            force_display=bool(self.get("debugging", "force_display", False)),
            hold_additional_seconds=hold,
            log_reasons=bool(self.get("debugging", "log_reasons", False)),
            show_hold_time_in_editor=bool(self.get("debugging", "show_hold_time_in_editor", False)),
            indicator_image=str(self.get("loading_screen", "indicator_image", "") or ""),
            z_order=self._number("loading_screen", "z_order", int, LoadingScreen.Z_ORDER),
        )

    def _number(self, category, key, cast, default):
        """Convert a stored value with cast, warning and using default when it can't be."""
        value = self.get(category, key, default)
        try:
            return cast(value)
        except (TypeError, ValueError):
            DebugLogger.warn(f"Invalid {category}.{key} value {value!r}, using {default}",
                             category="settings")
            return default

    def save(self):
        """Save current settings to file."""
        try:
            save_config(self.settings_file, self.settings)
            DebugLogger.system(f"Saved settings to {self.settings_file}", category="settings")
        except (OSError, TypeError) as e:
            DebugLogger.warn(f"Failed to save settings: {e}", category="settings")

    def reload(self):
        """Re-read the settings file, keeping defaults for missing keys."""
        self.settings = self._load()

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self.settings = copy.deepcopy(self.DEFAULTS)
        DebugLogger.system("Settings reset to defaults", category="settings")

    # ===========================================================
    # Loading
    # ===========================================================

    def _load(self):
        """Load settings from file or use defaults."""
        if not os.path.exists(self.settings_file):
            DebugLogger.system("Using default settings", category="settings")
            return copy.deepcopy(self.DEFAULTS)

        merged = load_config(self.settings_file, self.DEFAULTS)
        DebugLogger.system(f"Loaded settings from {self.settings_file}", category="settings")
        return merged
