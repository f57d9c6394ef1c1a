"""
Core services exports.

Provides the event system, configuration loading and persistent settings.
"""

from src.core.services.config_manager import load_config, save_config
from src.core.services.event_manager import (
    EventManager,
    BaseEvent,
    HoldTimeStartedEvent,
    VisibilityChangedEvent,
    LevelPreLoadEvent,
    LevelPostLoadEvent,
)
from src.core.services.settings_manager import SettingsManager, LoadingScreenConfig
from src.core.services.settings_watcher import SettingsWatcher

__all__ = [
    # Config
    'load_config',
    'save_config',
    # Events
    'EventManager',
    'BaseEvent',
    'HoldTimeStartedEvent',
    'VisibilityChangedEvent',
    'LevelPreLoadEvent',
    'LevelPostLoadEvent',
    # Settings
    'SettingsManager',
    'LoadingScreenConfig',
    'SettingsWatcher',
]
