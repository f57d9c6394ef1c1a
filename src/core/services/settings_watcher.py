"""
settings_watcher.py
-------------------
Reloads the loading screen settings file when it changes on disk,
so debugging toggles can be flipped while the game is running.
"""

import os
import time

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from src.core.debug.debug_logger import DebugLogger


class SettingsWatcher(FileSystemEventHandler):
    """File system event handler that reloads a SettingsManager on modification."""

    def __init__(self, settings_manager, debounce_time=0.5):
        """
        Args:
            settings_manager: SettingsManager whose file is watched
            debounce_time: Minimum seconds between two reloads
        """
        super().__init__()
        self.settings_manager = settings_manager
        self.debounce_time = debounce_time
        self.last_reload = float("-inf")
        self._observer = None

    @property
    def watched_path(self):
        return os.path.abspath(self.settings_manager.settings_file)

    def on_modified(self, event):
        """Handle file modification events."""
        if event.is_directory:
            return

        if os.path.abspath(event.src_path) != self.watched_path:
            return

        current_time = time.monotonic()
        if current_time - self.last_reload < self.debounce_time:
            return

        self.last_reload = current_time
        self.settings_manager.reload()
        DebugLogger.state(f"Reloaded {os.path.basename(self.watched_path)}", category="settings")

    on_created = on_modified

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def start(self):
        """Start watching the settings file's directory."""
        if self._observer is not None:
            return

        directory = os.path.dirname(self.watched_path)
        if not os.path.isdir(directory):
            DebugLogger.warn(f"Cannot watch missing directory {directory}", category="settings")
            return

        self._observer = Observer()
        self._observer.schedule(self, directory, recursive=False)
        self._observer.daemon = True
        self._observer.start()
        DebugLogger.init_sub(f"Watching {self.watched_path}")

    def stop(self):
        """Stop the observer thread."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None
