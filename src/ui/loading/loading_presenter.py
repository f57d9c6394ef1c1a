"""
loading_presenter.py
--------------------
Presentation side of the loading screen.

The controller only issues fire-and-forget commands; whether the
indicator asset actually loaded is handled here and never reported back.
"""

from abc import ABC, abstractmethod

import pygame

from src.core.debug.debug_logger import DebugLogger
from src.core.runtime.game_settings import Display
from src.ui.loading.loading_widgets import ImageIndicator, ThrobberWidget


# ===========================================================
# Presenter Interface
# ===========================================================

class LoadingPresenter(ABC):
    """Commands issued by the loading screen controller."""

    @abstractmethod
    def attach_indicator(self):
        """Create the indicator and put it on screen."""
        pass

    @abstractmethod
    def detach_indicator(self):
        """Remove and destroy the indicator, if any."""
        pass

    @abstractmethod
    def set_high_priority_streaming(self, enabled: bool):
        pass

    @abstractmethod
    def set_world_rendering_suppressed(self, suppressed: bool):
        pass

    def release(self):
        """Teardown. Must be safe to call at any time, repeatedly."""
        self.detach_indicator()


# ===========================================================
# Pygame Presenter
# ===========================================================

class PygameLoadingPresenter(LoadingPresenter):
    """Draws the loading screen through the DrawManager at a high layer."""

    def __init__(self, settings, session=None, draw_manager=None,
                 screen_size=(Display.WIDTH, Display.HEIGHT)):
        """
        Args:
            settings: Provider with snapshot() (indicator_image, z_order)
            session: HostSession whose current world receives the streaming flag
            draw_manager: DrawManager whose world rendering gets toggled
            screen_size: Size the indicator is scaled to
        """
        self.settings = settings
        self.session = session
        self.draw_manager = draw_manager
        self.screen_size = screen_size

        self.widget = None
        self.layer = settings.snapshot().z_order
        self.high_priority_streaming = False
        self.world_rendering_suppressed = False

        DebugLogger.init_entry("LoadingPresenter")

    @property
    def is_attached(self) -> bool:
        return self.widget is not None

    # ===========================================================
    # Indicator
    # ===========================================================

    def attach_indicator(self):
        if self.widget is not None:
            return

        config = self.settings.snapshot()
        self.layer = config.z_order
        self.widget = self._create_widget(config.indicator_image)
        DebugLogger.action(
            f"Attached {type(self.widget).__name__} at layer {self.layer}",
            category="presenter"
        )

    def detach_indicator(self):
        if self.widget is None:
            return
        DebugLogger.action(f"Detached {type(self.widget).__name__}", category="presenter")
        self.widget = None

    def _create_widget(self, image_path):
        """Load the configured image, falling back to a throbber."""
        if not image_path:
            DebugLogger.fail("No loading screen image configured, falling back to placeholder",
                             category="presenter")
            return ThrobberWidget(self.screen_size)

        try:
            return ImageIndicator.from_file(image_path, self.screen_size)
        except (FileNotFoundError, pygame.error) as e:
            DebugLogger.fail(
                f"Failed to load the loading screen image '{image_path}', "
                f"falling back to placeholder: {e}",
                category="presenter"
            )
            return ThrobberWidget(self.screen_size)

    # ===========================================================
    # Performance Hints
    # ===========================================================

    def set_high_priority_streaming(self, enabled: bool):
        self.high_priority_streaming = enabled
        self._sync_world_priority()

    def set_world_rendering_suppressed(self, suppressed: bool):
        self.world_rendering_suppressed = suppressed
        if self.draw_manager is not None:
            self.draw_manager.world_rendering_enabled = not suppressed

    def _sync_world_priority(self):
        """Worlds created mid-load pick up the current streaming priority."""
        world = self.session.world if self.session is not None else None
        if world is not None:
            world.high_priority_loading = self.high_priority_streaming

    # ===========================================================
    # Frame
    # ===========================================================

    def update(self, dt: float):
        self._sync_world_priority()
        if self.widget is not None:
            self.widget.update(dt)

    def draw(self, draw_manager=None):
        draw_manager = draw_manager or self.draw_manager
        if self.widget is None or draw_manager is None:
            return
        self.widget.draw(draw_manager, self.layer)
