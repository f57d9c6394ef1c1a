"""
game_loop.py
------------
Defines the GameLoop class that hosts the loading screen.

Responsibilities
----------------
- Initialize pygame and the runtime systems (draw manager, events, settings)
- Own the HostSession, LevelLoader and LoadingScreenController
- Maintain the main timing loop (event → update → render)
- Release everything on exit, whatever path leaves the loop
"""

import pygame

from src.core.runtime.game_settings import Display, Layers, Physics, Debug
from src.core.runtime.host_session import HostSession
from src.core.services.event_manager import EventManager
from src.core.services.settings_manager import SettingsManager
from src.core.services.settings_watcher import SettingsWatcher
from src.core.debug.debug_logger import DebugLogger
from src.graphics.draw_manager import DrawManager
from src.systems.level.level_loader import LevelLoader
from src.systems.loading.loading_screen_controller import create_loading_screen_controller
from src.ui.loading.loading_presenter import PygameLoadingPresenter


class GameLoop:
    """Core runtime controller that manages the main loop."""

    LEVELS = ("Harbor", "Foundry", "Canopy")

    def __init__(self, settings_file=None, editor_mode=Debug.EDITOR_MODE,
                 dedicated_server=Debug.DEDICATED_SERVER):
        """Initialize pygame and all foundational systems."""
        DebugLogger.section("Initializing GameLoop")

        pygame.init()
        pygame.display.set_caption(Display.CAPTION)
        self.screen = pygame.display.set_mode((Display.WIDTH, Display.HEIGHT))
        DebugLogger.init_entry("Pygame")

        # -------------------------------------------------------
        # Core Systems
        # -------------------------------------------------------
        self.draw_manager = DrawManager()
        self.events = EventManager()
        self.session = HostSession(editor_mode=editor_mode, dedicated_server=dedicated_server)

        self.settings = SettingsManager(settings_file)
        self.settings_watcher = SettingsWatcher(self.settings)

        # -------------------------------------------------------
        # Loading Screen
        # -------------------------------------------------------
        self.presenter = PygameLoadingPresenter(self.settings, self.session, self.draw_manager)
        self.loading_screen = create_loading_screen_controller(
            self.session, self.settings, self.presenter, events=self.events
        )
        self.level_loader = LevelLoader(self.session, self.events)

        self.clock = pygame.time.Clock()
        self.running = True
        self.paused = False
        self._level_index = 0

        self.session.mark_initialized()

    # ===========================================================
    # Core Runtime Loop
    # ===========================================================

    def run(self):
        """Main loop that runs until the window is closed."""
        DebugLogger.section("Game Loop")

        self.settings_watcher.start()
        self.level_loader.open_level(self.LEVELS[self._level_index])

        fixed_dt = Physics.FIXED_DT
        accumulator = 0.0

        try:
            while self.running:
                frame_time = self.clock.tick(Display.FPS) / 1000.0
                frame_time = min(frame_time, Physics.MAX_FRAME_TIME)
                accumulator += frame_time

                self._handle_events()

                while accumulator >= fixed_dt:
                    self.update(fixed_dt)
                    accumulator -= fixed_dt

                self._draw()
        finally:
            self.shutdown()

    def update(self, dt: float):
        """One fixed step. The loading screen keeps ticking while paused."""
        if not self.paused:
            self.level_loader.update(dt)

        if self.loading_screen is not None:
            self.loading_screen.tick(dt)
        self.presenter.update(dt)

    def shutdown(self):
        """Release the loading screen and services. Presenter release is idempotent."""
        if self.loading_screen is not None:
            self.loading_screen.shutdown()
        self.presenter.release()
        self.settings_watcher.stop()
        pygame.quit()
        DebugLogger.system("Pygame terminated")

    # ===========================================================
    # Input
    # ===========================================================

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key):
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_n:
            self.open_next_level()
        elif key == pygame.K_p:
            self.paused = not self.paused
            DebugLogger.state(f"Paused: {self.paused}")
        elif key == pygame.K_c and self.loading_screen is not None:
            forced = not self.loading_screen.forced_by_game_logic
            self.loading_screen.set_forced_visibility(forced, "cutscene" if forced else "")

    def open_next_level(self):
        self._level_index = (self._level_index + 1) % len(self.LEVELS)
        self.level_loader.open_level(self.LEVELS[self._level_index])

    # ===========================================================
    # Rendering
    # ===========================================================

    def _draw(self):
        self.draw_manager.clear()
        self._queue_world()
        self.presenter.draw(self.draw_manager)
        self.draw_manager.render(self.screen)
        pygame.display.flip()

    def _queue_world(self):
        """Placeholder world: ground strip plus an asset streaming bar."""
        world = self.session.world
        if world is None:
            return

        ground = pygame.Rect(0, Display.HEIGHT - 160, Display.WIDTH, 160)
        self.draw_manager.queue_shape("rect", ground, (40, 90, 60), layer=Layers.WORLD)

        if not world.is_fully_streamed:
            total = max(self.level_loader.asset_stream_secs, 1e-6)
            progress = 1.0 - world.streaming_remaining / total
            bar = pygame.Rect(40, 40, int((Display.WIDTH - 80) * progress), 12)
            self.draw_manager.queue_shape("rect", bar, (200, 180, 80), layer=Layers.EFFECTS)
