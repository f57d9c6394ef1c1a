"""
level_loader.py
---------------
Swaps the session's world over several frames and announces the
pre-load / post-load lifecycle points on the event manager.
"""

from src.core.debug.debug_logger import DebugLogger
from src.core.runtime.game_settings import Streaming
from src.core.runtime.host_session import World
from src.core.services.event_manager import LevelPostLoadEvent, LevelPreLoadEvent


class LevelLoader:
    """Unloads the current world, simulates the load, then installs the new one."""

    def __init__(self, session, events, begin_play_delay=Streaming.BEGIN_PLAY_DELAY,
                 asset_stream_secs=Streaming.ASSET_STREAM_SECS):
        """
        Args:
            session: HostSession receiving the loaded world
            events: EventManager used for LevelPreLoadEvent / LevelPostLoadEvent
            begin_play_delay: Seconds between load completion and begin play
            asset_stream_secs: Asset streaming still pending after begin play
        """
        self.session = session
        self.events = events
        self.begin_play_delay = begin_play_delay
        self.asset_stream_secs = asset_stream_secs

        self.pending_level = None
        self.load_remaining = 0.0
        self.current_level = None

        DebugLogger.init_entry("LevelLoader")

    @property
    def is_loading(self) -> bool:
        return self.pending_level is not None

    def open_level(self, name: str, load_secs: float = Streaming.DEFAULT_LOAD_SECS) -> bool:
        """
        Start loading a level.

        Returns:
            False if another load is still in progress
        """
        if self.is_loading:
            DebugLogger.warn(f"Ignoring '{name}', still loading '{self.pending_level}'", category="level")
            return False

        DebugLogger.state(f"Unloading '{self.current_level}', loading '{name}'", category="level")
        self.session.set_world(None)
        self.current_level = None

        self.pending_level = name
        self.load_remaining = max(load_secs, 0.0)
        self.events.dispatch(LevelPreLoadEvent(name))
        return True

    def update(self, dt: float):
        """Advance the pending load, then the current world."""
        if self.is_loading:
            self.load_remaining -= dt
            if self.load_remaining <= 0.0:
                self._finish_load()

        world = self.session.world
        if world is not None:
            world.update(dt)

    def _finish_load(self):
        name = self.pending_level
        world = World(name, self.begin_play_delay, self.asset_stream_secs)
        self.session.set_world(world)

        self.pending_level = None
        self.load_remaining = 0.0
        self.current_level = name

        DebugLogger.action(f"Loaded level '{name}'", category="level")
        self.events.dispatch(LevelPostLoadEvent(name, world))
