"""
host_session.py
---------------
Host-side view of the running session: world context, current world and
environment flags. The loading screen controller only reads it through
the SessionQuery interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.debug.debug_logger import DebugLogger
from src.core.runtime.game_settings import Streaming


# ===========================================================
# Query Interface
# ===========================================================

class SessionQuery(ABC):
    """Read-only session introspection used by the loading screen."""

    @abstractmethod
    def has_world_context(self) -> bool:
        pass

    @abstractmethod
    def world_exists(self) -> bool:
        pass

    @abstractmethod
    def world_has_begun_play(self) -> bool:
        pass

    @abstractmethod
    def is_editor_like_environment(self) -> bool:
        pass

    @abstractmethod
    def host_is_initialized(self) -> bool:
        pass

    def is_dedicated_server(self) -> bool:
        """Headless sessions never display a loading screen."""
        return False


# ===========================================================
# World
# ===========================================================

class World:
    """A loaded level. Begins play once, then streams its remaining assets."""

    def __init__(self, name: str, begin_play_delay: float = Streaming.BEGIN_PLAY_DELAY,
                 asset_stream_secs: float = Streaming.ASSET_STREAM_SECS):
        self.name = name
        self.has_begun_play = False
        self.high_priority_loading = False
        self.elapsed = 0.0
        self.begin_play_delay = begin_play_delay
        self.streaming_remaining = asset_stream_secs

    def begin_play(self):
        if self.has_begun_play:
            return
        self.has_begun_play = True
        DebugLogger.state(f"World '{self.name}' has begun play", category="level")

    @property
    def is_fully_streamed(self) -> bool:
        return self.streaming_remaining <= 0.0

    def update(self, dt: float):
        """Advance begin-play countdown and asset streaming."""
        self.elapsed += dt
        if not self.has_begun_play and self.elapsed >= self.begin_play_delay:
            self.begin_play()

        if self.streaming_remaining > 0.0:
            rate = Streaming.HIGH_PRIORITY_MULTIPLIER if self.high_priority_loading else 1.0
            self.streaming_remaining = max(self.streaming_remaining - dt * rate, 0.0)


class WorldContext:
    """Holds the current world, which is None while a level is being swapped."""

    def __init__(self, world: Optional[World] = None):
        self.world = world


# ===========================================================
# Host Session
# ===========================================================

class HostSession(SessionQuery):
    """Mutable session state owned by the game loop."""

    def __init__(self, editor_mode: bool = False, dedicated_server: bool = False):
        self.world_context: Optional[WorldContext] = None
        self.editor_mode = editor_mode
        self.dedicated_server = dedicated_server
        self.initialized = False

    @property
    def world(self) -> Optional[World]:
        if self.world_context is None:
            return None
        return self.world_context.world

    def mark_initialized(self):
        self.initialized = True
        DebugLogger.state("Host session initialized")

    def create_world_context(self) -> WorldContext:
        if self.world_context is None:
            self.world_context = WorldContext()
        return self.world_context

    def set_world(self, world: Optional[World]):
        self.create_world_context().world = world

    # ===========================================================
    # SessionQuery
    # ===========================================================

    def has_world_context(self) -> bool:
        return self.world_context is not None

    def world_exists(self) -> bool:
        return self.world is not None

    def world_has_begun_play(self) -> bool:
        return self.world is not None and self.world.has_begun_play

    def is_editor_like_environment(self) -> bool:
        return self.editor_mode

    def host_is_initialized(self) -> bool:
        return self.initialized

    def is_dedicated_server(self) -> bool:
        return self.dedicated_server
