"""
Runtime exports.

Provides runtime constants, time sources and the host session. The
GameLoop itself is imported from src.core.runtime.game_loop so that
importing these lightweight pieces does not pull in the whole runtime.
"""

from src.core.runtime.game_settings import (
    Display,
    Physics,
    Layers,
    LoadingScreen,
    Streaming,
    Debug,
)
from src.core.runtime.clock import Clock, SystemClock, ManualClock
from src.core.runtime.host_session import SessionQuery, HostSession, World, WorldContext

__all__ = [
    # Constants
    'Display',
    'Physics',
    'Layers',
    'LoadingScreen',
    'Streaming',
    'Debug',
    # Time
    'Clock',
    'SystemClock',
    'ManualClock',
    # Session
    'SessionQuery',
    'HostSession',
    'World',
    'WorldContext',
]
