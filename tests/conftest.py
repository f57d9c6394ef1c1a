"""
conftest.py
-----------
Shared pytest configuration and fixtures for the loading screen tests.

Contains:
- Headless pygame setup (SDL dummy drivers)
- Common fixtures for the controller's collaborators
- Pytest configuration and hooks
"""

import os

# Must be set before pygame initializes any video/audio backend
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest
from unittest.mock import MagicMock

from src.core.debug.debug_logger import LoggerConfig
from src.core.runtime.clock import ManualClock
from src.core.runtime.host_session import HostSession, World
from src.core.services.event_manager import (
    EventManager,
    HoldTimeStartedEvent,
    VisibilityChangedEvent,
)
from src.core.services.settings_manager import SettingsManager
from src.systems.loading.loading_screen_controller import LoadingScreenController
from src.ui.loading.loading_presenter import LoadingPresenter


# ===========================================================
# Logging
# ===========================================================

@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Keep console output out of test runs."""
    monkeypatch.setattr(LoggerConfig, "ENABLE_LOGGING", False)


# ===========================================================
# Collaborators
# ===========================================================

@pytest.fixture
def clock():
    """Manual clock starting at t=100s."""
    return ManualClock(100.0)


@pytest.fixture
def settings(tmp_path):
    """Default settings backed by a file that does not exist yet."""
    return SettingsManager(str(tmp_path / "loading_screen.json"))


@pytest.fixture
def session():
    """Initialized session whose world is loaded and playing."""
    host = HostSession()
    world = World("TestLevel")
    world.begin_play()
    host.set_world(world)
    host.mark_initialized()
    return host


@pytest.fixture
def mock_presenter():
    """Presenter mock recording every command."""
    return MagicMock(spec=LoadingPresenter)


@pytest.fixture
def events():
    return EventManager()


@pytest.fixture
def recorded_events(events):
    """List filled with every loading screen notification, in dispatch order."""
    received = []
    events.subscribe(HoldTimeStartedEvent, received.append)
    events.subscribe(VisibilityChangedEvent, received.append)
    return received


@pytest.fixture
def controller(session, settings, mock_presenter, clock, events):
    """Controller wired to the fixtures above, not bound to level events."""
    return LoadingScreenController(session, settings, mock_presenter, clock=clock, events=events)


@pytest.fixture
def mock_draw_manager():
    """Mock for DrawManager with common methods."""
    draw_manager = MagicMock()
    draw_manager.queue_draw = MagicMock()
    draw_manager.queue_shape = MagicMock()
    draw_manager.world_rendering_enabled = True
    return draw_manager


# ===========================================================
# Pytest Configuration
# ===========================================================

def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to everything not marked as integration."""
    for item in items:
        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)
