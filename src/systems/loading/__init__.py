"""
Loading screen exports.

Provides the loading screen state machine and its creation helpers.
"""

from src.systems.loading.loading_screen_controller import (
    LoadingScreenController,
    LoadingScreenState,
    DisplayReason,
    should_create_controller,
    create_loading_screen_controller,
)

__all__ = [
    'LoadingScreenController',
    'LoadingScreenState',
    'DisplayReason',
    'should_create_controller',
    'create_loading_screen_controller',
]
