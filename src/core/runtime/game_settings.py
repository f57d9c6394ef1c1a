"""
game_settings.py
----------------
Centralized constants for the runtime and the loading screen.
"""


# ===========================================================
# Display & Performance
# ===========================================================

class Display:
    """Screen and window configuration."""
    WIDTH: int = 1280
    HEIGHT: int = 720
    FPS: int = 60
    CAPTION: str = "Loading Screen Demo"


# ===========================================================
# Physics & Timing
# ===========================================================

class Physics:
    """Update timing."""
    UPDATE_RATE: int = 60
    FIXED_DT: float = 1 / UPDATE_RATE
    MAX_FRAME_TIME: float = 0.1


# ===========================================================
# Rendering Layers
# ===========================================================

class Layers:
    """Draw order. Everything below UI counts as world rendering."""
    BACKGROUND: int = 0
    WORLD: int = 1
    EFFECTS: int = 5
    UI: int = 100
    DEBUG: int = 200


# ===========================================================
# Loading Screen Defaults
# ===========================================================

class LoadingScreen:
    """Defaults used when no settings file overrides them."""
    SETTINGS_FILE: str = "loading_screen.json"
    HOLD_ADDITIONAL_SECS: float = 2.0
    Z_ORDER: int = 10000  # above all other content
    INDICATOR_IMAGE: str = "assets/images/loading_screen.png"
    BACKGROUND_COLOR = (8, 8, 16)
    THROBBER_COLOR = (220, 220, 235)
    THROBBER_RADIUS: int = 28
    THROBBER_DOTS: int = 8
    THROBBER_SPEED: float = 1.5  # revolutions per second


# ===========================================================
# Level Streaming (demo host)
# ===========================================================

class Streaming:
    """Timings for the simulated level loader."""
    DEFAULT_LOAD_SECS: float = 1.5
    BEGIN_PLAY_DELAY: float = 0.25
    ASSET_STREAM_SECS: float = 1.5
    HIGH_PRIORITY_MULTIPLIER: float = 2.0


# ===========================================================
# Debug
# ===========================================================

class Debug:
    """Developer toggles."""
    EDITOR_MODE: bool = False
    DEDICATED_SERVER: bool = False
