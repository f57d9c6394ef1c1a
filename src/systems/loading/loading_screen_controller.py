"""
loading_screen_controller.py
----------------------------
Decides every tick whether the blocking loading screen must be visible.

Responsibilities
----------------
- Aggregate the blocking reasons (settings, missing world, world not
  playing yet, game logic request) in a fixed priority order.
- Keep the screen up for an extra hold time once the last blocking
  reason clears, to hide assets still streaming in.
- Drive the presenter and broadcast HoldTimeStartedEvent and
  VisibilityChangedEvent on state transitions.
"""

from enum import Enum
from typing import Optional, Tuple

from src.core.debug.debug_logger import DebugLogger
from src.core.runtime.clock import Clock, SystemClock
from src.core.services.event_manager import (
    EventManager,
    HoldTimeStartedEvent,
    LevelPostLoadEvent,
    LevelPreLoadEvent,
    VisibilityChangedEvent,
)
from src.core.services.settings_manager import LoadingScreenConfig


class LoadingScreenState(Enum):
    """Visibility states of the loading screen."""
    HIDDEN = "hidden"
    DISPLAYED = "displayed"


class DisplayReason:
    """Reason texts reported by evaluate_blocking_reason()."""
    FORCED_BY_SETTINGS = "forced by configuration"
    NO_WORLD_CONTEXT = "no world context"
    NULL_WORLD = "world reference is null"
    WORLD_NOT_PLAYING = "world hasn't begun play"
    GAME_LOGIC_DEFAULT = "reason not specified by game logic, assumed gameplay logic"
    NONE = "no reason to display"
    HOLDING = "holding loading screen up for {remaining:.2f} more seconds to allow asset streaming"


def should_create_controller(session) -> bool:
    """Dedicated server sessions never show a loading screen."""
    return not session.is_dedicated_server()


def create_loading_screen_controller(session, settings, presenter, clock=None, events=None):
    """
    Build and bind a controller, or return None for headless sessions.

    Returns:
        LoadingScreenController or None
    """
    if not should_create_controller(session):
        DebugLogger.init_entry("LoadingScreenController", "SKIPPED")
        DebugLogger.init_sub("Dedicated server session, no loading screen")
        return None

    controller = LoadingScreenController(session, settings, presenter, clock=clock, events=events)
    controller.bind()
    return controller


# ===========================================================
# Controller
# ===========================================================

class LoadingScreenController:
    """Per-session loading screen state machine, driven by tick() and level load hooks."""

    def __init__(self, session, settings, presenter, clock: Clock = None,
                 events: EventManager = None):
        """
        Args:
            session: SessionQuery implementation
            settings: Provider with snapshot() -> LoadingScreenConfig, re-read every evaluation
            presenter: LoadingPresenter receiving show/hide commands
            clock: Monotonic time source (defaults to SystemClock)
            events: EventManager for notifications and level load hooks
        """
        self.session = session
        self.settings = settings
        self.presenter = presenter
        self.clock = clock or SystemClock()
        self.events = events or EventManager()

        self._state = LoadingScreenState.HIDDEN
        self._display_reason = ""
        self._dismissed_at: Optional[float] = None
        self._hold_finished = False

        self._forced_by_game_logic = False
        self._user_specified_reason = ""

        self._bound = False
        self._shut_down = False

        DebugLogger.init_entry("LoadingScreenController")

    # ===========================================================
    # Host Lifecycle
    # ===========================================================

    def bind(self):
        """Hook into level load events on the shared event manager."""
        if self._bound:
            return
        self.events.subscribe(LevelPreLoadEvent, self._handle_pre_load)
        self.events.subscribe(LevelPostLoadEvent, self._handle_post_load)
        self._bound = True

    def shutdown(self):
        """Unhook and release the indicator. Safe to call more than once."""
        if self._shut_down:
            return
        if self._bound:
            self.events.unsubscribe(LevelPreLoadEvent, self._handle_pre_load)
            self.events.unsubscribe(LevelPostLoadEvent, self._handle_post_load)
            self._bound = False
        self.presenter.release()
        self._shut_down = True
        DebugLogger.system("LoadingScreenController shut down", category="loading_screen")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False

    def _handle_pre_load(self, event):
        self.on_before_level_load()

    def _handle_post_load(self, event):
        self.on_after_level_load()

    def on_before_level_load(self):
        """Show the screen right away, before the blocking load starts."""
        if self._shut_down:
            return
        if not self.session.host_is_initialized():
            DebugLogger.trace("Host not initialized, skipping pre-load update")
            return
        self.update_loading_screen()

    def on_after_level_load(self):
        """Nothing to do, the next tick picks up the new world."""
        pass

    # ===========================================================
    # Tick
    # ===========================================================

    def is_tickable(self) -> bool:
        return not self._shut_down

    def tick(self, dt: float):
        """Called every frame, also while gameplay is paused."""
        if not self.is_tickable():
            return
        self.update_loading_screen()

    def update_loading_screen(self):
        """One full evaluate-and-apply cycle against a single settings snapshot."""
        config = self.settings.snapshot()
        self.apply_decision(self.decide_show_or_hide(config))

        if config.log_reasons:
            DebugLogger.state(
                f"Loading screen display status: {int(self.is_displayed())}. "
                f"Reason: {self._display_reason}",
                category="loading_screen"
            )

    # ===========================================================
    # Decision Policy
    # ===========================================================

    def evaluate_blocking_reason(self, config: Optional[LoadingScreenConfig] = None) -> Tuple[bool, str]:
        """
        Check, in priority order, whether something requires the screen.

        Args:
            config: Settings snapshot for this decision, taken now if omitted

        Returns:
            (must_show, reason) for the first matching check
        """
        config = config or self.settings.snapshot()
        if config.force_display:
            return True, DisplayReason.FORCED_BY_SETTINGS

        if not self.session.has_world_context():
            return True, DisplayReason.NO_WORLD_CONTEXT

        if not self.session.world_exists():
            return True, DisplayReason.NULL_WORLD

        if not self.session.world_has_begun_play():
            return True, DisplayReason.WORLD_NOT_PLAYING

        if self._forced_by_game_logic:
            return True, self._user_specified_reason or DisplayReason.GAME_LOGIC_DEFAULT

        return False, DisplayReason.NONE

    def effective_hold_time(self, config) -> float:
        """Configured hold time, or 0 in the editor unless explicitly enabled."""
        if self.session.is_editor_like_environment() and not config.show_hold_time_in_editor:
            return 0.0
        return config.hold_additional_seconds

    def decide_show_or_hide(self, config: Optional[LoadingScreenConfig] = None) -> bool:
        """
        Final visibility decision, including the post-load hold.

        Args:
            config: Settings snapshot for this decision, taken now if omitted

        Returns:
            True if the loading screen should be visible
        """
        config = config or self.settings.snapshot()
        must_show, self._display_reason = self.evaluate_blocking_reason(config)

        if must_show:
            # A returning blocker always cancels a running hold
            self._dismissed_at = None
            self._hold_finished = False
            return True

        if self._hold_finished:
            return False

        hold_time = self.effective_hold_time(config)
        now = self.clock.now()

        if self._dismissed_at is None:
            self._dismissed_at = now
            DebugLogger.state(f"Blocking reasons cleared, holding for {hold_time:.2f}s",
                              category="loading_screen")
            self.events.dispatch(HoldTimeStartedEvent(hold_time))

        elapsed = now - self._dismissed_at
        if hold_time > 0.0 and elapsed < hold_time:
            # Keep the world rendering underneath so its assets actually stream in
            self.presenter.set_world_rendering_suppressed(False)
            self._display_reason = DisplayReason.HOLDING.format(remaining=hold_time - elapsed)
            return True

        # Episode over until a blocker reappears, even if the hold is raised later
        self._hold_finished = True
        return False

    # ===========================================================
    # State Transitions
    # ===========================================================

    def apply_decision(self, should_show: bool):
        if should_show:
            self._show()
        else:
            self._hide()

    def _show(self):
        if self._state is LoadingScreenState.DISPLAYED:
            return

        self._state = LoadingScreenState.DISPLAYED
        DebugLogger.state(f"Showing loading screen ({self._display_reason})", category="loading_screen")
        self.events.dispatch(VisibilityChangedEvent(True))

        self.presenter.attach_indicator()
        self._change_performance_settings(True)

    def _hide(self):
        if self._state is LoadingScreenState.HIDDEN:
            return

        # Detach before broadcasting so listeners see the final presenter state
        self.presenter.detach_indicator()
        self._change_performance_settings(False)

        self._state = LoadingScreenState.HIDDEN
        DebugLogger.state("Hiding loading screen", category="loading_screen")
        self.events.dispatch(VisibilityChangedEvent(False))

    def _change_performance_settings(self, loading_screen_up: bool):
        """Skip world drawing and prioritize level streaming while the screen is up."""
        self.presenter.set_world_rendering_suppressed(loading_screen_up)
        self.presenter.set_high_priority_streaming(loading_screen_up)

    # ===========================================================
    # Public Queries & Commands
    # ===========================================================

    def is_displayed(self) -> bool:
        return self._state is LoadingScreenState.DISPLAYED

    def set_forced_visibility(self, show: bool, reason: str = ""):
        """
        Request (or release) the loading screen from game logic.
        Picked up by the next evaluation, nothing happens immediately.
        """
        self._forced_by_game_logic = show
        self._user_specified_reason = reason or ""

    def is_waiting_for_grace(self) -> bool:
        """True while the screen is only up because of the post-load hold."""
        if not self.is_displayed():
            return False
        if self.settings.snapshot().hold_additional_seconds <= 0.0:
            return False
        return self._dismissed_at is not None and not self._hold_finished

    def grace_time_remaining(self) -> float:
        """
        Seconds left in the post-load hold.
        Only meaningful while is_waiting_for_grace() is True.
        """
        if self._dismissed_at is None or self._hold_finished:
            return 0.0
        elapsed = self.clock.now() - self._dismissed_at
        return max(self.settings.snapshot().hold_additional_seconds - elapsed, 0.0)

    # ===========================================================
    # Introspection
    # ===========================================================

    @property
    def state(self) -> LoadingScreenState:
        return self._state

    @property
    def display_reason(self) -> str:
        return self._display_reason

    @property
    def dismissed_at_timestamp(self) -> Optional[float]:
        return self._dismissed_at

    @property
    def forced_by_game_logic(self) -> bool:
        return self._forced_by_game_logic

    @property
    def user_specified_reason(self) -> str:
        return self._user_specified_reason

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down
