"""
test_loading_screen_controller.py
---------------------------------
Unit tests for the LoadingScreenController state machine.

Responsibilities
----------------
- Verify the blocking reason priority order and reason texts.
- Verify the post-load hold: start notification, countdown, cancellation.
- Verify presenter commands and notification ordering on transitions.
- Verify lifecycle hooks, shutdown and creation gating.
"""

import pytest
from unittest.mock import MagicMock, patch

from src.core.runtime.host_session import HostSession, World
from src.core.services.event_manager import (
    HoldTimeStartedEvent,
    LevelPostLoadEvent,
    LevelPreLoadEvent,
    VisibilityChangedEvent,
)
from src.systems.loading.loading_screen_controller import (
    DisplayReason,
    LoadingScreenController,
    LoadingScreenState,
    create_loading_screen_controller,
    should_create_controller,
)


def visibility_changes(received):
    return [e.is_displayed for e in received if isinstance(e, VisibilityChangedEvent)]


def hold_starts(received):
    return [e.duration for e in received if isinstance(e, HoldTimeStartedEvent)]


def block_on_world_not_playing(session):
    """Replace the session's world with one that has not begun play."""
    session.set_world(World("Loading"))


# ===========================================================
# Blocking Reason Priority
# ===========================================================

class TestBlockingReasons:
    """evaluate_blocking_reason() checks in order, first match wins."""

    def test_forced_by_settings_wins_over_everything(self, controller, settings, session):
        settings.set("debugging", "force_display", True)
        session.world_context = None
        controller.set_forced_visibility(True, "cutscene")

        assert controller.evaluate_blocking_reason() == (True, DisplayReason.FORCED_BY_SETTINGS)

    def test_no_world_context(self, controller, session):
        session.world_context = None
        assert controller.evaluate_blocking_reason() == (True, DisplayReason.NO_WORLD_CONTEXT)

    def test_null_world(self, controller, session):
        session.set_world(None)
        assert controller.evaluate_blocking_reason() == (True, DisplayReason.NULL_WORLD)

    def test_world_not_begun_play(self, controller, session):
        block_on_world_not_playing(session)
        assert controller.evaluate_blocking_reason() == (True, DisplayReason.WORLD_NOT_PLAYING)

    def test_world_state_wins_over_game_logic(self, controller, session):
        block_on_world_not_playing(session)
        controller.set_forced_visibility(True, "cutscene")
        assert controller.evaluate_blocking_reason() == (True, DisplayReason.WORLD_NOT_PLAYING)

    def test_game_logic_with_reason(self, controller):
        controller.set_forced_visibility(True, "cutscene")
        assert controller.evaluate_blocking_reason() == (True, "cutscene")

    def test_game_logic_without_reason_uses_placeholder(self, controller):
        controller.set_forced_visibility(True, "")
        assert controller.evaluate_blocking_reason() == (True, DisplayReason.GAME_LOGIC_DEFAULT)

    def test_no_reason(self, controller):
        assert controller.evaluate_blocking_reason() == (False, DisplayReason.NONE)

    def test_evaluation_has_no_side_effects(self, controller, session, mock_presenter, recorded_events):
        session.set_world(None)
        controller.evaluate_blocking_reason()

        assert controller.display_reason == ""
        assert controller.dismissed_at_timestamp is None
        assert controller.state is LoadingScreenState.HIDDEN
        assert mock_presenter.mock_calls == []
        assert recorded_events == []


# ===========================================================
# Forced Display
# ===========================================================

@pytest.mark.parametrize("context, world, playing, editor", [
    (False, False, False, False),
    (True, False, False, True),
    (True, True, False, False),
    (True, True, True, True),
    (True, True, True, False),
])
def test_force_display_always_shows(controller, settings, session, clock,
                                    context, world, playing, editor):
    """Whatever the session looks like, force_display keeps the screen up."""
    settings.set("debugging", "force_display", True)
    settings.set("loading_screen", "hold_additional_seconds", 0.0)
    session.editor_mode = editor
    if not context:
        session.world_context = None
    elif not world:
        session.set_world(None)
    elif not playing:
        block_on_world_not_playing(session)

    for _ in range(3):
        assert controller.decide_show_or_hide() is True
        clock.advance(10.0)


# ===========================================================
# Hold Time
# ===========================================================

class TestHoldTime:
    """Post-load hold behaviour."""

    def test_hold_scenario(self, controller, settings, session, clock, recorded_events):
        """Hold of 2s starting at t=100 ends between 101.5 and 102.1."""
        settings.set("loading_screen", "hold_additional_seconds", 2.0)
        block_on_world_not_playing(session)
        assert clock.now() == 100.0
        controller.tick(0.016)
        assert controller.is_displayed()
        assert controller.dismissed_at_timestamp is None

        session.world.begin_play()
        clock.set(100.0)
        controller.tick(0.016)
        assert hold_starts(recorded_events) == [2.0]
        assert controller.is_displayed()
        assert controller.dismissed_at_timestamp == 100.0

        clock.set(101.5)
        controller.tick(0.016)
        assert controller.is_displayed()
        assert controller.is_waiting_for_grace()
        assert controller.grace_time_remaining() == pytest.approx(0.5)
        assert controller.display_reason.startswith("holding loading screen up for 0.50")

        clock.set(102.1)
        controller.tick(0.016)
        assert not controller.is_displayed()
        assert visibility_changes(recorded_events) == [True, False]
        assert hold_starts(recorded_events) == [2.0]

    def test_hold_time_started_fires_once_per_episode(self, controller, clock, recorded_events):
        for _ in range(5):
            controller.tick(0.016)
            clock.advance(0.1)

        assert hold_starts(recorded_events) == [2.0]

    def test_remaining_time_decreases_to_zero_and_hides_once(self, controller, settings, session, clock,
                                                             recorded_events):
        settings.set("loading_screen", "hold_additional_seconds", 2.0)
        block_on_world_not_playing(session)
        controller.tick(0.016)
        session.world.begin_play()

        remaining = []
        for _ in range(12):
            controller.tick(0.25)
            if controller.is_waiting_for_grace():
                remaining.append(controller.grace_time_remaining())
            clock.advance(0.25)

        assert remaining == sorted(remaining, reverse=True)
        assert remaining[0] == pytest.approx(2.0)
        assert controller.grace_time_remaining() == 0.0
        assert visibility_changes(recorded_events) == [True, False]

    def test_reappearing_blocker_cancels_hold(self, controller, settings, session, clock):
        settings.set("loading_screen", "hold_additional_seconds", 5.0)
        controller.tick(0.016)
        assert controller.is_waiting_for_grace()

        clock.advance(2.0)
        controller.set_forced_visibility(True, "cutscene")
        controller.tick(0.016)

        assert controller.dismissed_at_timestamp is None
        assert not controller.is_waiting_for_grace()
        assert controller.is_displayed()
        assert controller.display_reason == "cutscene"

    def test_cancelled_hold_restarts_with_new_notification(self, controller, clock, recorded_events):
        controller.tick(0.016)
        controller.set_forced_visibility(True, "cutscene")
        controller.tick(0.016)
        controller.set_forced_visibility(False, "")
        clock.advance(1.0)
        controller.tick(0.016)

        assert hold_starts(recorded_events) == [2.0, 2.0]
        assert controller.dismissed_at_timestamp == clock.now()

    def test_hold_keeps_world_rendering(self, controller, mock_presenter, clock):
        controller.tick(0.016)
        mock_presenter.reset_mock()
        clock.advance(0.5)

        controller.tick(0.016)

        mock_presenter.set_world_rendering_suppressed.assert_called_once_with(False)

    def test_zero_hold_hides_immediately(self, controller, settings, session, recorded_events):
        settings.set("loading_screen", "hold_additional_seconds", 0.0)
        block_on_world_not_playing(session)
        controller.tick(0.016)
        session.world.begin_play()

        controller.tick(0.016)

        assert not controller.is_displayed()
        assert hold_starts(recorded_events) == [0.0]
        assert not controller.is_waiting_for_grace()

    def test_raising_hold_after_it_ended_does_not_reshow(self, controller, settings, session, clock,
                                                          recorded_events):
        controller.tick(0.016)
        clock.advance(2.5)
        controller.tick(0.016)
        assert not controller.is_displayed()

        settings.set("loading_screen", "hold_additional_seconds", 10.0)
        controller.tick(0.016)

        assert not controller.is_displayed()
        assert controller.display_reason == DisplayReason.NONE
        assert controller.grace_time_remaining() == 0.0
        assert visibility_changes(recorded_events) == [True, False]

        block_on_world_not_playing(session)
        controller.tick(0.016)
        session.world.begin_play()
        controller.tick(0.016)

        assert controller.is_waiting_for_grace()
        assert hold_starts(recorded_events) == [2.0, 10.0]

    def test_grace_time_remaining_without_hold(self, controller):
        assert controller.grace_time_remaining() == 0.0

    def test_not_waiting_for_grace_while_blocked(self, controller, session):
        session.set_world(None)
        controller.tick(0.016)
        assert controller.is_displayed()
        assert not controller.is_waiting_for_grace()


class TestEditorEnvironment:
    """Hold time suppression in editor-like sessions."""

    def test_editor_skips_hold(self, controller, settings, session, recorded_events):
        settings.set("loading_screen", "hold_additional_seconds", 5.0)
        session.editor_mode = True
        block_on_world_not_playing(session)
        controller.tick(0.016)
        assert controller.is_displayed()

        session.world.begin_play()
        controller.tick(0.016)

        assert not controller.is_displayed()
        assert hold_starts(recorded_events) == [0.0]

    def test_editor_hold_can_be_enabled(self, controller, settings, session, recorded_events):
        settings.set("loading_screen", "hold_additional_seconds", 5.0)
        settings.set("debugging", "show_hold_time_in_editor", True)
        session.editor_mode = True

        controller.tick(0.016)

        assert controller.is_displayed()
        assert hold_starts(recorded_events) == [5.0]


# ===========================================================
# Transitions & Notifications
# ===========================================================

class TestTransitions:
    """apply_decision() state changes and presenter commands."""

    def test_show_then_attach(self, controller, mock_presenter, events):
        seen_attached = []
        events.subscribe(VisibilityChangedEvent,
                         lambda e: seen_attached.append(mock_presenter.attach_indicator.called))

        controller.apply_decision(True)

        assert controller.state is LoadingScreenState.DISPLAYED
        assert seen_attached == [False]
        mock_presenter.attach_indicator.assert_called_once()
        mock_presenter.set_world_rendering_suppressed.assert_called_once_with(True)
        mock_presenter.set_high_priority_streaming.assert_called_once_with(True)

    def test_detach_then_hide(self, controller, mock_presenter, events):
        controller.apply_decision(True)
        seen = []
        events.subscribe(
            VisibilityChangedEvent,
            lambda e: seen.append((controller.is_displayed(), mock_presenter.detach_indicator.called))
        )

        controller.apply_decision(False)

        assert seen == [(False, True)]
        mock_presenter.set_world_rendering_suppressed.assert_called_with(False)
        mock_presenter.set_high_priority_streaming.assert_called_with(False)

    def test_repeated_decisions_are_idempotent(self, controller, session, mock_presenter, recorded_events):
        session.set_world(None)
        for _ in range(2):
            controller.apply_decision(controller.decide_show_or_hide())

        assert visibility_changes(recorded_events) == [True]
        mock_presenter.attach_indicator.assert_called_once()

    def test_hide_while_hidden_is_noop(self, controller, mock_presenter, recorded_events):
        controller.apply_decision(False)
        assert recorded_events == []
        assert mock_presenter.mock_calls == []

    def test_failing_listener_does_not_break_state(self, controller, events, mock_presenter):
        events.subscribe(VisibilityChangedEvent, MagicMock(side_effect=RuntimeError("boom")))

        controller.apply_decision(True)

        assert controller.is_displayed()
        mock_presenter.attach_indicator.assert_called_once()


# ===========================================================
# Game Logic Override
# ===========================================================

class TestForcedVisibility:

    def test_set_forced_visibility_is_pull_based(self, controller, mock_presenter, recorded_events):
        controller.set_forced_visibility(True, "cutscene")

        assert controller.forced_by_game_logic
        assert controller.user_specified_reason == "cutscene"
        assert not controller.is_displayed()
        assert mock_presenter.mock_calls == []
        assert recorded_events == []

    def test_cutscene_reason_is_reported(self, controller):
        controller.set_forced_visibility(True, "cutscene")
        controller.tick(0.016)

        assert controller.is_displayed()
        assert controller.display_reason == "cutscene"


# ===========================================================
# Lifecycle
# ===========================================================

class TestLifecycle:

    def test_pre_load_skipped_until_host_initialized(self, controller, session, mock_presenter):
        session.initialized = False
        session.set_world(None)

        controller.on_before_level_load()

        assert not controller.is_displayed()
        mock_presenter.attach_indicator.assert_not_called()

    def test_pre_load_updates_immediately(self, controller, session):
        session.set_world(None)
        controller.on_before_level_load()
        assert controller.is_displayed()
        assert controller.display_reason == DisplayReason.NULL_WORLD

    def test_post_load_is_noop(self, controller, session, mock_presenter):
        session.set_world(None)
        controller.on_after_level_load()
        assert not controller.is_displayed()
        assert mock_presenter.mock_calls == []

    def test_bound_to_level_events(self, controller, session, events):
        controller.bind()
        session.set_world(None)

        events.dispatch(LevelPreLoadEvent("Harbor"))

        assert controller.is_displayed()
        assert events.get_subscriber_count(LevelPostLoadEvent) == 1

    def test_shutdown_releases_and_unbinds(self, controller, session, events, mock_presenter):
        controller.bind()
        controller.shutdown()
        controller.shutdown()

        mock_presenter.release.assert_called_once()
        assert events.get_subscriber_count(LevelPreLoadEvent) == 0
        assert not controller.is_tickable()

        session.set_world(None)
        controller.tick(0.016)
        events.dispatch(LevelPreLoadEvent("Harbor"))
        assert not controller.is_displayed()

    def test_context_manager_releases_on_error(self, session, settings, mock_presenter, clock):
        with pytest.raises(RuntimeError):
            with LoadingScreenController(session, settings, mock_presenter, clock=clock) as ctrl:
                raise RuntimeError("level script crashed")

        assert ctrl.is_shut_down
        mock_presenter.release.assert_called_once()


class TestCreation:

    def test_dedicated_server_gets_no_controller(self, settings, mock_presenter):
        server = HostSession(dedicated_server=True)

        assert should_create_controller(server) is False
        assert create_loading_screen_controller(server, settings, mock_presenter) is None

    def test_client_controller_is_bound(self, session, settings, mock_presenter, events):
        ctrl = create_loading_screen_controller(session, settings, mock_presenter, events=events)

        assert isinstance(ctrl, LoadingScreenController)
        assert events.get_subscriber_count(LevelPreLoadEvent) == 1


# ===========================================================
# Settings Snapshot
# ===========================================================

class TestSettingsSnapshot:

    @pytest.mark.parametrize("blocked", [True, False])
    def test_one_snapshot_per_evaluation(self, session, settings, mock_presenter, clock, blocked):
        tracked = MagicMock(wraps=settings)
        controller = LoadingScreenController(session, tracked, mock_presenter, clock=clock)
        if blocked:
            block_on_world_not_playing(session)

        controller.tick(0.016)

        assert tracked.snapshot.call_count == 1

    def test_decision_uses_the_given_snapshot(self, controller, settings):
        before_force = settings.snapshot()
        settings.set("debugging", "force_display", True)

        assert controller.decide_show_or_hide(before_force) is True
        assert controller.display_reason.startswith("holding loading screen up")


# ===========================================================
# Diagnostics
# ===========================================================

class TestReasonLogging:

    def test_logs_every_evaluation_when_enabled(self, controller, settings, session):
        settings.set("debugging", "log_reasons", True)
        block_on_world_not_playing(session)

        with patch("src.systems.loading.loading_screen_controller.DebugLogger") as mock_logger:
            controller.tick(0.016)
            controller.tick(0.016)

        lines = [c.args[0] for c in mock_logger.state.call_args_list
                 if c.args[0].startswith("Loading screen display status")]
        assert lines == ["Loading screen display status: 1. Reason: world hasn't begun play"] * 2

    def test_silent_when_disabled(self, controller):
        with patch("src.systems.loading.loading_screen_controller.DebugLogger") as mock_logger:
            controller.tick(0.016)

        assert not any(c.args[0].startswith("Loading screen display status")
                       for c in mock_logger.state.call_args_list)
