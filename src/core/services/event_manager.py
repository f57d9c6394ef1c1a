"""
event_manager.py
----------------
Event-driven system for decoupled runtime communication.
Lets the loading screen controller, level loader and game code talk
without direct dependencies.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Type
from src.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events."""
    pass


@dataclass(frozen=True)
class HoldTimeStartedEvent(BaseEvent):
    """Dispatched once when the loading screen starts its post-load hold."""
    duration: float


@dataclass(frozen=True)
class VisibilityChangedEvent(BaseEvent):
    """Dispatched when the loading screen is shown or hidden."""
    is_displayed: bool


@dataclass(frozen=True)
class LevelPreLoadEvent(BaseEvent):
    """Dispatched right before a level starts loading."""
    level_name: str


@dataclass(frozen=True)
class LevelPostLoadEvent(BaseEvent):
    """Dispatched once a level has finished loading."""
    level_name: str
    world: object = None


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """Central event dispatcher using pub-sub pattern."""

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = {}
        DebugLogger.system("EventManager initialized", category="event_manager")

    # ===========================================================
    # Subscription
    # ===========================================================

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """
        Register a callback for an event type.

        Args:
            event_type: Event class to listen for
            callback: Function to call when event fires
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        if callback in self._subscribers[event_type]:
            return

        self._subscribers[event_type].append(callback)
        callback_name = getattr(callback, '__name__', repr(callback))
        DebugLogger.system(
            f"Subscribed '{callback_name}' to '{event_type.__name__}'",
            category="event_manager"
        )

    def unsubscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """
        Remove a callback from an event type.

        Args:
            event_type: Event class
            callback: Function to remove
        """
        subscribers = self._subscribers.get(event_type)
        if subscribers and callback in subscribers:
            subscribers.remove(callback)

    def unsubscribe_all(self, callback: Callable) -> None:
        """Remove a callback from all event types."""
        for subscribers in self._subscribers.values():
            if callback in subscribers:
                subscribers.remove(callback)

    # ===========================================================
    # Dispatch
    # ===========================================================

    def dispatch(self, event: BaseEvent) -> None:
        """
        Send event to all registered callbacks, in subscription order.

        A failing callback is logged and does not stop the remaining ones.

        Args:
            event: Event instance to dispatch
        """
        subscribers = self._subscribers.get(type(event))
        if not subscribers:
            return

        for callback in list(subscribers):
            try:
                callback(event)
            except Exception as e:
                callback_name = getattr(callback, '__name__', repr(callback))
                DebugLogger.warn(f"Error in event callback {callback_name}: {e}")

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def clear_event_type(self, event_type: Type[BaseEvent]) -> None:
        """Remove all subscribers for a specific event type."""
        if event_type in self._subscribers:
            self._subscribers[event_type].clear()

    def clear_all(self) -> None:
        """Remove all subscribers."""
        self._subscribers.clear()

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """
        Get count of subscribers.

        Args:
            event_type: Specific event type, or None for total

        Returns:
            Number of subscribers
        """
        if event_type:
            return len(self._subscribers.get(event_type, []))
        return sum(len(subs) for subs in self._subscribers.values())
