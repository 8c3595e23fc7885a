"""
Event bus for NEON DASH.

The simulation core never calls into its host. It reports score, level and
game over as events, and the host (screens, wallet, audio toggles) listens.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Everything that can travel over the bus."""
    # Core -> host
    SCORE_UPDATED = auto()
    LEVEL_CHANGED = auto()
    GAME_OVER = auto()

    # Frame driver lifecycle
    RUN_STARTED = auto()
    RUN_STOPPED = auto()

    # Host
    STATE_CHANGED = auto()
    SKIN_CHANGED = auto()
    WALLET_CHANGED = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    A single notification.

    Attributes:
        type: What happened
        data: Payload, e.g. ``{"score": 312.4}``
        source: Who sent it ("engine", "driver", "app", ...)
        timestamp: Monotonic seconds at creation
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Synchronous pub/sub.

    Handlers run in subscription order, then wildcard handlers. An exception
    in one handler is logged and the rest still run, so a broken listener
    cannot stall a simulation step.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._subscribers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._wildcard: list[Handler] = []
        self._recent: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Listen for one kind of event.

        Returns:
            A callable that removes the subscription (safe to call twice)
        """
        subscribers = self._subscribers[event_type]
        subscribers.append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)} to {event_type}")

        def unsubscribe() -> None:
            if handler in subscribers:
                subscribers.remove(handler)

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Listen for every event. Returns an unsubscribe callable."""
        self._wildcard.append(handler)

        def unsubscribe() -> None:
            if handler in self._wildcard:
                self._wildcard.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver an event to its subscribers right away."""
        self._recent.append(event)

        # Copy so handlers may unsubscribe while being called
        for handler in [*self._subscribers.get(event.type, ()), *self._wildcard]:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Handler for {event.type} failed: {e}")

    def get_history(self, event_type: EventType | str | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._recent if event_type is None or e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._recent.clear()


def score_event(score: float) -> Event:
    return Event(EventType.SCORE_UPDATED, data={"score": score}, source="engine")


def level_event(level: int) -> Event:
    return Event(EventType.LEVEL_CHANGED, data={"level": level}, source="engine")


def game_over_event(score: float, orbs: int) -> Event:
    """Run summary: final distance and orbs collected this session."""
    return Event(EventType.GAME_OVER, data={"score": score, "orbs": orbs}, source="engine")
