"""
Screen router for the NEON DASH host.

Screens:
    START: Title (start a run or open the vault)
    SHOP: Skin vault
    PLAYING: Run in progress
    GAMEOVER: Run summary with retry / back to title
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Host screens."""
    START = auto()
    SHOP = auto()
    PLAYING = auto()
    GAMEOVER = auto()


@dataclass
class StateContext:
    """What the screens show about the current session."""
    last_score: float = 0.0
    last_orbs: int = 0
    high_score: float = 0.0  # Session only, not persisted
    level: int = 1


Listener = Callable[[State, State, StateContext], None]


class StateMachine:
    """
    Moves between screens along an allowed-moves table.

    Anything not in the table is refused with a warning, so a stray key on
    the wrong screen is harmless.
    """

    ALLOWED: dict[State, frozenset[State]] = {
        State.START: frozenset({State.PLAYING, State.SHOP}),
        State.SHOP: frozenset({State.START}),
        State.PLAYING: frozenset({State.GAMEOVER, State.START}),  # START = abort
        State.GAMEOVER: frozenset({State.PLAYING, State.START}),  # PLAYING = retry
    }

    def __init__(self, initial_state: State = State.START) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        logger.info(f"Screen router starting on {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        return to_state in self.ALLOWED.get(self._state, frozenset())

    def transition(self, to_state: State, **updates: Any) -> bool:
        """
        Switch screens.

        Args:
            to_state: Destination screen
            **updates: ``StateContext`` fields to set on the way; unknown
                names are ignored

        Returns:
            False if the move is not allowed from the current screen
        """
        if not self.can_transition(to_state):
            logger.warning(f"Refusing {self._state.name} -> {to_state.name}")
            return False

        previous, self._state = self._state, to_state
        for name, value in updates.items():
            if hasattr(self._context, name):
                setattr(self._context, name, value)

        logger.info(f"Screen: {previous.name} -> {to_state.name}")
        self._notify(previous)
        return True

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Back to the title screen with a fresh context; the best run survives."""
        previous = self._state
        self._state = State.START
        self._context = StateContext(high_score=self._context.high_score)
        self._notify(previous)
        logger.info("Screen router reset")

    def _notify(self, previous: State) -> None:
        for listener in list(self._listeners):
            try:
                listener(previous, self._state, self._context)
            except Exception as e:
                logger.error(f"Screen listener failed: {e}")
