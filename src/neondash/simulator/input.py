"""
Keyboard, mouse and touch mapping to the runner's logical actions.

Jump and slide follow the held state of their keys. Dash is latched on key
down and handed to exactly one simulation step, so holding Shift does not
re-trigger it when the cooldown expires.
"""

import logging

import pygame

from neondash.sim.context import InputState

logger = logging.getLogger(__name__)

JUMP_KEYS = frozenset({pygame.K_SPACE, pygame.K_UP})
SLIDE_KEYS = frozenset({pygame.K_DOWN})
DASH_KEYS = frozenset({pygame.K_LSHIFT, pygame.K_RSHIFT})


class InputMapper:
    """Tracks raw input and produces one ``InputState`` per step."""

    def __init__(self) -> None:
        self._keys_down: set[int] = set()
        self._pointer_down = False
        self._dash_pending = False

    def key_down(self, key: int) -> None:
        if key in DASH_KEYS and key not in self._keys_down:
            self._dash_pending = True
        self._keys_down.add(key)

    def key_up(self, key: int) -> None:
        self._keys_down.discard(key)

    def pointer_down(self) -> None:
        """Mouse button or finger pressed (acts as jump)."""
        self._pointer_down = True

    def pointer_up(self) -> None:
        self._pointer_down = False

    def handle_event(self, event: pygame.event.Event) -> None:
        """Feed a pygame event."""
        if event.type == pygame.KEYDOWN:
            self.key_down(event.key)
        elif event.type == pygame.KEYUP:
            self.key_up(event.key)
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            self.pointer_down()
        elif event.type in (pygame.MOUSEBUTTONUP, pygame.FINGERUP):
            self.pointer_up()

    def poll(self) -> InputState:
        """Snapshot for one step; consumes a pending dash."""
        state = InputState(
            jump_held=self._pointer_down or bool(self._keys_down & JUMP_KEYS),
            slide_held=bool(self._keys_down & SLIDE_KEYS),
            dash_triggered=self._dash_pending,
        )
        self._dash_pending = False
        return state

    def reset(self) -> None:
        """Forget everything (e.g. when a run starts)."""
        self._keys_down.clear()
        self._pointer_down = False
        self._dash_pending = False
