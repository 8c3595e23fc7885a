"""
Desktop game window using pygame.

Pumps input, presents the driver's frame buffer with the screen overlays on
top, and routes menu keys to the host application. The simulation itself is
stepped by the frame driver on the same asyncio loop.
"""

import asyncio
import logging
from dataclasses import dataclass

import numpy as np
import pygame

from neondash.core.state import State
from neondash.simulator.app import NeonDashApp
from neondash.simulator.input import InputMapper
from neondash.simulator.overlays import draw_overlay

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    width: int = 1200
    height: int = 600
    title: str = "NEON DASH"
    fullscreen: bool = False
    fps: int = 60


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP / mouse / touch: Jump (hold to keep jumping)
        DOWN: Slide (hold)
        SHIFT: Dash
        ENTER: Start / retry / buy or equip in the vault
        S: Open skin vault from the title screen
        LEFT / RIGHT: Move the vault cursor
        M: Mute audio
        ESC: Back / abort run / quit from the title screen
    """

    def __init__(
        self,
        app: NeonDashApp,
        config: WindowConfig | None = None,
        input_mapper: InputMapper | None = None,
    ) -> None:
        self.app = app
        self.config = config or WindowConfig()
        self.input = input_mapper or InputMapper()
        self.app.driver.input_source = self.input.poll

        self._buffer = np.zeros((self.config.height, self.config.width, 3), dtype=np.uint8)
        self.app.driver.attach_surface(self._buffer)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._audio_armed = False
        self._time_ms = 0.0

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.display.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN | pygame.SCALED

        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _arm_audio(self) -> None:
        """Open the audio device on the first user input."""
        if self._audio_armed:
            return
        self._audio_armed = True
        init = getattr(self.app.cues, "init", None)
        if init is not None:
            init()

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
                continue

            if event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
                self._arm_audio()

            if event.type == pygame.WINDOWFOCUSLOST:
                self.input.reset()
                continue

            self.input.handle_event(event)
            if event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
                if self.app.state in (State.START, State.GAMEOVER):
                    self._start_run()

    def _handle_keydown(self, key: int) -> None:
        """Menu and system keys; gameplay keys go through the input mapper."""
        app = self.app
        state = app.state

        if key == pygame.K_m:
            toggle = getattr(app.cues, "toggle_mute", None)
            if toggle is not None:
                toggle()
            return

        if state is State.START:
            if key == pygame.K_RETURN:
                self._start_run()
            elif key == pygame.K_s:
                app.open_vault()
            elif key == pygame.K_ESCAPE:
                self._running = False

        elif state is State.SHOP:
            if key == pygame.K_LEFT:
                app.move_vault_cursor(-1)
            elif key == pygame.K_RIGHT:
                app.move_vault_cursor(1)
            elif key == pygame.K_UP:
                app.move_vault_cursor(-3)
            elif key == pygame.K_DOWN:
                app.move_vault_cursor(3)
            elif key == pygame.K_RETURN:
                app.confirm_vault_choice()
            elif key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
                app.back_to_menu()

        elif state is State.PLAYING:
            if key == pygame.K_ESCAPE:
                app.abort_run()

        elif state is State.GAMEOVER:
            if key == pygame.K_RETURN:
                self._start_run()
            elif key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
                app.back_to_menu()

    def _start_run(self) -> None:
        """Start or retry a run, dropping input latched on the menu screens."""
        self.input.reset()
        self.app.start_run()

    def _render(self) -> None:
        """Present the latest game frame with the current screen overlay."""
        if not self._screen:
            return

        frame = self._buffer.copy()
        draw_overlay(frame, self.app, self._time_ms)
        pygame.surfarray.blit_array(self._screen, frame.swapaxes(0, 1))
        pygame.display.flip()

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True
        frame_interval = 1.0 / max(1, self.config.fps)

        logger.info("Game window started")

        try:
            while self._running:
                self._handle_events()
                self._render()

                if self._clock:
                    self._time_ms += self._clock.tick()

                # Yield so the frame driver's scheduled step can run
                await asyncio.sleep(frame_interval)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.app.shutdown()
        pygame.display.quit()
        logger.info("Game window closed")
