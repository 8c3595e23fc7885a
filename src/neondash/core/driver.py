"""
Frame driver: owns the run and its repeating step.

States:
    IDLE: No run in progress
    RUNNING: Steps are scheduled on the event loop one frame apart
    STOPPING: A stop or game over was requested; the step in flight
        finishes (including its render) and nothing further is scheduled

Each step runs integrate -> spawn -> collide/score -> particles -> render,
then reschedules itself while still RUNNING.
"""

from enum import Enum, auto
from typing import Callable
import asyncio
import logging

from neondash.audio.engine import CuePlayer
from neondash.config.settings import Settings
from neondash.config.theme import COLORS, resolve_color
from neondash.core.events import (
    Event,
    EventBus,
    EventType,
    game_over_event,
    level_event,
    score_event,
)
from neondash.graphics.primitives import Buffer, clear
from neondash.graphics.renderer import GameRenderer
from neondash.sim.collision import StepResult, update_collisions
from neondash.sim.context import InputState, SimulationContext
from neondash.sim.physics import integrate_player
from neondash.sim.spawner import update_spawner

logger = logging.getLogger(__name__)

InputSource = Callable[[], InputState]


class DriverState(Enum):
    """Frame driver lifecycle."""
    IDLE = auto()
    RUNNING = auto()
    STOPPING = auto()


class FrameDriver:
    """
    Runs the simulation one step per frame.

    The host supplies the play/stop signal (``start``/``stop``), the live skin
    color (``skin_color``), an input source polled once per step and an
    optional frame buffer to draw into. Results flow back only through the
    event bus: SCORE_UPDATED, LEVEL_CHANGED and GAME_OVER.
    """

    def __init__(
        self,
        settings: Settings,
        event_bus: EventBus,
        cues: CuePlayer,
        input_source: InputSource | None = None,
        renderer: GameRenderer | None = None,
        seed: int | None = None,
    ) -> None:
        self.settings = settings
        self.event_bus = event_bus
        self.cues = cues
        self.input_source = input_source or InputState
        self.renderer = renderer or GameRenderer()
        self.seed = seed

        self.ctx = SimulationContext.new(settings, seed)
        self.surface: Buffer | None = None
        self.skin_color: str = COLORS.player

        self._state = DriverState.IDLE
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: asyncio.TimerHandle | None = None
        self._started_at = 0.0
        self._in_step = False
        self._warned_no_surface = False

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is DriverState.RUNNING

    def attach_surface(self, buffer: Buffer | None) -> None:
        """Set (or clear) the frame buffer that steps render into."""
        self.surface = buffer
        self._warned_no_surface = False

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> bool:
        """
        Begin a new run.

        Resets every per-run value and, when an event loop is available,
        schedules the first step.

        Returns:
            True if a run started, False if one is already active
        """
        if self._state is not DriverState.IDLE:
            logger.warning(f"Cannot start run while {self._state.name}")
            return False

        self.ctx.reset(self.seed)
        if self.surface is not None:
            # Drop the previous run's trails
            clear(self.surface, COLORS.to_rgb("background"))
        self._state = DriverState.RUNNING
        logger.info("Run started")
        self.event_bus.emit(Event(EventType.RUN_STARTED, source="driver"))

        try:
            self._loop = loop or asyncio.get_running_loop()
        except RuntimeError:
            # No loop: the caller drives step() by hand
            self._loop = None
            return True

        self._started_at = self._loop.time()
        self._handle = self._loop.call_soon(self._tick)
        return True

    def stop(self) -> None:
        """Stop the run. A step already executing still completes its render."""
        if self._state is not DriverState.RUNNING:
            return

        self._state = DriverState.STOPPING
        self._cancel_pending()
        if not self._in_step:
            self._finish_stop()

    def step(self, timestamp_ms: float, inputs: InputState | None = None) -> StepResult:
        """
        Advance the run by exactly one step. Does nothing unless RUNNING.

        Args:
            timestamp_ms: Run clock in milliseconds (drives the beat clock)
            inputs: Actions for this step; polled from the input source if None

        Returns:
            What happened during the step
        """
        if self._state is not DriverState.RUNNING:
            logger.debug(f"Ignoring step while {self._state.name}")
            return StepResult()

        ctx = self.ctx
        self._in_step = True
        try:
            ctx.clock_ms = timestamp_ms
            ctx.steps += 1
            if inputs is None:
                inputs = self.input_source()

            skin_rgb = resolve_color(self.skin_color)
            integrate_player(ctx, inputs, self.cues, skin_rgb)
            update_spawner(ctx)
            result = update_collisions(ctx, self.cues)

            self.event_bus.emit(score_event(ctx.score))
            if result.new_level is not None:
                self.event_bus.emit(level_event(result.new_level))
            if result.game_over:
                self.event_bus.emit(game_over_event(ctx.final_score, ctx.final_orbs))
                if self._state is DriverState.RUNNING:
                    self._state = DriverState.STOPPING
                    self._cancel_pending()

            ctx.particles.update()
            self._render(timestamp_ms)
        finally:
            self._in_step = False

        if self._state is DriverState.STOPPING:
            self._finish_stop()
        return result

    def _render(self, timestamp_ms: float) -> None:
        if self.surface is None:
            if not self._warned_no_surface:
                logger.debug("No render surface attached, skipping draw")
                self._warned_no_surface = True
            return
        self.renderer.render(self.surface, self.ctx, self.skin_color, timestamp_ms)

    def _tick(self) -> None:
        """Scheduled callback: one step, then book the next one."""
        self._handle = None
        if self._state is not DriverState.RUNNING or self._loop is None:
            return

        elapsed_ms = (self._loop.time() - self._started_at) * 1000
        self.step(elapsed_ms)

        if self._state is DriverState.RUNNING:
            self._handle = self._loop.call_later(self.settings.frame_interval, self._tick)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _finish_stop(self) -> None:
        self._state = DriverState.IDLE
        logger.info(
            f"Run stopped after {self.ctx.steps} steps "
            f"(score {self.ctx.score:.1f}, level {self.ctx.run.level})"
        )
        self.event_bus.emit(Event(EventType.RUN_STOPPED, source="driver"))
