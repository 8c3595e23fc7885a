"""
Simulation state for a single run.

Everything a step reads or writes lives on ``SimulationContext``. The frame
driver owns one context and hands it to each step function; nothing in the
simulation keeps state at module level.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple
import itertools
import random

from neondash.animation.particles import ParticleSystem
from neondash.config.settings import Settings


class ObstacleType(Enum):
    """Obstacle variants."""
    SPIKE = "spike"
    BLOCK = "block"
    ORB = "orb"

    @property
    def is_hazard(self) -> bool:
        """Hazards end the run on contact; orbs are collected."""
        return self is not ObstacleType.ORB


@dataclass
class Player:
    """The runner. Only y moves; the world scrolls past a fixed x."""

    x: float
    y: float
    width: float
    height: float
    vy: float = 0.0
    grounded: bool = True
    sliding: bool = False
    dashing: bool = False
    dash_cooldown: int = 0
    dash_duration: int = 0

    @classmethod
    def spawn(cls, settings: Settings) -> "Player":
        """Create a player standing on the ground."""
        size = settings.physics.player_size
        return cls(
            x=settings.physics.player_x,
            y=settings.display.ground_y - size,
            width=size,
            height=size,
        )

    def hitbox(self, inset: float) -> Tuple[float, float, float, float]:
        """Collision box as (left, top, right, bottom), shrunk by ``inset``."""
        return (
            self.x + inset,
            self.y + inset,
            self.x + self.width - inset,
            self.y + self.height - inset,
        )


@dataclass
class Obstacle:
    """Something scrolling toward the player."""

    id: int
    x: float
    y: float
    width: float
    height: float
    type: ObstacleType
    color: Tuple[int, int, int]
    speed_multiplier: float = 1.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def bounds(self) -> Tuple[float, float, float, float]:
        """Box as (left, top, right, bottom)."""
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass
class RunSettings:
    """Per-run tuning that changes as the run progresses."""

    speed: float
    gravity: float
    jump_force: float
    bpm: float
    level: int = 1

    @classmethod
    def initial(cls, settings: Settings) -> "RunSettings":
        return cls(
            speed=settings.difficulty.initial_speed,
            gravity=settings.physics.gravity,
            jump_force=settings.physics.jump_force,
            bpm=settings.difficulty.bpm,
            level=1,
        )


@dataclass
class InputState:
    """Logical actions for one step.

    ``jump_held`` and ``slide_held`` mirror held buttons. ``dash_triggered``
    is a pulse: the host sets it on key down and it is consumed by one step.
    """

    jump_held: bool = False
    slide_held: bool = False
    dash_triggered: bool = False


@dataclass
class SimulationContext:
    """All mutable state of a run."""

    settings: Settings
    rng: random.Random
    player: Player
    run: RunSettings
    particles: ParticleSystem
    obstacles: List[Obstacle] = field(default_factory=list)

    # Session accumulators
    score: float = 0.0
    session_orbs: int = 0

    # Clocks (milliseconds since run start)
    clock_ms: float = 0.0
    next_spawn_ms: float = 0.0
    steps: int = 0

    # Set once by the first fatal collision
    game_over: bool = False
    final_score: float = 0.0
    final_orbs: int = 0

    _ids: "itertools.count[int]" = field(default_factory=lambda: itertools.count(1), repr=False)

    @classmethod
    def new(cls, settings: Settings, seed: int | None = None) -> "SimulationContext":
        """Build a fresh context; ``seed`` makes obstacles and particles repeatable."""
        rng = random.Random(seed)
        return cls(
            settings=settings,
            rng=rng,
            player=Player.spawn(settings),
            run=RunSettings.initial(settings),
            particles=ParticleSystem(rng),
        )

    def reset(self, seed: int | None = None) -> None:
        """Restore every per-run value to its starting state."""
        if seed is not None:
            self.rng.seed(seed)
        self.player = Player.spawn(self.settings)
        self.run = RunSettings.initial(self.settings)
        self.particles.clear()
        self.obstacles.clear()
        self.score = 0.0
        self.session_orbs = 0
        self.clock_ms = 0.0
        self.next_spawn_ms = 0.0
        self.steps = 0
        self.game_over = False
        self.final_score = 0.0
        self.final_orbs = 0
        self._ids = itertools.count(1)

    def next_obstacle_id(self) -> int:
        return next(self._ids)

    @property
    def ground_y(self) -> float:
        return self.settings.display.ground_y

    @property
    def width(self) -> int:
        return self.settings.display.width

    @property
    def height(self) -> int:
        return self.settings.display.height
