"""Particle system for visual effects."""

from typing import List, Tuple
from dataclasses import dataclass
import itertools
import random

from neondash.graphics.primitives import Buffer, draw_rect


@dataclass
class Particle:
    """A single decorative particle, advanced once per simulation step."""

    id: int
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    size: float = 2.0
    life: float = 1.0  # 1 = new, <= 0 = dead
    color: Tuple[int, int, int] = (255, 255, 255)

    @property
    def is_dead(self) -> bool:
        """Check if particle has expired."""
        return self.life <= 0

    def update(self, decay: float) -> None:
        """Integrate velocity and age the particle by one step."""
        self.x += self.vx
        self.y += self.vy
        self.life -= decay


@dataclass(frozen=True)
class BurstConfig:
    """Shape of a one-shot particle burst."""

    count: int = 10
    spread: float = 10.0  # Velocity range per axis, centered on the drift
    drift_x: float = 0.0
    drift_y: float = 0.0
    size_min: float = 2.0
    size_max: float = 7.0


class ParticleSystem:
    """Owns every live particle of a run.

    Randomness comes from the injected source so a seeded run produces the
    same bursts every time.
    """

    LIFE_DECAY = 0.025

    def __init__(self, rng: random.Random | None = None, decay: float = LIFE_DECAY):
        self.rng = rng or random.Random()
        self.decay = decay
        self.particles: List[Particle] = []
        self._ids = itertools.count(1)

    def burst(
        self,
        x: float,
        y: float,
        color: Tuple[int, int, int],
        config: BurstConfig | int = 1,
    ) -> None:
        """Spawn a burst of particles at a point.

        Args:
            x: Burst origin x
            y: Burst origin y
            color: RGB color of every particle in the burst
            config: A BurstConfig, or a plain particle count
        """
        if isinstance(config, int):
            config = BurstConfig(count=config)

        rng = self.rng
        half = config.spread / 2
        for _ in range(config.count):
            self.particles.append(Particle(
                id=next(self._ids),
                x=x,
                y=y,
                vx=(rng.random() * config.spread - half) + config.drift_x,
                vy=(rng.random() * config.spread - half) + config.drift_y,
                size=config.size_min + rng.random() * (config.size_max - config.size_min),
                life=1.0,
                color=color,
            ))

    def update(self) -> None:
        """Advance all particles one step and drop the dead ones."""
        for particle in self.particles:
            particle.update(self.decay)
        self.particles = [p for p in self.particles if not p.is_dead]

    def render(self, buffer: Buffer) -> None:
        """Draw particles as squares whose opacity follows their life."""
        for p in self.particles:
            draw_rect(buffer, p.x, p.y, p.size, p.size, p.color,
                      alpha=max(0.0, min(1.0, p.life)))

    def clear(self) -> None:
        """Remove all particles."""
        self.particles.clear()

    def __len__(self) -> int:
        return len(self.particles)


class ParticlePresets:
    """Burst shapes for the game's notable events."""

    @staticmethod
    def jump() -> BurstConfig:
        """Small puff kicked up from the player's feet."""
        return BurstConfig(count=8, drift_y=-2.0)

    @staticmethod
    def dash() -> BurstConfig:
        """Streak left behind the player."""
        return BurstConfig(count=12, drift_x=-4.0)

    @staticmethod
    def orb() -> BurstConfig:
        """Pickup sparkle."""
        return BurstConfig(count=20)

    @staticmethod
    def level_up() -> BurstConfig:
        """Large celebration at screen center."""
        return BurstConfig(count=60)
