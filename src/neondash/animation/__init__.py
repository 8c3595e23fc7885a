"""Animation module for NEON DASH."""

from neondash.animation.particles import (
    Particle,
    ParticleSystem,
    BurstConfig,
    ParticlePresets,
)

__all__ = [
    "Particle",
    "ParticleSystem",
    "BurstConfig",
    "ParticlePresets",
]
