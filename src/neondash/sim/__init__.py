"""Runner simulation: state, physics, spawning and collisions."""

from .context import (
    InputState,
    Obstacle,
    ObstacleType,
    Player,
    RunSettings,
    SimulationContext,
)
from .physics import integrate_player
from .spawner import update_spawner, beat_interval
from .collision import StepResult, update_collisions

__all__ = [
    "InputState",
    "Obstacle",
    "ObstacleType",
    "Player",
    "RunSettings",
    "SimulationContext",
    "integrate_player",
    "update_spawner",
    "beat_interval",
    "StepResult",
    "update_collisions",
]
