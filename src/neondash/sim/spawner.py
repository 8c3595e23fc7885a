"""
Beat-synchronized obstacle spawner.

Obstacles arrive on a beat clock: the interval comes from the tempo plus a
per-level bonus, and the gap to the next obstacle is a random number of
beats (half, one or two) that tightens as the level rises.
"""

import logging

from neondash.config.theme import COLORS
from .context import Obstacle, ObstacleType, SimulationContext

logger = logging.getLogger(__name__)

# Type roll thresholds: above BLOCK_THRESHOLD a block, above ORB_THRESHOLD an orb,
# otherwise a spike.
BLOCK_THRESHOLD = 0.82
ORB_THRESHOLD = 0.65
ELEVATED_BLOCK_CHANCE = 0.45  # Roll must exceed this for a raised block

BLOCK_SIZE = 60.0
BLOCK_LIFT = 90.0
ORB_SIZE = 24.0
ORB_LIFT = 150.0
SPIKE_SIZE = 40.0

_COLOR_NAMES = {
    ObstacleType.SPIKE: "spike",
    ObstacleType.BLOCK: "block",
    ObstacleType.ORB: "orb",
}


def beat_interval(ctx: SimulationContext) -> float:
    """Milliseconds per beat at the current tempo and level."""
    bpm = ctx.run.bpm + ctx.run.level * ctx.settings.difficulty.bpm_per_level
    return 60_000.0 / bpm


def choose_beats(ctx: SimulationContext) -> float:
    """Pick the gap to the next obstacle in beats, weighted toward one."""
    rng = ctx.rng
    if rng.random() > 0.75:
        return 2.0
    if rng.random() > 0.35:
        return 1.0
    return 0.5


def build_obstacle(ctx: SimulationContext) -> Obstacle:
    """Roll a random obstacle at the spawn line."""
    rng = ctx.rng
    ground = ctx.ground_y
    roll = rng.random()

    if roll > BLOCK_THRESHOLD:
        kind = ObstacleType.BLOCK
        width = height = BLOCK_SIZE
        lift = BLOCK_LIFT if rng.random() > ELEVATED_BLOCK_CHANCE else 0.0
        y = ground - height - lift
    elif roll > ORB_THRESHOLD:
        kind = ObstacleType.ORB
        width = height = ORB_SIZE
        y = ground - height - ORB_LIFT
    else:
        kind = ObstacleType.SPIKE
        width = height = SPIKE_SIZE
        y = ground - height

    return Obstacle(
        id=ctx.next_obstacle_id(),
        x=ctx.width + ctx.settings.difficulty.spawn_offset,
        y=y,
        width=width,
        height=height,
        type=kind,
        color=COLORS.to_rgb(_COLOR_NAMES[kind]),
        speed_multiplier=1.0,
    )


def update_spawner(ctx: SimulationContext) -> Obstacle | None:
    """Spawn an obstacle if the beat clock allows it.

    Returns:
        The new obstacle, or None if it is not yet time
    """
    if ctx.clock_ms <= ctx.next_spawn_ms:
        return None

    obstacle = build_obstacle(ctx)
    ctx.obstacles.append(obstacle)

    beats = choose_beats(ctx)
    spacing = 1 + ctx.run.level * ctx.settings.difficulty.spacing_per_level
    ctx.next_spawn_ms = ctx.clock_ms + beat_interval(ctx) * (beats / spacing)

    logger.debug(
        f"Spawned {obstacle.type.value} #{obstacle.id} at y={obstacle.y:.0f}, "
        f"next in {ctx.next_spawn_ms - ctx.clock_ms:.0f}ms"
    )
    return obstacle
