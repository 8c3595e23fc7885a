"""
Collision and scoring engine.

Each step: accrue distance score, check for a level-up, creep the world
speed, then scroll every obstacle and resolve contact with the player.
"""

from dataclasses import dataclass
import logging
import math

from neondash.animation.particles import ParticlePresets
from neondash.audio.engine import Cue, CuePlayer
from neondash.config.theme import COLORS
from .context import Obstacle, SimulationContext

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """What the engine observed during one step."""
    new_level: int | None = None
    orbs_collected: int = 0
    game_over: bool = False


def overlaps(a: tuple[float, float, float, float], b: tuple[float, float, float, float]) -> bool:
    """Strict AABB intersection of two (left, top, right, bottom) boxes."""
    return a[0] < b[2] and a[2] > b[0] and a[1] < b[3] and a[3] > b[1]


def accrue_score(ctx: SimulationContext) -> None:
    """Add this step's distance."""
    ctx.score += ctx.run.speed / 10


def check_level_up(ctx: SimulationContext, cues: CuePlayer) -> int | None:
    """Raise the level when the score crosses a distance band.

    Returns:
        The new level, or None if unchanged
    """
    difficulty = ctx.settings.difficulty
    expected = math.floor(ctx.score / difficulty.distance_per_level) + 1
    if expected <= ctx.run.level:
        return None

    ctx.run.level = expected
    ctx.run.speed += difficulty.speed_per_level
    cues.play_cue(Cue.LEVEL_UP)
    ctx.particles.burst(
        ctx.width / 2,
        ctx.height / 2,
        COLORS.to_rgb("white"),
        ParticlePresets.level_up(),
    )
    logger.info(f"Level up: {expected} (speed {ctx.run.speed:.2f}, score {ctx.score:.0f})")
    return expected


def collect_orb(ctx: SimulationContext, orb: Obstacle, cues: CuePlayer) -> None:
    """Bank an orb and celebrate it."""
    ctx.session_orbs += 1
    cues.play_cue(Cue.ORB)
    cx, cy = orb.center
    ctx.particles.burst(cx, cy, COLORS.to_rgb("orb"), ParticlePresets.orb())
    logger.debug(f"Orb collected ({ctx.session_orbs} this run)")


def trigger_game_over(ctx: SimulationContext, hazard: Obstacle, cues: CuePlayer) -> None:
    """Latch the run summary at the moment of the fatal hit."""
    cues.play_cue(Cue.DEATH)
    ctx.game_over = True
    ctx.final_score = ctx.score
    ctx.final_orbs = ctx.session_orbs
    logger.info(
        f"Game over: hit {hazard.type.value} #{hazard.id}, "
        f"score {ctx.final_score:.1f}, orbs {ctx.final_orbs}"
    )


def resolve_obstacles(ctx: SimulationContext, cues: CuePlayer) -> StepResult:
    """Scroll obstacles and resolve contact with the player."""
    result = StepResult()
    player = ctx.player
    hitbox = player.hitbox(ctx.settings.physics.hitbox_inset)
    despawn_x = ctx.settings.difficulty.despawn_x

    kept = []
    for obstacle in ctx.obstacles:
        obstacle.x -= ctx.run.speed * obstacle.speed_multiplier

        if overlaps(hitbox, obstacle.bounds()):
            if not obstacle.type.is_hazard:
                collect_orb(ctx, obstacle, cues)
                result.orbs_collected += 1
                continue
            if not player.dashing and not ctx.game_over:
                trigger_game_over(ctx, obstacle, cues)
                result.game_over = True

        if obstacle.x > despawn_x:
            kept.append(obstacle)

    ctx.obstacles = kept
    return result


def update_collisions(ctx: SimulationContext, cues: CuePlayer) -> StepResult:
    """Run the whole scoring and collision phase for one step."""
    accrue_score(ctx)
    new_level = check_level_up(ctx, cues)
    ctx.run.speed += ctx.settings.difficulty.speed_creep

    result = resolve_obstacles(ctx, cues)
    result.new_level = new_level
    return result
