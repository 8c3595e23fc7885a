"""
Player physics and input integration.

One call to ``integrate_player`` advances the player by one step: jump,
slide, dash, gravity and ground clamp, in that order.
"""

import logging

from neondash.animation.particles import ParticlePresets
from neondash.audio.engine import Cue, CuePlayer
from neondash.config.theme import COLORS
from .context import InputState, SimulationContext

logger = logging.getLogger(__name__)


def try_jump(ctx: SimulationContext, cues: CuePlayer, skin_rgb: tuple[int, int, int]) -> bool:
    """Launch the player if grounded. Returns True if a jump started."""
    player = ctx.player
    if not player.grounded:
        return False

    player.vy = ctx.run.jump_force
    player.grounded = False
    cues.play_cue(Cue.JUMP)
    ctx.particles.burst(
        player.x + player.width / 2,
        player.y + player.height,
        skin_rgb,
        ParticlePresets.jump(),
    )
    logger.debug(f"Jump at step {ctx.steps}")
    return True


def apply_slide(ctx: SimulationContext, slide_held: bool) -> None:
    """Shrink or restore the player so the feet stay where they are."""
    player = ctx.player
    full = ctx.settings.physics.player_size
    low = ctx.settings.physics.slide_height
    delta = full - low

    if slide_held and not player.sliding:
        player.sliding = True
        player.height = low
        player.y += delta
    elif not slide_held and player.sliding:
        player.sliding = False
        player.height = full
        player.y -= delta


def try_dash(ctx: SimulationContext, cues: CuePlayer) -> bool:
    """Start a dash if the cooldown has run out. Returns True if started."""
    player = ctx.player
    if player.dash_cooldown > 0:
        return False

    physics = ctx.settings.physics
    player.dashing = True
    player.dash_duration = physics.dash_duration
    player.dash_cooldown = physics.dash_cooldown
    cues.play_cue(Cue.DASH)
    ctx.particles.burst(
        player.x,
        player.y + player.height / 2,
        COLORS.to_rgb("dash"),
        ParticlePresets.dash(),
    )
    logger.debug(f"Dash at step {ctx.steps}")
    return True


def integrate_player(
    ctx: SimulationContext,
    inputs: InputState,
    cues: CuePlayer,
    skin_rgb: tuple[int, int, int],
) -> None:
    """Advance the player by one step.

    Args:
        ctx: Run state
        inputs: Logical actions for this step
        cues: Where jump/dash sounds go
        skin_rgb: Active cosmetic color, used for the jump burst
    """
    player = ctx.player

    if inputs.jump_held:
        try_jump(ctx, cues, skin_rgb)

    apply_slide(ctx, inputs.slide_held)

    if inputs.dash_triggered:
        try_dash(ctx, cues)

    # Dashing holds the player at a fixed height
    if not player.dashing:
        player.vy += ctx.run.gravity
        player.y += player.vy
    else:
        player.dash_duration -= 1
        if player.dash_duration <= 0:
            player.dashing = False

    if player.dash_cooldown > 0:
        player.dash_cooldown -= 1

    clamp_to_ground(ctx)


def clamp_to_ground(ctx: SimulationContext) -> None:
    """Stop the player on the ground line for its current height."""
    player = ctx.player
    floor = ctx.ground_y - player.height
    if player.y >= floor:
        player.y = floor
        player.vy = 0.0
        player.grounded = True
