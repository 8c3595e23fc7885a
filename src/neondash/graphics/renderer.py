"""Frame renderer for NEON DASH.

Draws one run's state into the frame buffer. Rendering only reads the
simulation context; the skin color and clock arrive as arguments.
"""

import math

from neondash.config.theme import COLORS, RGB, resolve_color
from neondash.graphics.primitives import (
    Buffer,
    draw_circle,
    draw_glow,
    draw_line,
    draw_rect,
    draw_text_centered,
    draw_triangle,
    wash,
)
from neondash.sim.context import Obstacle, ObstacleType, SimulationContext

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)


class GameRenderer:
    """Paints background, obstacles, particles, player and level overlay."""

    TRAIL_ALPHA = 0.45

    # Parallax: far grid scrolls slowly, floor grid quickly
    FAR_GRID_SPACING = 200
    FAR_GRID_RATE = 0.5
    FLOOR_GRID_SPACING = 100
    FLOOR_GRID_RATE = 2.5
    FLOOR_GRID_SLANT = 400
    FLOOR_GRID_ALPHA = 0.2

    GROUND_THICKNESS = 3
    OBSTACLE_GLOW = 20
    PLAYER_GLOW = 30
    DASH_GLOW = 40

    PULSE_PERIOD_MS = 70
    PULSE_AMPLITUDE = 4
    EYE_SIZE = 7

    OVERLAY_BAND = 100  # Score units at the start of a level that show the banner
    OVERLAY_SCALE = 12

    def __init__(self) -> None:
        self._background = COLORS.to_rgb("background")
        self._grid = COLORS.to_rgb("grid")
        self._ground = COLORS.to_rgb("ground")
        self._dash = COLORS.to_rgb("dash")

    def render(
        self,
        buffer: Buffer,
        ctx: SimulationContext,
        skin_color: str | None = None,
        time_ms: float = 0.0,
    ) -> None:
        """Render the current run state.

        Args:
            buffer: Target numpy array (height, width, 3)
            ctx: Run state (read only)
            skin_color: Active cosmetic hex color; invalid values fall back
                to the default skin
            time_ms: Wall clock used by the cosmetic pulse
        """
        skin = resolve_color(skin_color)

        wash(buffer, self._background, self.TRAIL_ALPHA)
        self._draw_far_grid(buffer, ctx)
        self._draw_ground(buffer, ctx)
        self._draw_floor_grid(buffer, ctx)

        for obstacle in ctx.obstacles:
            self._draw_obstacle(buffer, obstacle)

        ctx.particles.render(buffer)
        self._draw_player(buffer, ctx, skin, time_ms)
        self._draw_level_overlay(buffer, ctx)

    def _draw_far_grid(self, buffer: Buffer, ctx: SimulationContext) -> None:
        offset = (ctx.score * self.FAR_GRID_RATE) % self.FAR_GRID_SPACING
        x = -offset
        while x < ctx.width:
            draw_rect(buffer, x, 0, 1, ctx.height, self._grid)
            x += self.FAR_GRID_SPACING

    def _draw_ground(self, buffer: Buffer, ctx: SimulationContext) -> None:
        half = self.GROUND_THICKNESS // 2
        draw_rect(buffer, 0, ctx.ground_y - half, ctx.width, self.GROUND_THICKNESS, self._ground)

    def _draw_floor_grid(self, buffer: Buffer, ctx: SimulationContext) -> None:
        offset = (ctx.score * self.FLOOR_GRID_RATE) % self.FLOOR_GRID_SPACING
        for i in range(0, ctx.width + 300, self.FLOOR_GRID_SPACING):
            top_x = i - offset
            draw_line(
                buffer,
                top_x, ctx.ground_y,
                top_x - self.FLOOR_GRID_SLANT, ctx.height,
                self._ground,
                alpha=self.FLOOR_GRID_ALPHA,
            )

    def _draw_obstacle(self, buffer: Buffer, obs: Obstacle) -> None:
        draw_glow(buffer, obs.x, obs.y, obs.width, obs.height, obs.color, radius=self.OBSTACLE_GLOW)

        if obs.type is ObstacleType.SPIKE:
            draw_triangle(
                buffer,
                [
                    (obs.x, obs.y + obs.height),
                    (obs.x + obs.width / 2, obs.y),
                    (obs.x + obs.width, obs.y + obs.height),
                ],
                obs.color,
            )
        elif obs.type is ObstacleType.BLOCK:
            draw_rect(buffer, obs.x, obs.y, obs.width, obs.height, obs.color)
            draw_rect(
                buffer,
                obs.x + 10, obs.y + 10, obs.width - 20, obs.height - 20,
                WHITE, filled=False, thickness=2, alpha=0.5,
            )
        elif obs.type is ObstacleType.ORB:
            cx, cy = obs.center
            draw_circle(buffer, cx, cy, obs.width / 2, obs.color)
            draw_circle(buffer, cx, cy, obs.width / 2, WHITE, filled=False)

    def _draw_player(self, buffer: Buffer, ctx: SimulationContext, skin: RGB, time_ms: float) -> None:
        p = ctx.player
        body = self._dash if p.dashing else skin

        if p.dashing:
            draw_rect(buffer, p.x - 30, p.y, p.width, p.height, body, alpha=0.4)
            draw_rect(buffer, p.x - 60, p.y, p.width, p.height, body, alpha=0.4)

        glow = self.DASH_GLOW if p.dashing else self.PLAYER_GLOW
        draw_glow(buffer, p.x, p.y, p.width, p.height, body, radius=glow, strength=0.45)

        pulse = math.sin(time_ms / self.PULSE_PERIOD_MS) * self.PULSE_AMPLITUDE
        draw_rect(buffer, p.x - pulse / 2, p.y - pulse / 2, p.width + pulse, p.height + pulse, body)

        eye_y = p.y + (7 if p.sliding else 12)
        draw_rect(buffer, p.x + p.width - 16, eye_y, self.EYE_SIZE, self.EYE_SIZE, BLACK)

    def _draw_level_overlay(self, buffer: Buffer, ctx: SimulationContext) -> None:
        into_level = ctx.score % ctx.settings.difficulty.distance_per_level
        if into_level >= self.OVERLAY_BAND:
            return

        alpha = 1.0 - into_level / self.OVERLAY_BAND
        draw_text_centered(
            buffer,
            f"LEVEL {ctx.run.level}",
            ctx.width / 2,
            ctx.height / 2 - 50,
            WHITE,
            scale=self.OVERLAY_SCALE,
            alpha=alpha,
        )
