"""Tests for the frame renderer and drawing primitives."""

import numpy as np

from neondash.graphics.primitives import draw_rect, draw_text, text_size, wash
from neondash.graphics.renderer import GameRenderer


def test_player_drawn_in_skin_color(ctx, buffer):
    GameRenderer().render(buffer, ctx, "#ff8c00", time_ms=0.0)
    assert tuple(buffer[480, 160]) == (255, 140, 0)


def test_invalid_skin_color_falls_back_to_default(ctx, buffer):
    GameRenderer().render(buffer, ctx, "not-a-color", time_ms=0.0)
    assert tuple(buffer[480, 160]) == (0, 242, 255)


def test_dashing_player_uses_dash_color(ctx, buffer):
    ctx.player.dashing = True
    GameRenderer().render(buffer, ctx, "#00f2ff", time_ms=0.0)
    assert tuple(buffer[480, 160]) == (255, 0, 255)


def test_level_banner_only_at_start_of_level(ctx, buffer):
    GameRenderer().render(buffer, ctx)
    banner = buffer[220:280, 300:900].copy()
    assert banner.max() > 200

    ctx.score = 500.0
    fresh = np.zeros_like(buffer)
    GameRenderer().render(fresh, ctx)
    assert fresh[220:280, 300:900].max() < 200


def test_wash_fades_previous_frame():
    buffer = np.full((10, 10, 3), 200, dtype=np.uint8)
    wash(buffer, (0, 0, 0), 0.5)
    assert buffer[0, 0, 0] == 100


def test_rect_clips_to_buffer():
    buffer = np.zeros((10, 10, 3), dtype=np.uint8)
    draw_rect(buffer, -5, -5, 8, 8, (255, 255, 255))
    assert buffer[0, 0, 0] == 255
    assert buffer[5, 5, 0] == 0


def test_text_size_and_draw():
    width, height = text_size("AB", 2)
    assert (width, height) == (14, 10)

    buffer = np.zeros((20, 40, 3), dtype=np.uint8)
    draw_text(buffer, "AB", 0, 0, (255, 255, 255), scale=2)
    assert buffer.any()
