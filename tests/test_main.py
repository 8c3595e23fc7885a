"""Tests for the headless entry point and its autopilot."""

from neondash.main import autopilot, run_headless
from neondash.sim.context import InputState, Obstacle, ObstacleType


def test_autopilot_jumps_ground_hazards(ctx):
    assert not autopilot(ctx).jump_held

    ctx.obstacles.append(Obstacle(
        id=1, x=230, y=460, width=40, height=40, type=ObstacleType.SPIKE, color=(255, 0, 0),
    ))
    assert autopilot(ctx).jump_held


def test_autopilot_ignores_orbs(ctx):
    ctx.obstacles.append(Obstacle(
        id=1, x=200, y=326, width=24, height=24, type=ObstacleType.ORB, color=(255, 255, 0),
    ))
    assert autopilot(ctx) == InputState()


def test_headless_run_finishes(settings):
    score = run_headless(settings)
    assert score > 0
