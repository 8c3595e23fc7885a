"""Tests for the beat-synchronized obstacle spawner."""

import pytest

from neondash.sim.context import ObstacleType, SimulationContext
from neondash.sim.spawner import beat_interval, build_obstacle, update_spawner


def test_beat_interval_at_level_one(ctx):
    assert beat_interval(ctx) == pytest.approx(60_000 / 136)


def test_beat_interval_shrinks_with_level(ctx):
    first = beat_interval(ctx)
    ctx.run.level = 3
    assert beat_interval(ctx) == pytest.approx(60_000 / 152)
    assert beat_interval(ctx) < first


def test_no_spawn_until_clock_passes_deadline(ctx):
    ctx.next_spawn_ms = 500.0
    ctx.clock_ms = 500.0
    assert update_spawner(ctx) is None
    assert ctx.obstacles == []

    ctx.clock_ms = 500.1
    obstacle = update_spawner(ctx)
    assert obstacle is not None
    assert ctx.obstacles == [obstacle]


def test_spawn_schedules_next_on_beat_fraction(ctx):
    ctx.next_spawn_ms = 0.0
    ctx.clock_ms = 10.0
    update_spawner(ctx)

    gap = ctx.next_spawn_ms - ctx.clock_ms
    beats = gap * 1.08 / beat_interval(ctx)
    assert beats == pytest.approx(0.5) or beats == pytest.approx(1.0) or beats == pytest.approx(2.0)


def test_obstacles_enter_past_right_edge(ctx):
    obstacle = build_obstacle(ctx)
    assert obstacle.x == 1300
    assert obstacle.speed_multiplier == 1.0


def test_obstacle_shapes(ctx):
    seen = set()
    for _ in range(400):
        obstacle = build_obstacle(ctx)
        seen.add(obstacle.type)
        bottom = obstacle.y + obstacle.height

        if obstacle.type is ObstacleType.SPIKE:
            assert (obstacle.width, obstacle.height) == (40, 40)
            assert bottom == 500
            assert obstacle.color == (255, 49, 49)
        elif obstacle.type is ObstacleType.BLOCK:
            assert (obstacle.width, obstacle.height) == (60, 60)
            assert bottom in (500, 410)
            assert obstacle.color == (57, 255, 20)
        else:
            assert (obstacle.width, obstacle.height) == (24, 24)
            assert obstacle.y == 326
            assert obstacle.color == (255, 251, 0)

    assert seen == {ObstacleType.SPIKE, ObstacleType.BLOCK, ObstacleType.ORB}


def test_obstacle_ids_are_unique(ctx):
    ids = [build_obstacle(ctx).id for _ in range(20)]
    assert len(set(ids)) == 20


def test_same_seed_same_obstacles(settings):
    def sequence():
        context = SimulationContext.new(settings, seed=99)
        result = []
        for i in range(1, 200):
            context.clock_ms = i * 100.0
            obstacle = update_spawner(context)
            if obstacle is not None:
                result.append((obstacle.type, obstacle.y, context.next_spawn_ms))
        return result

    assert sequence() == sequence()
    assert len(sequence()) > 10
