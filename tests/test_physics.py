"""Tests for player integration: jump, slide, dash, gravity."""

import pytest

from neondash.audio.engine import Cue
from neondash.sim.context import InputState
from neondash.sim.physics import integrate_player

CYAN = (0, 242, 255)


def step(ctx, cues, **inputs):
    integrate_player(ctx, InputState(**inputs), cues, CYAN)


def test_player_spawns_on_ground(ctx):
    player = ctx.player
    assert player.x == 150
    assert player.y == 460
    assert player.grounded
    assert not player.sliding and not player.dashing


def test_idle_player_stays_on_ground(ctx, cues):
    for _ in range(10):
        step(ctx, cues)
    assert ctx.player.y == 460
    assert ctx.player.vy == 0
    assert ctx.player.grounded


def test_jump_applies_impulse_then_gravity(ctx, cues):
    step(ctx, cues, jump_held=True)

    player = ctx.player
    assert player.vy == pytest.approx(-14.2)
    assert player.y == pytest.approx(445.8)
    assert not player.grounded
    assert cues.played == [Cue.JUMP]
    assert len(ctx.particles) == 8


def test_no_jump_while_airborne(ctx, cues):
    step(ctx, cues, jump_held=True)
    step(ctx, cues, jump_held=True)

    assert cues.count(Cue.JUMP) == 1
    assert ctx.player.vy == pytest.approx(-13.4)


def test_holding_jump_jumps_again_after_landing(ctx, cues):
    for _ in range(100):
        step(ctx, cues, jump_held=True)
    assert cues.count(Cue.JUMP) >= 2


def test_player_lands_back_on_ground(ctx, cues):
    step(ctx, cues, jump_held=True)
    for _ in range(60):
        step(ctx, cues)

    assert ctx.player.grounded
    assert ctx.player.y == 460
    assert ctx.player.vy == 0


def test_slide_keeps_feet_on_ground(ctx, cues):
    step(ctx, cues, slide_held=True)
    player = ctx.player
    assert player.sliding
    assert player.height == 20
    assert player.y == 480

    step(ctx, cues, slide_held=False)
    assert not player.sliding
    assert player.height == 40
    assert player.y == 460


def test_dash_duration_and_cooldown(ctx, cues):
    step(ctx, cues, dash_triggered=True)
    player = ctx.player
    assert player.dashing
    assert player.dash_cooldown == 49
    assert cues.played == [Cue.DASH]
    assert len(ctx.particles) == 12

    for _ in range(10):
        step(ctx, cues)
    assert player.dashing

    step(ctx, cues)
    assert not player.dashing


def test_dash_ignored_during_cooldown(ctx, cues):
    step(ctx, cues, dash_triggered=True)
    for _ in range(49):
        step(ctx, cues, dash_triggered=True)
    assert cues.count(Cue.DASH) == 1
    assert ctx.player.dash_cooldown == 0

    step(ctx, cues, dash_triggered=True)
    assert cues.count(Cue.DASH) == 2
    assert ctx.player.dashing


def test_gravity_suspended_while_dashing(ctx, cues):
    step(ctx, cues, jump_held=True)
    height = ctx.player.y
    velocity = ctx.player.vy

    step(ctx, cues, dash_triggered=True)
    for _ in range(5):
        step(ctx, cues)

    assert ctx.player.y == pytest.approx(height)
    assert ctx.player.vy == pytest.approx(velocity)
    assert not ctx.player.grounded
