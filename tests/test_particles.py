"""Tests for the particle system."""

import random

import numpy as np

from neondash.animation.particles import BurstConfig, ParticlePresets, ParticleSystem


def test_burst_spawns_requested_count():
    system = ParticleSystem(random.Random(1))
    system.burst(100, 100, (255, 0, 0), 15)
    assert len(system) == 15
    for p in system.particles:
        assert p.life == 1.0
        assert -5 <= p.vx <= 5
        assert -5 <= p.vy <= 5
        assert 2 <= p.size <= 7
        assert p.color == (255, 0, 0)


def test_burst_drift_shifts_velocity():
    system = ParticleSystem(random.Random(1))
    system.burst(0, 0, (0, 255, 0), ParticlePresets.dash())
    assert all(-9 <= p.vx <= 1 for p in system.particles)


def test_particles_move_and_fade():
    system = ParticleSystem(random.Random(2))
    system.burst(50, 50, (0, 0, 255), BurstConfig(count=1))
    particle = system.particles[0]
    vx, vy = particle.vx, particle.vy

    system.update()

    assert particle.x == 50 + vx
    assert particle.y == 50 + vy
    assert particle.life == 1.0 - 0.025


def test_dead_particles_are_removed():
    system = ParticleSystem(random.Random(3))
    system.burst(0, 0, (255, 255, 255), 5)

    for _ in range(39):
        system.update()
    assert len(system) == 5

    for _ in range(2):
        system.update()
    assert len(system) == 0


def test_seeded_bursts_repeat():
    a = ParticleSystem(random.Random(7))
    b = ParticleSystem(random.Random(7))
    a.burst(0, 0, (1, 2, 3), 10)
    b.burst(0, 0, (1, 2, 3), 10)
    assert [(p.vx, p.vy, p.size) for p in a.particles] == [(p.vx, p.vy, p.size) for p in b.particles]


def test_render_draws_into_buffer():
    buffer = np.zeros((100, 100, 3), dtype=np.uint8)
    system = ParticleSystem(random.Random(4))
    system.burst(50, 50, (255, 255, 255), 3)
    system.render(buffer)
    assert buffer.any()


def test_clear():
    system = ParticleSystem()
    system.burst(0, 0, (1, 1, 1), 4)
    system.clear()
    assert len(system) == 0
