"""Shared fixtures for the NEON DASH test suite."""

import numpy as np
import pytest

from neondash.audio.engine import Cue
from neondash.config.settings import Settings
from neondash.core.events import EventBus
from neondash.sim.context import SimulationContext


class RecordingCuePlayer:
    """Cue player that remembers every request instead of making noise."""

    def __init__(self):
        self.played: list[Cue] = []

    def play_cue(self, cue: Cue) -> None:
        self.played.append(cue)

    def count(self, cue: Cue) -> int:
        return self.played.count(cue)


@pytest.fixture
def settings(tmp_path):
    """Default settings isolated from the user's .env and home directory."""
    return Settings(_env_file=None, seed=1234, save_path=tmp_path / "wallet.json")


@pytest.fixture
def cues():
    return RecordingCuePlayer()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def ctx(settings):
    """A fresh seeded run with spawning switched off."""
    context = SimulationContext.new(settings, seed=1234)
    context.next_spawn_ms = float("inf")
    return context


@pytest.fixture
def buffer(settings):
    return np.zeros((settings.display.height, settings.display.width, 3), dtype=np.uint8)
