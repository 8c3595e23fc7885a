"""Tests for cue synthesis and the tone generator's failure handling."""

import numpy as np
import pygame
import pytest

from neondash.audio.engine import (
    CUE_TONES,
    Cue,
    SilentCuePlayer,
    ToneGenerator,
    create_cue_player,
)
from neondash.audio.synth import Tone, WaveType, oscillator, render_cue, render_tone, to_pcm16


def test_every_cue_has_tones():
    assert set(CUE_TONES) == set(Cue)


def test_cue_voicings():
    assert CUE_TONES[Cue.JUMP] == (Tone(400, WaveType.SQUARE, 0.15),)
    assert CUE_TONES[Cue.ORB][0].frequency == 800
    assert CUE_TONES[Cue.DASH][0].frequency == 1200
    assert CUE_TONES[Cue.DEATH][0].wave is WaveType.SAWTOOTH
    assert [t.offset_ms for t in CUE_TONES[Cue.LEVEL_UP]] == [0, 100, 200]
    assert [t.frequency for t in CUE_TONES[Cue.LEVEL_UP]] == [440, 554.37, 659.25]


def test_tone_envelope_decays():
    samples = render_tone(Tone(400, WaveType.SQUARE, 0.25), 8000)
    assert len(samples) == 2000
    assert abs(samples[0]) == pytest.approx(0.1)
    assert abs(samples[-1]) == pytest.approx(0.001)


def test_fanfare_spans_all_notes():
    samples = render_cue(CUE_TONES[Cue.LEVEL_UP], 1000)
    assert len(samples) == 400


@pytest.mark.parametrize("wave", list(WaveType))
def test_oscillator_range(wave):
    t = np.arange(1000) / 8000
    values = oscillator(wave, 440, t)
    assert values.min() >= -1.0
    assert values.max() <= 1.0


def test_pcm16_interleaves_channels():
    pcm = to_pcm16(np.array([0.0, 0.5, -2.0]), channels=2)
    assert pcm.dtype == np.int16
    assert pcm.shape == (3, 2)
    assert pcm[2, 0] == -32767


def test_audio_failure_is_swallowed(monkeypatch):
    def broken(*args, **kwargs):
        raise pygame.error("no audio device")

    monkeypatch.setattr(pygame.mixer, "pre_init", lambda *a, **k: None)
    monkeypatch.setattr(pygame.mixer, "init", broken)

    generator = ToneGenerator()
    assert not generator.init()
    generator.play_cue(Cue.JUMP)
    generator.play_cue(Cue.DEATH)
    assert not generator.is_ready


def test_muted_generator_never_opens_device(monkeypatch):
    calls = []
    monkeypatch.setattr(pygame.mixer, "pre_init", lambda *a, **k: calls.append("pre_init"))
    monkeypatch.setattr(pygame.mixer, "init", lambda *a, **k: calls.append("init"))

    generator = ToneGenerator()
    generator.mute()
    generator.play_cue(Cue.ORB)
    assert calls == []
    assert not generator.toggle_mute()


def test_disabled_audio_uses_silent_player():
    player = create_cue_player(enabled=False)
    assert isinstance(player, SilentCuePlayer)
    player.play_cue(Cue.LEVEL_UP)


def test_enabled_audio_defers_device():
    player = create_cue_player(enabled=True, volume=0.5)
    assert isinstance(player, ToneGenerator)
    assert not player.is_ready


def test_mute_toggle_round_trip(monkeypatch):
    monkeypatch.setattr(pygame.mixer, "pre_init", lambda *a, **k: None)
    monkeypatch.setattr(pygame.mixer, "init", lambda *a, **k: None)

    generator = ToneGenerator()
    assert generator.toggle_mute()
    assert not generator.toggle_mute()
