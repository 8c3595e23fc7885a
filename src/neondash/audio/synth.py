"""
Waveform generation for the tone generator.

Each cue is a short list of tones. A tone is one oscillator with a fixed
frequency, waveform and duration, shaped by an exponential gain ramp, and
starting at an offset from the beginning of the cue.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray


class WaveType(Enum):
    """Oscillator waveform types."""
    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


@dataclass(frozen=True)
class Tone:
    """A single oscillator note inside a cue."""
    frequency: float
    wave: WaveType = WaveType.SINE
    duration: float = 0.1  # seconds
    offset_ms: float = 0.0
    gain_start: float = 0.1
    gain_end: float = 0.001


def oscillator(wave: WaveType, frequency: float, t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Evaluate a waveform in [-1, 1] at times ``t`` (seconds)."""
    phase = (t * frequency) % 1.0
    if wave is WaveType.SINE:
        return np.sin(2 * np.pi * frequency * t)
    if wave is WaveType.SQUARE:
        return np.where(phase < 0.5, 1.0, -1.0)
    if wave is WaveType.SAWTOOTH:
        return 2.0 * phase - 1.0
    if wave is WaveType.TRIANGLE:
        return 4.0 * np.abs(phase - 0.5) - 1.0
    raise ValueError(f"Unknown waveform: {wave}")


def exponential_ramp(start: float, end: float, count: int) -> NDArray[np.float64]:
    """Gain curve falling exponentially from ``start`` to ``end``."""
    if count <= 0:
        return np.zeros(0)
    if count == 1:
        return np.array([start])
    return start * (end / start) ** np.linspace(0.0, 1.0, count)


def render_tone(tone: Tone, sample_rate: int) -> NDArray[np.float64]:
    """Render one tone to mono float samples."""
    count = max(1, int(sample_rate * tone.duration))
    t = np.arange(count) / sample_rate
    return oscillator(tone.wave, tone.frequency, t) * exponential_ramp(
        tone.gain_start, tone.gain_end, count
    )


def render_cue(tones: Sequence[Tone], sample_rate: int) -> NDArray[np.float64]:
    """Mix a sequence of tones, each placed at its offset, into one buffer."""
    if not tones:
        return np.zeros(0)

    parts = []
    length = 0
    for tone in tones:
        start = int(sample_rate * tone.offset_ms / 1000)
        samples = render_tone(tone, sample_rate)
        parts.append((start, samples))
        length = max(length, start + len(samples))

    mix = np.zeros(length)
    for start, samples in parts:
        mix[start:start + len(samples)] += samples
    return mix


def to_pcm16(samples: NDArray[np.float64], channels: int = 2, volume: float = 1.0) -> NDArray[np.int16]:
    """Convert float samples to interleaved signed 16-bit PCM."""
    pcm = np.clip(samples * volume, -1.0, 1.0)
    pcm = (pcm * 32767).astype(np.int16)
    if channels > 1:
        pcm = np.repeat(pcm[:, None], channels, axis=1)
    return np.ascontiguousarray(pcm)
