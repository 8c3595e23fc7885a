"""
NEON DASH tone generator.

Gameplay code only ever asks for a cue by kind through ``play_cue``. The
pygame mixer is opened lazily on first use, and every audio failure is
logged and swallowed: sound is cosmetic and must never interrupt a run.
"""

from enum import Enum, auto
from typing import Dict, Protocol
import logging

import pygame

from .synth import Tone, WaveType, render_cue, to_pcm16

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


class Cue(Enum):
    """Sound cues the simulation can request."""
    JUMP = auto()
    ORB = auto()
    DASH = auto()
    LEVEL_UP = auto()
    DEATH = auto()


CUE_TONES: Dict[Cue, tuple[Tone, ...]] = {
    Cue.JUMP: (Tone(400, WaveType.SQUARE, 0.15),),
    Cue.ORB: (Tone(800, WaveType.SINE, 0.2),),
    Cue.DASH: (Tone(1200, WaveType.SINE, 0.1),),
    # Rising three-note fanfare, notes 100ms apart
    Cue.LEVEL_UP: (
        Tone(440, WaveType.SAWTOOTH, 0.1, offset_ms=0),
        Tone(554.37, WaveType.SAWTOOTH, 0.1, offset_ms=100),
        Tone(659.25, WaveType.SAWTOOTH, 0.2, offset_ms=200),
    ),
    Cue.DEATH: (Tone(100, WaveType.SAWTOOTH, 0.5),),
}


class CuePlayer(Protocol):
    """Anything that can play a cue of a given kind."""

    def play_cue(self, cue: Cue) -> None:
        ...


class SilentCuePlayer:
    """Cue player that ignores every request (audio disabled)."""

    def play_cue(self, cue: Cue) -> None:
        logger.debug(f"Cue {cue.name} (silent)")


class ToneGenerator:
    """
    Synthesized cue player backed by ``pygame.mixer``.

    The mixer is only opened when ``init`` is called or the first cue is
    played, so the window can defer it until the first key press.
    """

    def __init__(self, sample_rate: int = SAMPLE_RATE, volume: float = 1.0):
        self._sample_rate = sample_rate
        self._volume = volume
        self._initialized = False
        self._failed = False
        self._muted = False
        self._sounds: Dict[Cue, pygame.mixer.Sound] = {}

    @property
    def is_ready(self) -> bool:
        """True once the mixer is open."""
        return self._initialized

    def init(self) -> bool:
        """Open the audio device. Safe to call repeatedly."""
        if self._initialized:
            return True
        if self._failed:
            return False

        try:
            pygame.mixer.pre_init(self._sample_rate, -16, 2, 512)
            pygame.mixer.init()
            self._initialized = True
            logger.info(f"Tone generator initialized: {pygame.mixer.get_init()}")
        except Exception as e:
            self._failed = True
            logger.warning(f"Audio unavailable, continuing without sound: {e}")

        return self._initialized

    def play_cue(self, cue: Cue) -> None:
        """Play a cue; never raises."""
        if self._muted or not self.init():
            return

        try:
            sound = self._sounds.get(cue)
            if sound is None:
                sound = self._build_sound(cue)
                self._sounds[cue] = sound
            sound.play()
        except Exception as e:
            logger.debug(f"Failed to play cue {cue.name}: {e}")

    def _build_sound(self, cue: Cue) -> pygame.mixer.Sound:
        """Render a cue's tones into a mixer Sound matching the device format."""
        mixer_format = pygame.mixer.get_init()
        frequency, channels = self._sample_rate, 2
        if mixer_format:
            frequency, _, channels = mixer_format

        samples = render_cue(CUE_TONES[cue], frequency)
        pcm = to_pcm16(samples, channels=channels, volume=self._volume)
        return pygame.mixer.Sound(buffer=pcm.tobytes())

    def mute(self) -> None:
        self._muted = True

    def toggle_mute(self) -> bool:
        """Toggle mute state. Returns True if now muted."""
        self._muted = not self._muted
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        """Close the audio device."""
        self._sounds.clear()
        if self._initialized:
            try:
                pygame.mixer.quit()
            except Exception as e:
                logger.debug(f"Mixer shutdown failed: {e}")
            self._initialized = False
            logger.info("Tone generator cleaned up")


def create_cue_player(enabled: bool = True, sample_rate: int = SAMPLE_RATE,
                      volume: float = 1.0) -> ToneGenerator | SilentCuePlayer:
    """Build the cue player for the given audio settings."""
    if not enabled:
        logger.info("Audio disabled by configuration")
        return SilentCuePlayer()
    return ToneGenerator(sample_rate=sample_rate, volume=volume)
