"""
NEON DASH audio: synthesized gameplay cues.
"""

from .engine import Cue, CuePlayer, SilentCuePlayer, ToneGenerator, create_cue_player

__all__ = ["Cue", "CuePlayer", "SilentCuePlayer", "ToneGenerator", "create_cue_player"]
