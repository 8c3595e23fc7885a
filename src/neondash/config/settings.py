"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups are plain models, so they are only reachable through the
prefixed double-underscore form, e.g. ``NEONDASH_DIFFICULTY__BPM=140``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Canvas and window settings."""

    width: int = 1200
    height: int = 600
    ground_y: int = 500

    # Rendering
    fps: int = 60
    title: str = "NEON DASH"
    fullscreen: bool = False


class PhysicsSettings(BaseModel):
    """Player body and movement constants (per-step units)."""

    player_x: float = 150.0
    player_size: float = 40.0
    slide_height: float = 20.0

    gravity: float = 0.8
    jump_force: float = -15.0

    # Dash timings in steps
    dash_duration: int = 12
    dash_cooldown: int = 50

    # Hitbox shrink on every side
    hitbox_inset: float = 6.0


class DifficultySettings(BaseModel):
    """World speed, tempo and level progression."""

    initial_speed: float = 8.0
    speed_creep: float = 0.0006
    speed_per_level: float = 1.5
    distance_per_level: float = 1000.0

    # Beat clock
    bpm: float = 128.0
    bpm_per_level: float = 8.0
    spacing_per_level: float = 0.08

    # Obstacles enter this far beyond the right edge and are dropped past despawn_x
    spawn_offset: float = 100.0
    despawn_x: float = -100.0


class AudioSettings(BaseModel):
    """Tone generator settings."""

    enabled: bool = True
    sample_rate: int = 44100
    volume: float = Field(default=1.0, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEONDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Fixed seed for obstacle and particle randomness (None = random per run)
    seed: int | None = None

    # Paths
    save_path: Path = Field(default_factory=lambda: Path.home() / ".neondash" / "wallet.json")
    log_file: Path | None = None
    skins_path: Path = Field(default_factory=lambda: Path(__file__).parent / "skins.yaml")

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    difficulty: DifficultySettings = Field(default_factory=DifficultySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with a pygame window."""
        return self.env == "simulator"

    @property
    def frame_interval(self) -> float:
        """Seconds between scheduled simulation steps."""
        return 1.0 / max(1, self.display.fps)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
