"""
Neon palette, skin catalog and color parsing utilities.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any
import logging
import re

import yaml

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


@dataclass(frozen=True)
class NeonColors:
    """Fixed game palette."""
    player: str = "#00f2ff"       # Default skin / fallback body color
    dash: str = "#ff00ff"
    ground: str = "#1a1a1a"
    spike: str = "#ff3131"
    block: str = "#39ff14"
    orb: str = "#fffb00"
    background: str = "#050505"
    grid: str = "#111111"
    white: str = "#ffffff"

    def to_rgb(self, color_name: str) -> RGB:
        """Convert a palette entry to an RGB tuple."""
        return hex_to_rgb(getattr(self, color_name, self.white))


COLORS = NeonColors()


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert ``#rrggbb`` (or ``#rgb``) to an RGB tuple.

    Raises:
        ValueError: If the string is not a hex color.
    """
    match = _HEX_COLOR.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if not match:
        raise ValueError(f"Not a hex color: {hex_color!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return tuple(int(digits[i:i+2], 16) for i in (0, 2, 4))


@lru_cache(maxsize=64)
def resolve_color(value: str | None, fallback: str = COLORS.player) -> RGB:
    """Parse an externally supplied color, falling back to the default skin color.

    Cached, so an invalid value is only reported once.
    """
    try:
        return hex_to_rgb(value)
    except ValueError:
        logger.warning(f"Invalid skin color {value!r}, using {fallback}")
        return hex_to_rgb(fallback)


@dataclass(frozen=True)
class Skin:
    """A purchasable player cosmetic."""
    id: str
    name: str
    color: str
    price: int = 0
    description: str = ""

    @property
    def rgb(self) -> RGB:
        return resolve_color(self.color)


DEFAULT_SKIN = Skin(
    id="default",
    name="CYAN NEON",
    color=COLORS.player,
    price=0,
    description="The original prototype.",
)


@dataclass
class SkinCatalog:
    """Ordered collection of skins available in the vault."""
    name: str = "default"
    description: str = ""
    skins: list[Skin] = field(default_factory=lambda: [DEFAULT_SKIN])

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "SkinCatalog":
        """Create catalog from YAML data."""
        skins = [Skin(**entry) for entry in data.get("skins", [])]
        if not any(s.id == DEFAULT_SKIN.id for s in skins):
            skins.insert(0, DEFAULT_SKIN)
        return cls(
            name=data.get("name", "default"),
            description=data.get("description", ""),
            skins=skins,
        )

    def get(self, skin_id: str | None) -> Skin:
        """Look up a skin, returning the first (default) skin if unknown."""
        for skin in self.skins:
            if skin.id == skin_id:
                return skin
        return self.skins[0]

    def __len__(self) -> int:
        return len(self.skins)

    def __iter__(self):
        return iter(self.skins)


def load_skins(skins_path: Path | None = None) -> SkinCatalog:
    """
    Load the skin catalog from a YAML file.

    Args:
        skins_path: Path to the catalog file

    Returns:
        SkinCatalog instance (just the default skin if the file is missing)
    """
    if skins_path is None:
        skins_path = Path(__file__).parent / "skins.yaml"

    if not skins_path.exists():
        logger.warning(f"Skin catalog not found: {skins_path}")
        return SkinCatalog()

    with open(skins_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    catalog = SkinCatalog.from_yaml(data)
    logger.info(f"Loaded {len(catalog)} skins from {skins_path.name}")
    return catalog
