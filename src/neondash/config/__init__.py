"""Configuration: settings, palette and skin catalog."""

from .settings import Settings, get_settings
from .theme import COLORS, Skin, SkinCatalog, hex_to_rgb, load_skins, resolve_color

__all__ = [
    "Settings",
    "get_settings",
    "COLORS",
    "Skin",
    "SkinCatalog",
    "hex_to_rgb",
    "load_skins",
    "resolve_color",
]
