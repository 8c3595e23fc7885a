"""Tests for settings, palette and the skin catalog."""

from pathlib import Path

import pytest

from neondash.config.settings import Settings
from neondash.config.theme import (
    COLORS,
    DEFAULT_SKIN,
    SkinCatalog,
    hex_to_rgb,
    load_skins,
    resolve_color,
)


def test_default_settings():
    settings = Settings(_env_file=None)
    assert settings.display.width == 1200
    assert settings.display.ground_y == 500
    assert settings.physics.jump_force == -15
    assert settings.difficulty.bpm == 128
    assert settings.frame_interval == pytest.approx(1 / 60)
    assert settings.is_simulator


def test_env_overrides_nested_groups(monkeypatch):
    monkeypatch.setenv("NEONDASH_ENV", "headless")
    monkeypatch.setenv("NEONDASH_SEED", "7")
    monkeypatch.setenv("NEONDASH_DIFFICULTY__BPM", "140")

    settings = Settings(_env_file=None)

    assert not settings.is_simulator
    assert settings.seed == 7
    assert settings.difficulty.bpm == 140


def test_hex_to_rgb():
    assert hex_to_rgb("#00f2ff") == (0, 242, 255)
    assert hex_to_rgb("fff") == (255, 255, 255)
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


def test_resolve_color_falls_back():
    assert resolve_color("#ff3131") == (255, 49, 49)
    assert resolve_color("rainbow") == hex_to_rgb(COLORS.player)
    assert resolve_color(None) == hex_to_rgb(COLORS.player)


def test_palette():
    assert COLORS.to_rgb("orb") == (255, 251, 0)
    assert COLORS.to_rgb("dash") == (255, 0, 255)


def test_bundled_skins():
    catalog = load_skins()
    ids = [skin.id for skin in catalog]
    assert ids == ["default", "emerald", "ruby", "gold", "void", "ember"]
    assert catalog.get("gold").price == 250
    assert catalog.get("void").rgb == (188, 19, 254)


def test_unknown_skin_falls_back_to_default():
    catalog = load_skins()
    assert catalog.get("missing") == catalog.get("default")


def test_missing_catalog_has_default_skin(tmp_path):
    catalog = load_skins(tmp_path / "nope.yaml")
    assert list(catalog) == [DEFAULT_SKIN]


def test_catalog_always_contains_default(tmp_path):
    path = tmp_path / "skins.yaml"
    path.write_text(
        "skins:\n"
        "  - id: pink\n"
        "    name: PINK\n"
        "    color: '#ff00aa'\n"
        "    price: 5\n",
        encoding="utf-8",
    )
    catalog = load_skins(path)
    assert [s.id for s in catalog] == ["default", "pink"]


def test_from_yaml_defaults():
    catalog = SkinCatalog.from_yaml({})
    assert len(catalog) == 1
    assert catalog.name == "default"


def test_settings_point_at_bundled_catalog():
    assert Path(Settings(_env_file=None).skins_path).name == "skins.yaml"


def test_bare_env_names_do_not_leak_into_groups(monkeypatch):
    monkeypatch.setenv("GRAVITY", "5.0")
    monkeypatch.setenv("ENABLED", "false")
    monkeypatch.setenv("WIDTH", "640")
    monkeypatch.setenv("BPM", "60")

    settings = Settings(_env_file=None)

    assert settings.physics.gravity == 0.8
    assert settings.audio.enabled is True
    assert settings.display.width == 1200
    assert settings.difficulty.bpm == 128


def test_prefixed_nested_env_still_applies(monkeypatch):
    monkeypatch.setenv("NEONDASH_PHYSICS__GRAVITY", "1.2")
    monkeypatch.setenv("NEONDASH_AUDIO__ENABLED", "false")

    settings = Settings(_env_file=None)

    assert settings.physics.gravity == 1.2
    assert settings.audio.enabled is False
