"""Screen overlays: title, HUD, skin vault and game over.

Drawn on a copy of the game frame with the bitmap-font primitives, so the
screens work the same on any display backend.
"""

import math

from neondash.config.theme import COLORS, resolve_color
from neondash.core.state import State
from neondash.graphics.primitives import (
    Buffer,
    draw_glow,
    draw_rect,
    draw_text,
    draw_text_centered,
    text_size,
    wash,
)
from neondash.simulator.app import NeonDashApp

WHITE = (255, 255, 255)
DIM = (110, 110, 120)
CYAN = COLORS.to_rgb("player")
MAGENTA = COLORS.to_rgb("dash")
YELLOW = COLORS.to_rgb("orb")
RED = COLORS.to_rgb("spike")


def draw_overlay(buffer: Buffer, app: NeonDashApp, time_ms: float = 0.0) -> None:
    """Draw whatever the current screen needs on top of the game frame."""
    state = app.state
    if state is State.PLAYING:
        draw_hud(buffer, app)
    elif state is State.START:
        draw_title(buffer, app, time_ms)
    elif state is State.SHOP:
        draw_vault(buffer, app)
    elif state is State.GAMEOVER:
        draw_game_over(buffer, app)


def draw_hud(buffer: Buffer, app: NeonDashApp) -> None:
    ctx = app.context
    draw_text(buffer, "DISTANCE", 48, 32, CYAN, scale=2, alpha=0.7)
    draw_text(buffer, f"{math.floor(ctx.last_score)}M", 48, 52, WHITE, scale=6)

    draw_text(buffer, "TIER", 330, 32, MAGENTA, scale=2, alpha=0.7)
    draw_text(buffer, f"LVL {ctx.level}", 330, 52, WHITE, scale=6)

    width = buffer.shape[1]
    label_w, _ = text_size("NEON ORBS", 2)
    draw_text(buffer, "NEON ORBS", width - 48 - label_w, 32, YELLOW, scale=2, alpha=0.7)
    orbs = str(app.wallet.orbs)
    orbs_w, _ = text_size(orbs, 5)
    draw_text(buffer, orbs, width - 48 - orbs_w, 52, WHITE, scale=5)


def draw_title(buffer: Buffer, app: NeonDashApp, time_ms: float) -> None:
    h, w = buffer.shape[:2]
    wash(buffer, (0, 0, 0), 0.8)

    pulse = 0.75 + 0.25 * math.sin(time_ms / 300)
    draw_text_centered(buffer, "NEON DASH", w / 2, h / 2 - 120, CYAN, scale=14, alpha=pulse)
    draw_text_centered(buffer, "ENDLESS RHYTHM RUNNER", w / 2, h / 2 - 40, CYAN, scale=3, alpha=0.5)

    draw_text_centered(buffer, "ENTER - INITIATE SEQUENCE", w / 2, h / 2 + 40, WHITE, scale=3)
    draw_text_centered(buffer, "S - SKIN VAULT", w / 2, h / 2 + 80, WHITE, scale=3, alpha=0.8)

    stats = f"BEST RUN: {math.floor(app.context.high_score)}M  ORBS: {app.wallet.orbs}"
    draw_text_centered(buffer, stats, w / 2, h / 2 + 160, WHITE, scale=2, alpha=0.4)


def draw_vault(buffer: Buffer, app: NeonDashApp) -> None:
    h, w = buffer.shape[:2]
    wash(buffer, (0, 0, 0), 0.95)

    draw_text(buffer, "SKIN VAULT", 120, 48, WHITE, scale=6)
    label_w, _ = text_size("AVAILABLE ORBS", 2)
    draw_text(buffer, "AVAILABLE ORBS", w - 120 - label_w, 48, WHITE, scale=2, alpha=0.5)
    orbs = str(app.wallet.orbs)
    orbs_w, _ = text_size(orbs, 4)
    draw_text(buffer, orbs, w - 120 - orbs_w, 70, YELLOW, scale=4)

    columns = 3
    card_w, card_h, gap = 300, 170, 30
    left = (w - (columns * card_w + (columns - 1) * gap)) / 2
    top = 130

    for index, skin in enumerate(app.skins):
        col, row = index % columns, index // columns
        x = left + col * (card_w + gap)
        y = top + row * (card_h + gap)
        unlocked = app.wallet.is_unlocked(skin.id)
        active = skin.id == app.wallet.active_skin
        selected = index == app.vault_index

        draw_rect(buffer, x, y, card_w, card_h, WHITE, alpha=0.05)
        border = CYAN if active else (WHITE if selected else DIM)
        draw_rect(buffer, x, y, card_w, card_h, border, filled=False,
                  thickness=3 if selected else 2, alpha=1.0 if selected or active else 0.3)

        swatch = resolve_color(skin.color)
        draw_glow(buffer, x + 20, y + 20, 40, 40, swatch, radius=16, strength=0.4)
        draw_rect(buffer, x + 20, y + 20, 40, 40, swatch)
        draw_text(buffer, skin.name, x + 20, y + 76, WHITE, scale=3)

        if active:
            label, color = "ACTIVE", CYAN
        elif unlocked:
            label, color = "SELECT", WHITE
        elif app.wallet.orbs >= skin.price:
            label, color = f"BUY: {skin.price}", YELLOW
        else:
            label, color = f"BUY: {skin.price}", RED
        draw_text(buffer, label, x + 20, y + 130, color, scale=3)

    draw_text_centered(buffer, "< > CHOOSE   ENTER - BUY / EQUIP   ESC - BACK",
                       w / 2, h - 40, WHITE, scale=2, alpha=0.6)


def draw_game_over(buffer: Buffer, app: NeonDashApp) -> None:
    h, w = buffer.shape[:2]
    wash(buffer, (60, 5, 5), 0.4)

    ctx = app.context
    draw_text_centered(buffer, "CRITICAL FAILURE", w / 2, h / 2 - 110, RED, scale=10)
    draw_text_centered(buffer, f"DISTANCE REACHED: {math.floor(ctx.last_score)}M",
                       w / 2, h / 2 - 20, WHITE, scale=3)
    draw_text_centered(buffer, f"ORBS COLLECTED: {ctx.last_orbs}",
                       w / 2, h / 2 + 15, YELLOW, scale=3)
    draw_text_centered(buffer, f"BEST ATTEMPT: {math.floor(ctx.high_score)}M",
                       w / 2, h / 2 + 50, WHITE, scale=3, alpha=0.6)
    draw_text_centered(buffer, "ENTER - RETRY   ESC - MENU", w / 2, h / 2 + 120, WHITE, scale=3)
