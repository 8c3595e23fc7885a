"""Tests for the host screen flow, wallet crediting and the skin vault."""

import pytest

from neondash.core.driver import DriverState
from neondash.core.events import EventType
from neondash.core.state import State
from neondash.sim.context import Obstacle, ObstacleType
from neondash.simulator.app import NeonDashApp
from neondash.simulator.overlays import draw_overlay
from neondash.utils.wallet import PurchaseResult, Wallet


@pytest.fixture
def app(settings, cues, tmp_path):
    return NeonDashApp(settings, cues=cues, wallet=Wallet(tmp_path / "wallet.json"))


def add(ctx, kind, x, y, size):
    ctx.obstacles.append(Obstacle(
        id=ctx.next_obstacle_id(), x=x, y=y, width=size, height=size,
        type=kind, color=(255, 255, 255),
    ))


def play_until_over(app):
    driver = app.driver
    while driver.is_running and driver.ctx.steps < 1000:
        driver.step(driver.ctx.steps * 16.0)


def test_starts_on_title(app):
    assert app.state is State.START
    assert app.active_skin.id == "default"
    assert app.driver.skin_color == "#00f2ff"


def test_run_ends_in_game_over_and_banks_orbs(app):
    assert app.start_run()
    ctx = app.driver.ctx
    ctx.next_spawn_ms = float("inf")
    add(ctx, ObstacleType.ORB, 150, 470, 24)
    add(ctx, ObstacleType.SPIKE, 1300, 460, 40)

    play_until_over(app)

    assert app.state is State.GAMEOVER
    assert app.driver.state is DriverState.IDLE
    assert app.context.last_orbs == 1
    assert app.context.last_score == pytest.approx(111.775, abs=0.01)
    assert app.context.high_score == app.context.last_score
    assert app.wallet.orbs == 1


def test_retry_from_game_over(app):
    app.start_run()
    app.driver.ctx.next_spawn_ms = float("inf")
    add(app.driver.ctx, ObstacleType.SPIKE, 150, 460, 40)
    play_until_over(app)
    assert app.state is State.GAMEOVER

    assert app.start_run()
    assert app.state is State.PLAYING
    assert app.driver.state is DriverState.RUNNING
    assert app.driver.ctx.steps == 0


def test_abort_run_returns_to_title_without_banking(app):
    app.start_run()
    app.driver.ctx.session_orbs = 9
    app.abort_run()

    assert app.state is State.START
    assert app.driver.state is DriverState.IDLE
    assert app.wallet.orbs == 0


def test_vault_purchase_flow(app):
    changes = []
    app.event_bus.subscribe(EventType.SKIN_CHANGED, changes.append)

    app.open_vault()
    assert app.state is State.SHOP
    assert app.selected_skin.id == "default"

    app.move_vault_cursor(1)
    assert app.selected_skin.id == "emerald"
    assert app.confirm_vault_choice() is PurchaseResult.TOO_EXPENSIVE
    assert changes == []

    app.wallet.credit(60)
    assert app.confirm_vault_choice() is PurchaseResult.BOUGHT
    assert app.active_skin.id == "emerald"
    assert app.driver.skin_color == "#39ff14"
    assert changes[-1].data == {"skin": "emerald"}

    app.move_vault_cursor(-1)
    assert app.confirm_vault_choice() is PurchaseResult.SELECTED
    assert app.active_skin.id == "default"


def test_vault_cursor_wraps(app):
    app.open_vault()
    app.move_vault_cursor(-1)
    assert app.selected_skin.id == "ember"


def test_vault_unavailable_during_run(app):
    app.start_run()
    app.open_vault()
    assert app.state is State.PLAYING
    assert app.confirm_vault_choice() is None


def test_overlays_draw_every_screen(app, buffer):
    draw_overlay(buffer, app)
    assert buffer.any()

    app.open_vault()
    vault = buffer.copy()
    draw_overlay(vault, app)
    assert vault.any()

    app.back_to_menu()
    app.start_run()
    hud = buffer.copy()
    draw_overlay(hud, app)
    assert hud.any()


def test_shutdown_emits_event(app):
    seen = []
    app.event_bus.subscribe(EventType.SHUTDOWN, seen.append)
    app.start_run()
    app.shutdown()
    assert app.driver.state is DriverState.IDLE
    assert len(seen) == 1
