"""
Main entry point for NEON DASH.

Launches the pygame window, or a headless autopilot run when
``NEONDASH_ENV=headless`` (handy for checking balance and seeds).
"""

import asyncio
import logging
import sys
from pathlib import Path

from neondash.config.settings import Settings, get_settings
from neondash.core.events import Event, EventType
from neondash.sim.context import InputState, SimulationContext

logger = logging.getLogger(__name__)

# Steps per headless run before giving up
HEADLESS_MAX_STEPS = 20_000


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure logging with console and optional file output."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Per-step chatter
    logging.getLogger("neondash.sim").setLevel(logging.INFO)
    logging.getLogger("neondash.graphics").setLevel(logging.INFO)


def autopilot(ctx: SimulationContext) -> InputState:
    """Simple bot: jump ground hazards, dash when a jump would be too late."""
    player = ctx.player
    speed = ctx.run.speed
    ahead = [
        o for o in ctx.obstacles
        if o.type.is_hazard and o.x + o.width > player.x and o.y + o.height >= ctx.ground_y
    ]
    if not ahead:
        return InputState()

    gap = min(o.x for o in ahead) - (player.x + player.width)
    return InputState(
        jump_held=gap < speed * 9,
        dash_triggered=gap < speed * 2 and player.dash_cooldown == 0,
    )


async def run_simulator(settings: Settings) -> None:
    """Run the game in a desktop window."""
    from neondash.simulator.app import NeonDashApp
    from neondash.simulator.window import GameWindow, WindowConfig

    app = NeonDashApp(settings)
    config = WindowConfig(
        width=settings.display.width,
        height=settings.display.height,
        title=settings.display.title,
        fullscreen=settings.display.fullscreen,
        fps=settings.display.fps,
    )
    window = GameWindow(app, config)

    logger.info("Controls: SPACE/UP jump, DOWN slide, SHIFT dash, ENTER start, S vault, M mute")
    await window.run()


def run_headless(settings: Settings) -> float:
    """Play one run with the autopilot and no display or audio.

    Returns:
        The final distance
    """
    from neondash.audio.engine import SilentCuePlayer
    from neondash.simulator.app import NeonDashApp
    from neondash.utils.wallet import Wallet

    app = NeonDashApp(settings, cues=SilentCuePlayer(), wallet=Wallet(None))
    driver = app.driver
    driver.input_source = lambda: autopilot(driver.ctx)

    app.event_bus.subscribe(
        EventType.LEVEL_CHANGED,
        lambda e: logger.info(f"Level {e.data['level']} at {driver.ctx.score:.0f}m"),
    )

    app.start_run()
    frame_ms = settings.frame_interval * 1000
    while driver.is_running and driver.ctx.steps < HEADLESS_MAX_STEPS:
        driver.step(driver.ctx.steps * frame_ms)

    if driver.is_running:
        driver.stop()

    ctx = driver.ctx
    logger.info(
        f"Headless run finished: {ctx.score:.0f}m, {ctx.session_orbs} orbs, "
        f"level {ctx.run.level}, {ctx.steps} steps"
    )
    app.event_bus.emit(Event(EventType.SHUTDOWN, source="main"))
    return ctx.score


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger.info("NEON DASH starting...")

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        else:
            logger.info("Running headless")
            run_headless(settings)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("NEON DASH stopped")


if __name__ == "__main__":
    main()
