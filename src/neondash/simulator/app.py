"""
NEON DASH host application.

Wires the frame driver to the screen router, the wallet and the skin vault.
Nothing in here touches pygame, so the whole host flow can run headless.
"""

import asyncio
import logging

from neondash.audio.engine import CuePlayer, create_cue_player
from neondash.config.settings import Settings
from neondash.config.theme import Skin, SkinCatalog, load_skins
from neondash.core.driver import FrameDriver, InputSource
from neondash.core.events import Event, EventBus, EventType
from neondash.core.state import State, StateContext, StateMachine
from neondash.utils.wallet import PurchaseResult, Wallet

logger = logging.getLogger(__name__)


class NeonDashApp:
    """Screen flow around the simulation core.

    The core reports score, level and game over through the event bus; this
    class turns them into screen changes, wallet credits and the session
    high score, and feeds the active skin color back to the driver.
    """

    def __init__(
        self,
        settings: Settings,
        event_bus: EventBus | None = None,
        cues: CuePlayer | None = None,
        wallet: Wallet | None = None,
        skins: SkinCatalog | None = None,
        input_source: InputSource | None = None,
    ) -> None:
        self.settings = settings
        self.event_bus = event_bus or EventBus()
        self.cues = cues or create_cue_player(
            enabled=settings.audio.enabled,
            sample_rate=settings.audio.sample_rate,
            volume=settings.audio.volume,
        )
        self.wallet = wallet if wallet is not None else Wallet(settings.save_path)
        self.skins = skins or load_skins(settings.skins_path)
        self.state_machine = StateMachine()

        self.driver = FrameDriver(
            settings=settings,
            event_bus=self.event_bus,
            cues=self.cues,
            input_source=input_source,
            seed=settings.seed,
        )
        self.driver.skin_color = self.active_skin.color

        # Vault cursor
        self.vault_index = 0

        self._setup_event_handlers()
        logger.info("NeonDashApp initialized")

    def _setup_event_handlers(self) -> None:
        self.event_bus.subscribe(EventType.SCORE_UPDATED, self._on_score)
        self.event_bus.subscribe(EventType.LEVEL_CHANGED, self._on_level)
        self.event_bus.subscribe(EventType.GAME_OVER, self._on_game_over)

    # ===== Properties =====

    @property
    def state(self) -> State:
        return self.state_machine.state

    @property
    def context(self) -> StateContext:
        return self.state_machine.context

    @property
    def active_skin(self) -> Skin:
        return self.skins.get(self.wallet.active_skin)

    @property
    def selected_skin(self) -> Skin:
        return self.skins.skins[self.vault_index]

    # ===== Core notifications =====

    def _on_score(self, event: Event) -> None:
        self.context.last_score = event.data["score"]

    def _on_level(self, event: Event) -> None:
        self.context.level = event.data["level"]

    def _on_game_over(self, event: Event) -> None:
        score = event.data["score"]
        orbs = event.data["orbs"]
        self.wallet.credit(orbs)
        self.state_machine.transition(
            State.GAMEOVER,
            last_score=score,
            last_orbs=orbs,
            high_score=max(self.context.high_score, score),
        )
        self.event_bus.emit(Event(
            EventType.WALLET_CHANGED, data={"orbs": self.wallet.orbs}, source="app"
        ))

    # ===== Screen actions =====

    def start_run(self, loop: asyncio.AbstractEventLoop | None = None) -> bool:
        """Start (or retry) a run from the title or game over screen."""
        if not self.state_machine.transition(State.PLAYING, last_score=0.0, last_orbs=0, level=1):
            return False
        self.driver.skin_color = self.active_skin.color
        return self.driver.start(loop)

    def abort_run(self) -> None:
        """Leave a run without a game over (no orbs are banked)."""
        if self.state is not State.PLAYING:
            return
        self.driver.stop()
        self.state_machine.transition(State.START)

    def open_vault(self) -> None:
        if self.state_machine.transition(State.SHOP):
            ids = [s.id for s in self.skins]
            self.vault_index = ids.index(self.active_skin.id) if self.active_skin.id in ids else 0

    def back_to_menu(self) -> None:
        if self.state in (State.SHOP, State.GAMEOVER):
            self.state_machine.transition(State.START)

    def move_vault_cursor(self, step: int) -> None:
        if self.state is State.SHOP:
            self.vault_index = (self.vault_index + step) % len(self.skins)

    def confirm_vault_choice(self) -> PurchaseResult | None:
        """Buy or select the skin under the cursor."""
        if self.state is not State.SHOP:
            return None

        result = self.wallet.buy_or_select(self.selected_skin)
        if result is not PurchaseResult.TOO_EXPENSIVE:
            self.driver.skin_color = self.active_skin.color
            self.event_bus.emit(Event(
                EventType.SKIN_CHANGED, data={"skin": self.active_skin.id}, source="app"
            ))
            self.event_bus.emit(Event(
                EventType.WALLET_CHANGED, data={"orbs": self.wallet.orbs}, source="app"
            ))
        return result

    def shutdown(self) -> None:
        """Stop any run and release audio."""
        self.driver.stop()
        cleanup = getattr(self.cues, "cleanup", None)
        if cleanup is not None:
            cleanup()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="app"))
        logger.info("NeonDashApp shut down")
