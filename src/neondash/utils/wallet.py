"""Persistent orb wallet and skin unlocks.

Stores the orb balance, unlocked skin ids and the active skin in a single
JSON file. A missing or unreadable file starts a fresh wallet.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List
import json
import logging

from neondash.config.theme import DEFAULT_SKIN, Skin

logger = logging.getLogger(__name__)

ORBS_KEY = "neon_orbs"
SKINS_KEY = "neon_skins"
ACTIVE_SKIN_KEY = "neon_active_skin"


class PurchaseResult(Enum):
    """Outcome of pressing a skin's button in the vault."""
    BOUGHT = "bought"
    SELECTED = "selected"
    TOO_EXPENSIVE = "too_expensive"


@dataclass
class WalletData:
    """Everything the wallet persists."""
    orbs: int = 0
    unlocked: List[str] = field(default_factory=lambda: [DEFAULT_SKIN.id])
    active_skin: str = DEFAULT_SKIN.id


class Wallet:
    """Orb balance and skin ownership backed by a JSON file."""

    def __init__(self, path: Path | None = None):
        self.path = path
        self._data = WalletData()
        self._load()

    @property
    def orbs(self) -> int:
        return self._data.orbs

    @property
    def unlocked(self) -> list[str]:
        return list(self._data.unlocked)

    @property
    def active_skin(self) -> str:
        return self._data.active_skin

    def is_unlocked(self, skin_id: str) -> bool:
        return skin_id in self._data.unlocked

    def credit(self, orbs: int) -> None:
        """Add orbs earned in a run."""
        if orbs <= 0:
            return
        self._data.orbs += orbs
        logger.info(f"Credited {orbs} orbs (balance {self._data.orbs})")
        self._save()

    def buy_or_select(self, skin: Skin) -> PurchaseResult:
        """Select an owned skin, or buy and select it if affordable."""
        if self.is_unlocked(skin.id):
            self._data.active_skin = skin.id
            self._save()
            return PurchaseResult.SELECTED

        if self._data.orbs < skin.price:
            logger.info(f"Cannot afford {skin.id}: {self._data.orbs}/{skin.price}")
            return PurchaseResult.TOO_EXPENSIVE

        self._data.orbs -= skin.price
        self._data.unlocked.append(skin.id)
        self._data.active_skin = skin.id
        logger.info(f"Bought skin {skin.id} for {skin.price} orbs")
        self._save()
        return PurchaseResult.BOUGHT

    def _load(self) -> None:
        """Load wallet from file."""
        if self.path is None or not self.path.exists():
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            unlocked = [str(s) for s in data.get(SKINS_KEY, [DEFAULT_SKIN.id])]
            if DEFAULT_SKIN.id not in unlocked:
                unlocked.insert(0, DEFAULT_SKIN.id)
            self._data = WalletData(
                orbs=max(0, int(data.get(ORBS_KEY, 0))),
                unlocked=unlocked,
                active_skin=str(data.get(ACTIVE_SKIN_KEY, DEFAULT_SKIN.id)),
            )
            logger.info(f"Loaded wallet: {self._data.orbs} orbs, {len(unlocked)} skins")
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to load wallet from {self.path}, starting fresh: {e}")
            self._data = WalletData()

    def _save(self) -> None:
        """Save wallet to file."""
        if self.path is None:
            return

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    {
                        ORBS_KEY: self._data.orbs,
                        SKINS_KEY: self._data.unlocked,
                        ACTIVE_SKIN_KEY: self._data.active_skin,
                    },
                    f,
                    indent=2,
                )
        except OSError as e:
            logger.error(f"Failed to save wallet: {e}")
