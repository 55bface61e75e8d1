"""
Campfire system: building fires from wood and burning them down.
"""
from __future__ import annotations

import logging
import math

from config import CAMPFIRE_COST, CAMPFIRE_BURN_SECONDS
from castaway.entities.campfire import Campfire
from castaway.world import ResourceKind

logger = logging.getLogger(__name__)


class CampfireSystem:
    """Owns every fire the player has built (spent ones included)."""

    def __init__(self, cost: int = CAMPFIRE_COST, burn_seconds: float = CAMPFIRE_BURN_SECONDS):
        self.cost = int(cost)
        self.burn_seconds = float(burn_seconds)
        self.fires: list[Campfire] = []

    def can_afford(self, player) -> bool:
        return player.inventory.can_afford({ResourceKind.WOOD: self.cost})

    def build(self, player) -> Campfire | None:
        """Place a fire at the player's feet. Returns None (nothing spent) if short on wood."""
        if not self.can_afford(player):
            return None
        player.inventory.spend({ResourceKind.WOOD: self.cost})
        fire = Campfire(player.x, player.y, self.burn_seconds)
        self.fires.append(fire)
        logger.debug("campfire built at (%.0f, %.0f)", fire.x, fire.y)
        return fire

    def update(self, dt: float) -> None:
        for fire in self.fires:
            fire.update(dt)

    def active_fires(self) -> list[Campfire]:
        return [f for f in self.fires if f.active]

    def any_active_within(self, x: float, y: float, radius: float) -> bool:
        return any(math.hypot(f.x - x, f.y - y) < radius for f in self.active_fires())
