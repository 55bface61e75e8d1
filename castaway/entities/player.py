"""
Player entity: position, vitals and inventory.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, Mapping, Optional

from config import (
    PLAYER_SPEED, PLAYER_START_INVENTORY, MOVE_ENERGY_DRAIN, BLOCKED_ENERGY_DRAIN,
    REST_ENERGY_REGEN, EAT_HEALTH_RESTORE, EAT_WARMTH_RESTORE, TILE_SIZE,
)
from castaway.entities.inventory import Inventory
from castaway.world import ResourceKind, ResourceNode

logger = logging.getLogger(__name__)

VITAL_MIN = 0.0
VITAL_MAX = 100.0


def clamp_vital(value: float) -> float:
    return max(VITAL_MIN, min(VITAL_MAX, float(value)))


class Player:
    """The castaway. All vitals live in [0, 100]."""

    def __init__(
        self,
        x: float,
        y: float,
        *,
        speed: float = PLAYER_SPEED,
        inventory: Optional[Mapping] = None,
        move_drain: float = MOVE_ENERGY_DRAIN,
        blocked_drain: float = BLOCKED_ENERGY_DRAIN,
        rest_regen: float = REST_ENERGY_REGEN,
        eat_health: float = EAT_HEALTH_RESTORE,
        eat_warmth: float = EAT_WARMTH_RESTORE,
    ):
        self.x = float(x)
        self.y = float(y)
        self.speed = float(speed)  # tuned so each frame moves ~8-10px at 60fps before fatigue
        self.direction = (0.0, 0.0)
        self.facing = (0.0, 1.0)

        self._energy = VITAL_MAX
        self._health = VITAL_MAX
        self._warmth = VITAL_MAX
        self.inventory = Inventory(PLAYER_START_INVENTORY if inventory is None else inventory)

        self.move_drain = float(move_drain)
        self.blocked_drain = float(blocked_drain)
        self.rest_regen = float(rest_regen)
        self.eat_health = float(eat_health)
        self.eat_warmth = float(eat_warmth)

    # Vitals are clamped on every write so no caller can push them out of range.
    @property
    def energy(self) -> float:
        return self._energy

    @energy.setter
    def energy(self, value: float) -> None:
        self._energy = clamp_vital(value)

    @property
    def health(self) -> float:
        return self._health

    @health.setter
    def health(self, value: float) -> None:
        self._health = clamp_vital(value)

    @property
    def warmth(self) -> float:
        return self._warmth

    @warmth.setter
    def warmth(self, value: float) -> None:
        self._warmth = clamp_vital(value)

    @property
    def effective_speed(self) -> float:
        """Tired players are slower, never below 60% of base speed."""
        return self.speed * (0.6 + self.energy / 200.0)

    def move(self, dx: float, dy: float, dt: float, is_blocked: Callable[[float, float], bool]) -> bool:
        """
        Try to move along (dx, dy). Returns True if the position changed.

        Pushing against an obstacle still costs (less) energy.
        """
        length = math.hypot(dx, dy)
        if length == 0:
            self.rest(dt)
            return False
        ux, uy = dx / length, dy / length
        self.direction = (ux, uy)
        self.facing = (ux, uy)

        step = self.effective_speed * dt
        target_x = self.x + ux * step
        target_y = self.y + uy * step
        if not is_blocked(target_x, target_y):
            self.x = target_x
            self.y = target_y
            self.energy -= self.move_drain * dt
            return True

        self.energy -= self.blocked_drain * dt
        return False

    def rest(self, dt: float) -> None:
        self.direction = (0.0, 0.0)
        self.energy += self.rest_regen * dt

    def eat(self) -> bool:
        """Eat one food. Returns False (nothing to eat) when out of food."""
        if not self.inventory.spend({ResourceKind.FOOD: 1}):
            return False
        self.health += self.eat_health
        self.warmth += self.eat_warmth
        return True

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.x, y - self.y)

    def collect_nearby(self, resources: Iterable[ResourceNode], radius: float, tile_size: int = TILE_SIZE) -> list[ResourceNode]:
        """Collect every uncollected node within `radius`. Returns the nodes picked up this call."""
        picked = []
        for node in resources:
            if node.collected:
                continue
            rx, ry = node.world_center(tile_size)
            if self.distance_to(rx, ry) < radius and node.collect():
                self.inventory.add(node.kind, 1)
                picked.append(node)
        if picked:
            logger.debug("collected %s", ", ".join(n.kind.value for n in picked))
        return picked
