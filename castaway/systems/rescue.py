"""
Rescue state machine.

    EXPLORING --arm beacon (at ship, full cost paid)--> BEACON_ARMED
    BEACON_ARMED --rescue timer > duration--> RESCUED
    any non-terminal --health hits 0--> DEAD

Transitions only move forward; RESCUED and DEAD are terminal.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from config import RESCUE_COST, RESCUE_DURATION
from castaway.entities.inventory import normalize_cost
from castaway.sim.contracts import RescuePhase

logger = logging.getLogger(__name__)


class RescueSystem:
    def __init__(self, cost: Optional[Mapping] = None, duration: float = RESCUE_DURATION):
        self.cost = normalize_cost(RESCUE_COST if cost is None else cost)
        self.duration = float(duration)
        self.phase = RescuePhase.EXPLORING
        self.rescue_timer = 0.0
        # One-way latch: stays True through RESCUED (and DEAD, if death came after arming).
        self.beacon_armed = False

    @property
    def is_terminal(self) -> bool:
        return self.phase.is_terminal

    @property
    def time_remaining(self) -> Optional[float]:
        if self.phase is not RescuePhase.BEACON_ARMED:
            return None
        return max(0.0, self.duration - self.rescue_timer)

    def can_arm(self, player, at_ship: bool) -> bool:
        return self.phase is RescuePhase.EXPLORING and at_ship and player.inventory.can_afford(self.cost)

    def arm(self, player, at_ship: bool) -> bool:
        """Light the beacon, paying the full cost atomically. Returns False and changes nothing otherwise."""
        if self.phase is not RescuePhase.EXPLORING or not at_ship:
            return False
        if not player.inventory.spend(self.cost):
            return False
        self.phase = RescuePhase.BEACON_ARMED
        self.beacon_armed = True
        logger.info("Beacon armed; rescue in %.0fs", self.duration)
        return True

    def update(self, dt: float) -> bool:
        """Advance the rescue countdown. Returns True only on the update that completes the rescue."""
        if self.phase is not RescuePhase.BEACON_ARMED:
            return False
        self.rescue_timer += dt
        if self.rescue_timer > self.duration:
            self.phase = RescuePhase.RESCUED
            logger.info("Rescued after %.1fs of beacon time", self.rescue_timer)
            return True
        return False

    def mark_dead(self) -> bool:
        """Enter DEAD from any non-terminal phase. Returns True if this call made the transition."""
        if self.is_terminal:
            return False
        self.phase = RescuePhase.DEAD
        logger.info("Player died of exposure")
        return True
