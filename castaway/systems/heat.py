"""
Environmental heat model: shelter boosts, ambient chill and cold damage.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from castaway.sim.tunables import SurvivalTunables


@dataclass(frozen=True, slots=True)
class HeatReading:
    """What the environment did to the player this frame."""

    near_ship: bool
    near_fire: bool
    is_night: bool
    chill_rate: float
    freezing: bool

    @property
    def sheltered(self) -> bool:
        return self.near_ship or self.near_fire


class HeatModel:
    """
    Per-frame order of application:
      1. near ship: warmth + energy recover fast
      2. else near an active fire: warmth recovers
      3. ambient chill always (higher at night, reduced when sheltered)
      4. below the cold threshold: health damage (reduced at the ship)
    """

    def __init__(self, tunables: Optional[SurvivalTunables] = None):
        self.tunables = tunables or SurvivalTunables()

    def is_near_ship(self, x: float, y: float, ship_pos: tuple[float, float]) -> bool:
        return math.hypot(x - ship_pos[0], y - ship_pos[1]) < self.tunables.ship_radius

    def chill_rate(self, is_night: bool, sheltered: bool) -> float:
        t = self.tunables
        rate = t.night_chill if is_night else t.day_chill
        return rate * (t.shelter_chill_factor if sheltered else 1.0)

    def apply(self, player, dt: float, *, ship_pos: tuple[float, float], campfires, is_night: bool) -> HeatReading:
        t = self.tunables
        near_ship = self.is_near_ship(player.x, player.y, ship_pos)
        near_fire = campfires.any_active_within(player.x, player.y, t.fire_radius)

        if near_ship:
            player.warmth += t.ship_warmth_gain * dt
            player.energy += t.ship_energy_gain * dt
        elif near_fire:
            player.warmth += t.fire_warmth_gain * dt

        chill = self.chill_rate(is_night, near_ship or near_fire)
        player.warmth -= chill * dt

        freezing = player.warmth < t.cold_warmth_threshold
        if freezing:
            damage = t.cold_damage_at_ship if near_ship else t.cold_damage
            player.health -= damage * dt

        return HeatReading(near_ship, near_fire, is_night, chill, freezing)
