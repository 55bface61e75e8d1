"""
Survival simulation context.

Owns every piece of mutable core state (world, player, fires, rescue, clock) so the
front-end, headless tools and tests can each run their own independent game. The
front-end samples an InputIntent once per tick, calls `update`, then renders from
`snapshot()`; it never touches the owned objects directly.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

from config import WORLD_SIZE
from castaway.entities.player import Player
from castaway.sim.clock import DayClock
from castaway.sim.contracts import (
    REST, CampfireView, InputIntent, RescuePhase, SimEvent, SurvivalSnapshot,
)
from castaway.sim.determinism import resolve_seed
from castaway.sim.tunables import SurvivalTunables, TerrainTunables
from castaway.systems.campfires import CampfireSystem
from castaway.systems.heat import HeatModel, HeatReading
from castaway.systems.rescue import RescueSystem
from castaway.systems.resources import default_rules
from castaway.world import ResourceKind, World
from castaway.worldgen import generate_world

logger = logging.getLogger(__name__)

HINT_MOVE = "WASD / Arrow Keys to move"
HINT_ACTIONS = "Walk over supplies to gather, Q to eat, F to build fire"
HINT_WARMTH = "Stay warm near fires or the ship!"
HINT_CAMPFIRE = "Press F to place a campfire ({cost} wood)"
HINT_BEACON = "Press B at the ship to arm the beacon"
HINT_BEACON_LIT = "Beacon lit! Hold out until rescue arrives."


class SurvivalSimulation:
    """One island, one castaway."""

    def __init__(self, world: World, tunables: Optional[SurvivalTunables] = None):
        self.world = world
        self.tunables = tunables or SurvivalTunables()
        t = self.tunables

        cx, cy = world.center
        self.player = Player(
            cx,
            cy,
            speed=t.player_speed,
            inventory=t.start_inventory,
            move_drain=t.move_energy_drain,
            blocked_drain=t.blocked_energy_drain,
            rest_regen=t.rest_energy_regen,
            eat_health=t.eat_health_restore,
            eat_warmth=t.eat_warmth_restore,
        )
        self.campfires = CampfireSystem(t.campfire_cost, t.campfire_burn_seconds)
        self.heat = HeatModel(t)
        self.rescue = RescueSystem(t.rescue_cost, t.rescue_duration)
        self.clock = DayClock(t.day_length, t.night_start, t.night_end, t.morning_time)

        self.hints: list[str] = [HINT_MOVE, HINT_ACTIONS, HINT_WARMTH]
        self.elapsed = 0.0
        self.last_heat: Optional[HeatReading] = None
        self._events: list[SimEvent] = []

    @classmethod
    def new_game(
        cls,
        seed: Any = None,
        size: int = WORLD_SIZE,
        *,
        tunables: Optional[SurvivalTunables] = None,
        terrain: Optional[TerrainTunables] = None,
    ) -> "SurvivalSimulation":
        """Resolve the (possibly missing/garbage) seed, generate the island, spawn the player."""
        tunables = tunables or SurvivalTunables()
        rules = default_rules(size, tunables.rescue_cost)
        world = generate_world(resolve_seed(seed), size, tunables=terrain, rules=rules)
        return cls(world, tunables)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def seed(self) -> int:
        return self.world.seed

    @property
    def phase(self) -> RescuePhase:
        return self.rescue.phase

    @property
    def is_over(self) -> bool:
        return self.rescue.is_terminal

    @property
    def near_ship(self) -> bool:
        return self.heat.is_near_ship(self.player.x, self.player.y, self.world.center)

    def beacon_cost_outstanding(self) -> Optional[dict[str, int]]:
        """Missing beacon materials per kind, or None once the beacon no longer needs paying for."""
        if self.rescue.phase is not RescuePhase.EXPLORING:
            return None
        return self.player.inventory.missing(self.rescue.cost)

    def clamp_dt(self, dt: float) -> float:
        """Bound one frame's elapsed time so a stalled frame can't produce a huge state jump."""
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(dt) or dt <= 0:
            return 0.0
        return min(dt, self.tunables.max_dt)

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def update(self, dt: float, intent: InputIntent = REST) -> None:
        """Advance one frame. No-op once the game has ended."""
        if self.is_over:
            return
        dt = self.clamp_dt(dt)
        self.elapsed += dt
        self.clock.advance(dt)

        player = self.player
        if intent.is_resting:
            player.rest(dt)
        else:
            ux, uy = intent.direction()
            player.move(ux, uy, dt, self.world.is_blocked)

        picked = player.collect_nearby(self.world.resources, self.tunables.pickup_radius, self.world.tile_size)

        self.campfires.update(dt)

        self.last_heat = self.heat.apply(
            player,
            dt,
            ship_pos=self.world.center,
            campfires=self.campfires,
            is_night=self.clock.is_night,
        )

        if player.health <= 0:
            if self.rescue.mark_dead():
                self._events.append(SimEvent.DEATH)
            return

        if self.rescue.update(dt):
            self._events.append(SimEvent.RESCUED)
            return

        self._refresh_hints(picked)

    def _add_hint(self, text: str) -> None:
        if text not in self.hints:
            self.hints.append(text)

    def _refresh_hints(self, picked) -> None:
        if any(node.kind is ResourceKind.WOOD for node in picked):
            self._add_hint(HINT_CAMPFIRE.format(cost=self.campfires.cost))
        if self.near_ship and self.rescue.can_arm(self.player, at_ship=True):
            self._add_hint(HINT_BEACON)

    def poll_events(self) -> list[SimEvent]:
        """Drain pending terminal notifications (each is raised exactly once)."""
        events, self._events = self._events, []
        return events

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def eat(self) -> bool:
        if self.is_over:
            return False
        return self.player.eat()

    def build_fire(self) -> bool:
        if self.is_over:
            return False
        return self.campfires.build(self.player) is not None

    def activate_beacon(self) -> bool:
        if self.is_over:
            return False
        if not self.rescue.arm(self.player, at_ship=self.near_ship):
            return False
        self._add_hint(HINT_BEACON_LIT)
        return True

    def sleep_at_ship(self) -> bool:
        """Skip to morning and fully recover. Only inside the ship's safe zone."""
        if self.is_over or not self.near_ship:
            return False
        self.clock.skip_to_morning()
        self.player.health = 100
        self.player.warmth = 100
        self.player.energy = 100
        return True

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> SurvivalSnapshot:
        p = self.player
        heat = self.last_heat
        return SurvivalSnapshot(
            seed=self.seed,
            day=self.clock.day,
            time_of_day=self.clock.time_of_day,
            is_night=self.clock.is_night,
            night_factor=self.clock.night_factor,
            phase=self.rescue.phase,
            player_x=p.x,
            player_y=p.y,
            facing=p.facing,
            health=p.health,
            energy=p.energy,
            warmth=p.warmth,
            inventory=p.inventory.as_dict(),
            hints=tuple(self.hints),
            near_ship=self.near_ship,
            near_fire=bool(heat and heat.near_fire),
            beacon_armed=self.rescue.beacon_armed,
            rescue_time_remaining=self.rescue.time_remaining,
            beacon_cost_outstanding=self.beacon_cost_outstanding(),
            campfires=tuple(CampfireView(f.x, f.y, f.timer, f.active) for f in self.campfires.fires),
            supplies_left={k.value: self.world.remaining(k) for k in ResourceKind},
        )
