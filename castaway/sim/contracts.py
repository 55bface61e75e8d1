"""
Thin, stable data contracts between the simulation core and its collaborators.

These are intentionally small "struct-like" dataclasses so:
- the front-end can sample input once per tick without the core knowing about pygame events
- renderers/HUD get read-only snapshots and can never mutate core state
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional


class RescuePhase(Enum):
    EXPLORING = auto()
    BEACON_ARMED = auto()
    RESCUED = auto()
    DEAD = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (RescuePhase.RESCUED, RescuePhase.DEAD)


class SimEvent(Enum):
    """One-shot terminal notifications for the overlay collaborator."""

    DEATH = "death"
    RESCUED = "rescued"


@dataclass(frozen=True, slots=True)
class InputIntent:
    """
    Movement intent sampled once per tick.

    (0, 0) means the player is resting.
    """

    dx: float = 0.0
    dy: float = 0.0

    @property
    def is_resting(self) -> bool:
        return self.dx == 0 and self.dy == 0

    def direction(self) -> tuple[float, float]:
        """Unit vector for the intent ((0, 0) when resting)."""
        length = math.hypot(self.dx, self.dy)
        if length == 0:
            return 0.0, 0.0
        return self.dx / length, self.dy / length


REST = InputIntent()


@dataclass(frozen=True, slots=True)
class CampfireView:
    x: float
    y: float
    timer: float
    active: bool


@dataclass(frozen=True, slots=True)
class SurvivalSnapshot:
    """
    Per-frame, read-only view of the simulation for rendering/HUD.

    Deterministic-friendly: built only from simulation state (no wall-clock, no RNG).
    """

    seed: int
    day: int
    time_of_day: float
    is_night: bool
    night_factor: float
    phase: RescuePhase
    player_x: float
    player_y: float
    facing: tuple[float, float]
    health: float
    energy: float
    warmth: float
    inventory: dict[str, int]
    hints: tuple[str, ...]
    near_ship: bool
    near_fire: bool
    beacon_armed: bool
    rescue_time_remaining: Optional[float]
    beacon_cost_outstanding: Optional[dict[str, int]]
    campfires: tuple[CampfireView, ...] = field(default_factory=tuple)
    supplies_left: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": int(self.seed),
            "day": int(self.day),
            "time_of_day": round(float(self.time_of_day), 3),
            "is_night": bool(self.is_night),
            "phase": self.phase.name.lower(),
            "player": {"x": round(float(self.player_x), 2), "y": round(float(self.player_y), 2)},
            "health": round(float(self.health), 2),
            "energy": round(float(self.energy), 2),
            "warmth": round(float(self.warmth), 2),
            "inventory": dict(self.inventory),
            "hints": list(self.hints),
            "beacon_armed": bool(self.beacon_armed),
            "rescue_time_remaining": self.rescue_time_remaining,
            "beacon_cost_outstanding": self.beacon_cost_outstanding,
            "campfires_active": sum(1 for f in self.campfires if f.active),
            "supplies_left": dict(self.supplies_left),
        }
