"""
Campfire entity: a heat source with a finite burn timer.
"""
from __future__ import annotations

from config import CAMPFIRE_BURN_SECONDS


class Campfire:
    """Spent fires (timer == 0) stay around; `active` is derived, never stored."""

    def __init__(self, x: float, y: float, burn_seconds: float = CAMPFIRE_BURN_SECONDS):
        self.x = float(x)
        self.y = float(y)
        self.timer = float(burn_seconds)  # seconds of burn

    def update(self, dt: float) -> None:
        self.timer = max(0.0, self.timer - dt)

    @property
    def active(self) -> bool:
        return self.timer > 0
