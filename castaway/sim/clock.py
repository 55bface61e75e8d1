"""
Day/night clock driven purely by simulation time (never wall-clock).
"""

from __future__ import annotations

import math

from config import DAY_LENGTH, NIGHT_START, NIGHT_END, MORNING_TIME


class DayClock:
    """Wrapping time-of-day plus a count of completed days."""

    def __init__(
        self,
        day_length: float = DAY_LENGTH,
        night_start: float = NIGHT_START,
        night_end: float = NIGHT_END,
        morning_time: float = MORNING_TIME,
    ):
        self.day_length = float(day_length)
        self.night_start = float(night_start)
        self.night_end = float(night_end)
        self.morning_time = float(morning_time)
        self.time_of_day = 0.0
        self.days_elapsed = 0

    @property
    def day(self) -> int:
        """1-based day number for display."""
        return self.days_elapsed + 1

    @property
    def is_night(self) -> bool:
        return self.night_start < self.time_of_day < self.night_end

    @property
    def night_factor(self) -> float:
        """0.0 at noon-ish, 1.0 at deepest night (cosine over the cycle). Render hint only."""
        # Phase is offset so the darkest point sits in the middle of the night window.
        midnight = (self.night_start + self.night_end) / 2.0
        phase = (self.time_of_day - midnight) / self.day_length * 2.0 * math.pi
        return (math.cos(phase) + 1.0) / 2.0

    def advance(self, dt: float) -> None:
        self.time_of_day += float(dt)
        while self.time_of_day >= self.day_length:
            self.time_of_day -= self.day_length
            self.days_elapsed += 1

    def skip_to_morning(self) -> None:
        """Jump to the fixed morning point, rolling the day over if morning has passed."""
        if self.time_of_day > self.morning_time:
            self.days_elapsed += 1
        self.time_of_day = self.morning_time
