"""
Survival + terrain tunables.

Purpose:
- One cycle-free place where world generation, the simulation, tools and tests read
  the *same* numbers.
- Defaults mirror config.py; tests and tools build variants with `dataclasses.replace`.

Units: seconds (simulation time), world units (pixels at TILE_SIZE), tiles where noted.
The day window and height thresholds have no derivation behind them; they are plain
tuning values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from config import (
    TERRAIN_PEAK_COUNT, TERRAIN_BASE_HEIGHT, TERRAIN_CONTINENT_STRENGTH,
    TERRAIN_CONTINENT_EDGE, TERRAIN_TILT, TERRAIN_NOISE_AMPLITUDE,
    TERRAIN_WATER_LEVEL, TERRAIN_SAND_LEVEL, TERRAIN_ROCK_LEVEL,
    SPAWN_CLEAR_INNER_RADIUS, SPAWN_CLEAR_OUTER_RADIUS,
    PLACEMENT_BORDER_MARGIN, PLACEMENT_ATTEMPT_MULTIPLIER,
    PLAYER_SPEED, PLAYER_START_INVENTORY, MOVE_ENERGY_DRAIN, BLOCKED_ENERGY_DRAIN,
    REST_ENERGY_REGEN, EAT_HEALTH_RESTORE, EAT_WARMTH_RESTORE, PICKUP_RADIUS,
    CAMPFIRE_COST, CAMPFIRE_BURN_SECONDS,
    DAY_LENGTH, NIGHT_START, NIGHT_END, MORNING_TIME,
    SHIP_RADIUS, FIRE_RADIUS, SHIP_WARMTH_GAIN, SHIP_ENERGY_GAIN, FIRE_WARMTH_GAIN,
    DAY_CHILL, NIGHT_CHILL, SHELTER_CHILL_FACTOR,
    COLD_WARMTH_THRESHOLD, COLD_DAMAGE, COLD_DAMAGE_AT_SHIP,
    RESCUE_COST, RESCUE_DURATION, MAX_FRAME_DT,
)


@dataclass(frozen=True, slots=True)
class TerrainTunables:
    peak_count: int = TERRAIN_PEAK_COUNT
    base_height: float = TERRAIN_BASE_HEIGHT
    continent_strength: float = TERRAIN_CONTINENT_STRENGTH
    continent_edge: float = TERRAIN_CONTINENT_EDGE
    tilt: float = TERRAIN_TILT
    noise_amplitude: float = TERRAIN_NOISE_AMPLITUDE

    # Classification thresholds (ascending): water < sand < ground <= rock.
    water_level: float = TERRAIN_WATER_LEVEL
    sand_level: float = TERRAIN_SAND_LEVEL
    rock_level: float = TERRAIN_ROCK_LEVEL

    spawn_inner_radius: int = SPAWN_CLEAR_INNER_RADIUS
    spawn_outer_radius: int = SPAWN_CLEAR_OUTER_RADIUS

    border_margin: int = PLACEMENT_BORDER_MARGIN
    attempt_multiplier: int = PLACEMENT_ATTEMPT_MULTIPLIER

    def __post_init__(self):
        if not (self.water_level < self.sand_level < self.rock_level):
            raise ValueError(
                "terrain thresholds must ascend: "
                f"water={self.water_level} sand={self.sand_level} rock={self.rock_level}"
            )
        if self.peak_count < 0:
            raise ValueError(f"peak_count must be >= 0, got {self.peak_count}")
        if self.spawn_inner_radius > self.spawn_outer_radius:
            raise ValueError("spawn_inner_radius must not exceed spawn_outer_radius")
        if self.attempt_multiplier < 1:
            raise ValueError("attempt_multiplier must be >= 1")


@dataclass(frozen=True, slots=True)
class SurvivalTunables:
    # Player
    player_speed: float = PLAYER_SPEED
    start_inventory: Mapping[str, int] = field(default_factory=lambda: dict(PLAYER_START_INVENTORY))
    move_energy_drain: float = MOVE_ENERGY_DRAIN
    blocked_energy_drain: float = BLOCKED_ENERGY_DRAIN
    rest_energy_regen: float = REST_ENERGY_REGEN
    eat_health_restore: float = EAT_HEALTH_RESTORE
    eat_warmth_restore: float = EAT_WARMTH_RESTORE
    pickup_radius: float = PICKUP_RADIUS

    # Campfires
    campfire_cost: int = CAMPFIRE_COST
    campfire_burn_seconds: float = CAMPFIRE_BURN_SECONDS

    # Day cycle
    day_length: float = DAY_LENGTH
    night_start: float = NIGHT_START
    night_end: float = NIGHT_END
    morning_time: float = MORNING_TIME

    # Heat model
    ship_radius: float = SHIP_RADIUS
    fire_radius: float = FIRE_RADIUS
    ship_warmth_gain: float = SHIP_WARMTH_GAIN
    ship_energy_gain: float = SHIP_ENERGY_GAIN
    fire_warmth_gain: float = FIRE_WARMTH_GAIN
    day_chill: float = DAY_CHILL
    night_chill: float = NIGHT_CHILL
    shelter_chill_factor: float = SHELTER_CHILL_FACTOR
    cold_warmth_threshold: float = COLD_WARMTH_THRESHOLD
    cold_damage: float = COLD_DAMAGE
    cold_damage_at_ship: float = COLD_DAMAGE_AT_SHIP

    # Rescue
    rescue_cost: Mapping[str, int] = field(default_factory=lambda: dict(RESCUE_COST))
    rescue_duration: float = RESCUE_DURATION

    # Frame-time clamp
    max_dt: float = MAX_FRAME_DT

    def __post_init__(self):
        if self.day_length <= 0:
            raise ValueError(f"day_length must be > 0, got {self.day_length}")
        if not (0.0 <= self.night_start <= self.night_end <= self.day_length):
            raise ValueError("night window must lie inside the day")
        if not (0.0 <= self.morning_time < self.day_length):
            raise ValueError("morning_time must lie inside the day")
        if self.max_dt <= 0:
            raise ValueError(f"max_dt must be > 0, got {self.max_dt}")
        if self.campfire_cost < 0 or any(int(v) < 0 for v in self.rescue_cost.values()):
            raise ValueError("costs must be non-negative")
