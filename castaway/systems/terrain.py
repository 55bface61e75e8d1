"""
Terrain synthesis: seed stream -> height field -> tile grid.

RNG draw order is part of the world format (changing it changes every seed's island):
  1. per peak: x, y, radius, strength
  2. tilt_x, tilt_y
  3. noise shift x, noise shift y
Per-cell noise comes from a coordinate hash, so grid size never shifts the stream.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from castaway.sim.determinism import Mulberry32, hash_noise
from castaway.sim.tunables import TerrainTunables
from castaway.world import TileType

logger = logging.getLogger(__name__)

NOISE_SHIFT_RANGE = 10000


@dataclass(frozen=True, slots=True)
class Peak:
    x: int
    y: int
    radius: float
    strength: float

    def contribution(self, x: int, y: int) -> float:
        d = math.hypot(x - self.x, y - self.y)
        return max(0.0, self.strength * (1.0 - d / self.radius))


@dataclass(frozen=True, slots=True)
class TerrainParams:
    """Everything drawn from the RNG for one island."""

    peaks: tuple[Peak, ...]
    tilt_x: float
    tilt_y: float
    shift_x: int
    shift_y: int


def draw_terrain_params(rng: Mulberry32, size: int, tunables: TerrainTunables) -> TerrainParams:
    peaks = []
    for _ in range(tunables.peak_count):
        px = math.floor(rng.random() * size)
        py = math.floor(rng.random() * size)
        radius = size * (0.08 + rng.random() * 0.16)
        strength = 0.4 + rng.random() * 0.6
        peaks.append(Peak(px, py, radius, strength))

    tilt_x = rng.uniform(-tunables.tilt, tunables.tilt)
    tilt_y = rng.uniform(-tunables.tilt, tunables.tilt)
    shift_x = math.floor(rng.random() * NOISE_SHIFT_RANGE)
    shift_y = math.floor(rng.random() * NOISE_SHIFT_RANGE)
    return TerrainParams(tuple(peaks), tilt_x, tilt_y, shift_x, shift_y)


def height_at(x: int, y: int, size: int, params: TerrainParams, tunables: TerrainTunables) -> float:
    half = size / 2
    dist = math.hypot(x - half, y - half)
    d_norm = dist / half

    h = tunables.base_height
    # Broad continent: positive inside continent_edge, sinks toward the map border.
    h += tunables.continent_strength * (1.0 - d_norm / tunables.continent_edge)
    h += params.tilt_x * (x / size - 0.5) + params.tilt_y * (y / size - 0.5)
    h += (hash_noise(x + params.shift_x, y + params.shift_y) - 0.5) * tunables.noise_amplitude
    for peak in params.peaks:
        h += peak.contribution(x, y)
    return h


def classify_height(h: float, tunables: TerrainTunables) -> TileType:
    if h < tunables.water_level:
        return TileType.WATER
    if h < tunables.sand_level:
        return TileType.SAND
    if h <= tunables.rock_level:
        return TileType.GROUND
    return TileType.ROCK


def clear_spawn(tiles: bytearray, size: int, tunables: TerrainTunables) -> None:
    """Force ground (inner disk) and sand (outer ring) around the center cell."""
    cx = cy = size // 2
    outer = tunables.spawn_outer_radius
    for y in range(max(0, cy - outer), min(size, cy + outer + 1)):
        for x in range(max(0, cx - outer), min(size, cx + outer + 1)):
            d = math.hypot(x - cx, y - cy)
            if d <= tunables.spawn_inner_radius:
                tiles[y * size + x] = TileType.GROUND
            elif d <= outer:
                tiles[y * size + x] = TileType.SAND


def synthesize_terrain(rng: Mulberry32, size: int, tunables: Optional[TerrainTunables] = None) -> bytes:
    """Build the row-major tile grid for a size x size island."""
    if size < 1:
        raise ValueError(f"world size must be >= 1, got {size}")
    tunables = tunables or TerrainTunables()
    params = draw_terrain_params(rng, size, tunables)

    tiles = bytearray(size * size)
    for y in range(size):
        row = y * size
        for x in range(size):
            tiles[row + x] = classify_height(height_at(x, y, size, params, tunables), tunables)

    clear_spawn(tiles, size, tunables)
    logger.debug(
        "terrain: size=%d peaks=%d tilt=(%.3f, %.3f) shift=(%d, %d)",
        size, len(params.peaks), params.tilt_x, params.tilt_y, params.shift_x, params.shift_y,
    )
    return bytes(tiles)
