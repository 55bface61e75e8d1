"""
World and tile map model.

Generation lives in castaway.worldgen; this module only holds the generated data and
answers queries about it. Nothing here draws (see castaway.graphics.world_renderer).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator

from config import TILE_SIZE


class TileType(IntEnum):
    GROUND = 0
    WATER = 1
    ROCK = 2
    SAND = 3


# Tiles that block movement (and resource placement)
BLOCKING_TILES = frozenset({TileType.WATER, TileType.ROCK})


class ResourceKind(Enum):
    FOOD = "food"
    WOOD = "wood"
    OIL = "oil"
    SCRAP = "scrap"


@dataclass(slots=True)
class ResourceNode:
    """A collectible supply sitting on one grid cell."""

    grid_x: int
    grid_y: int
    kind: ResourceKind
    collected: bool = False
    highlight: bool = False

    def collect(self) -> bool:
        """Latch this node as collected. Returns False if it already was."""
        if self.collected:
            return False
        self.collected = True
        return True

    def world_center(self, tile_size: int = TILE_SIZE) -> tuple[float, float]:
        return (self.grid_x * tile_size + tile_size / 2, self.grid_y * tile_size + tile_size / 2)


class World:
    """Generated island: immutable tile grid plus the resource list."""

    def __init__(self, seed: int, size: int, tiles: bytes, resources: list[ResourceNode], tile_size: int = TILE_SIZE):
        if len(tiles) != size * size:
            raise ValueError(f"expected {size * size} tiles, got {len(tiles)}")
        self.seed = int(seed)
        self.size = int(size)
        self.tiles = bytes(tiles)
        self.resources = resources
        self.tile_size = int(tile_size)

    @property
    def width(self) -> int:
        return self.size

    @property
    def height(self) -> int:
        return self.size

    @property
    def pixel_size(self) -> int:
        return self.size * self.tile_size

    @property
    def center(self) -> tuple[float, float]:
        """World-space center of the map (the crashed ship)."""
        half = self.pixel_size / 2
        return half, half

    def get_tile(self, x: int, y: int) -> TileType:
        """Get tile type at grid position."""
        if 0 <= x < self.size and 0 <= y < self.size:
            return TileType(self.tiles[y * self.size + x])
        return TileType.WATER  # Out of bounds treated as water

    def is_walkable(self, x: int, y: int) -> bool:
        """Check if a grid cell can be walked on."""
        if not (0 <= x < self.size and 0 <= y < self.size):
            return False
        return self.get_tile(x, y) not in BLOCKING_TILES

    def is_blocked(self, world_x: float, world_y: float) -> bool:
        """Collision query for world coordinates: out of bounds, water and rock block."""
        gx, gy = self.world_to_grid(world_x, world_y)
        return not self.is_walkable(gx, gy)

    def world_to_grid(self, world_x: float, world_y: float) -> tuple[int, int]:
        """Convert world coordinates to grid coordinates."""
        return math.floor(world_x / self.tile_size), math.floor(world_y / self.tile_size)

    def grid_to_world(self, grid_x: int, grid_y: int) -> tuple[int, int]:
        """Convert grid coordinates to world coordinates (top-left of tile)."""
        return grid_x * self.tile_size, grid_y * self.tile_size

    def resources_of(self, kind: ResourceKind) -> Iterator[ResourceNode]:
        return (r for r in self.resources if r.kind is kind)

    def remaining(self, kind: ResourceKind) -> int:
        return sum(1 for r in self.resources_of(kind) if not r.collected)

    def tile_counts(self) -> dict[TileType, int]:
        counts = {t: 0 for t in TileType}
        for value in self.tiles:
            counts[TileType(value)] += 1
        return counts
