from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Tuple

import pygame

from config import TILE_SIZE, TERRAIN_BRIGHTNESS, COLOR_GROUND, COLOR_WATER, COLOR_ROCK, COLOR_SAND
from castaway.world import TileType

Color = Tuple[int, int, int]


def brighten(color: Color, gamma: float = TERRAIN_BRIGHTNESS) -> Color:
    return tuple(min(255, int(c * gamma)) for c in color)  # type: ignore[return-value]


def shade(color: Color, amount: int) -> Color:
    return tuple(max(0, min(255, c + amount)) for c in color)  # type: ignore[return-value]


@dataclass(frozen=True)
class TilePalette:
    ground: Color = brighten(COLOR_GROUND)
    water: Color = brighten(COLOR_WATER)
    rock: Color = brighten(COLOR_ROCK)
    sand: Color = brighten(COLOR_SAND)


class TileSpriteLibrary:
    """
    Procedural pixel tiles with deterministic per-cell variation.

    No PNG assets: each (tile, variant, size) surface is generated once and cached.
    """

    _cache: Dict[Tuple[int, int, int], pygame.Surface] = {}  # (tile_type, variant, size) -> Surface

    VARIANTS = {
        TileType.GROUND: 5,
        TileType.WATER: 3,
        TileType.ROCK: 4,
        TileType.SAND: 4,
    }

    @staticmethod
    def _hash32(tile_type: int, x: int, y: int) -> int:
        # Deterministic, fast integer hash for stable tile variations.
        h = (x * 73856093) ^ (y * 19349663) ^ (tile_type * 83492791)
        return h & 0xFFFFFFFF

    @classmethod
    def _variant(cls, tile_type: int, x: int, y: int, variants: int) -> int:
        if variants <= 1:
            return 0
        return int(cls._hash32(tile_type, x, y) % int(variants))

    @classmethod
    def get(cls, tile_type: int, x: int, y: int, *, size: int = TILE_SIZE) -> pygame.Surface | None:
        s = int(size)
        if s <= 0:
            return None
        v = cls._variant(tile_type, x, y, cls.VARIANTS.get(TileType(tile_type), 1))
        key = (int(tile_type), int(v), s)
        surf = cls._cache.get(key)
        if surf is None:
            surf = cls._generate(tile_type=int(tile_type), variant=int(v), size=s)
            cls._cache[key] = surf
        return surf

    @classmethod
    def _generate(cls, *, tile_type: int, variant: int, size: int) -> pygame.Surface:
        pal = TilePalette()
        s = int(size)
        rnd = random.Random((tile_type << 16) + (variant << 8) + s)
        surf = pygame.Surface((s, s), pygame.SRCALPHA)

        def speckle(base: Color, density: float, spread: int):
            surf.fill(base)
            count = int(s * s * max(0.0, min(1.0, float(density))))
            for _ in range(count):
                px = rnd.randrange(0, s)
                py = rnd.randrange(0, s)
                col = shade(base, spread if rnd.random() < 0.5 else -spread)
                surf.set_at((px, py), (*col, 255))

        if tile_type == TileType.GROUND:
            speckle(pal.ground, density=0.03 + 0.004 * variant, spread=18)
            # A few grass tufts on some variants.
            for _ in range(variant % 3):
                px = rnd.randrange(2, s - 2)
                py = rnd.randrange(3, s - 1)
                tuft = shade(pal.ground, 30)
                surf.set_at((px, py), (*tuft, 255))
                surf.set_at((px, py - 1), (*tuft, 255))
                surf.set_at((px + 1, py - 2), (*tuft, 255))
            return surf

        if tile_type == TileType.WATER:
            speckle(pal.water, density=0.04 + 0.02 * variant, spread=14)
            light = shade(pal.water, 45)
            for _ in range(2 + variant):
                y = rnd.randrange(3, s - 3)
                x0 = rnd.randrange(0, max(1, s - 8))
                for dx in range(6):
                    surf.set_at((x0 + dx, y), (*light, 200))
            return surf

        if tile_type == TileType.ROCK:
            speckle(pal.rock, density=0.06, spread=20)
            # Boulder outline
            r = max(4, s // 3 - variant)
            cx = s // 2 + (variant % 2) * 2 - 1
            cy = s // 2 + (1 if variant > 1 else -1)
            pygame.draw.circle(surf, shade(pal.rock, -25), (cx, cy), r)
            pygame.draw.circle(surf, shade(pal.rock, 15), (cx - 2, cy - 2), max(2, r - 4))
            return surf

        if tile_type == TileType.SAND:
            speckle(pal.sand, density=0.05 + 0.01 * variant, spread=16)
            for _ in range(variant):
                px = rnd.randrange(1, s - 1)
                py = rnd.randrange(1, s - 1)
                surf.set_at((px, py), (*shade(pal.sand, -40), 255))
            return surf

        # Unknown tile type: neutral checker (helps debugging).
        surf.fill((80, 80, 80, 255))
        for yy in range(0, s, 2):
            for xx in range(0, s, 2):
                surf.set_at((xx, yy), (95, 95, 95, 255))
        return surf
