"""
One-shot island generation: seed -> terrain -> resources -> World.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from config import TILE_SIZE
from castaway.sim.determinism import Mulberry32
from castaway.sim.tunables import TerrainTunables
from castaway.systems.resources import PlacementRule, place_resources
from castaway.systems.terrain import synthesize_terrain
from castaway.world import World

logger = logging.getLogger(__name__)


def generate_world(
    seed: int,
    size: int,
    *,
    tunables: Optional[TerrainTunables] = None,
    rules: Optional[Iterable[PlacementRule]] = None,
    tile_size: int = TILE_SIZE,
) -> World:
    """
    Deterministic: the same (seed, size, tunables, rules) always yields identical tiles and
    an identical ordered resource list.
    """
    tunables = tunables or TerrainTunables()
    rng = Mulberry32(seed)
    tiles = synthesize_terrain(rng, size, tunables)
    placement = place_resources(tiles, size, rng, rules, tunables)
    world = World(seed, size, tiles, list(placement.nodes), tile_size=tile_size)

    logger.info(
        "Generated island seed=%d size=%d resources=%s",
        world.seed,
        world.size,
        ", ".join(f"{s.kind.value}={s.ring_placed + s.fallback_placed}" for s in placement.stats),
    )
    return world
