"""
Resource placement: ring scatter with a guaranteed-count fallback.

Callers (the rescue beacon in particular) rely on every requested node existing, so
`place_resources` never returns fewer nodes than a rule asks for. It is a pure function
of (tiles, size, rng state, rules) and returns a fresh result.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional, Sequence

from config import RESCUE_COST
from castaway.entities.inventory import normalize_cost
from castaway.sim.determinism import Mulberry32
from castaway.sim.tunables import TerrainTunables
from castaway.world import BLOCKING_TILES, ResourceKind, ResourceNode, TileType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlacementRule:
    kind: ResourceKind
    count: int
    min_dist: float
    max_dist: float
    highlight: bool = False


@dataclass(frozen=True, slots=True)
class KindStats:
    kind: ResourceKind
    requested: int
    ring_placed: int
    fallback_placed: int
    attempts: int


@dataclass(frozen=True, slots=True)
class PlacementResult:
    nodes: tuple[ResourceNode, ...]
    stats: tuple[KindStats, ...]

    def count(self, kind: ResourceKind) -> int:
        return sum(1 for n in self.nodes if n.kind is kind)

    @property
    def used_fallback(self) -> bool:
        return any(s.fallback_placed for s in self.stats)


def default_rules(size: int, minimum: Optional[Mapping] = None) -> tuple[PlacementRule, ...]:
    """
    Per-kind counts and rings scaled to the map size (tiles).

    Counts never drop below `minimum` (the rescue cost by default) so the beacon stays
    affordable on small islands.
    """
    minimums = normalize_cost(RESCUE_COST if minimum is None else minimum)
    rules = (
        PlacementRule(ResourceKind.FOOD, math.floor(size * 0.9), 12, size / 2.2),
        PlacementRule(ResourceKind.WOOD, math.floor(size * 1.2), 10, size / 1.8),
        PlacementRule(ResourceKind.OIL, math.floor(size * 0.35), size / 3, size / 1.4, highlight=True),
        PlacementRule(ResourceKind.SCRAP, math.floor(size * 0.2), size / 4, size / 2.2, highlight=True),
    )
    return tuple(replace(r, count=max(r.count, minimums.get(r.kind, 0))) for r in rules)


def _walkable(tiles: bytes, size: int, x: int, y: int) -> bool:
    return TileType(tiles[y * size + x]) not in BLOCKING_TILES


def _inside_margin(size: int, x: int, y: int, margin: int) -> bool:
    return margin <= x < size - margin and margin <= y < size - margin


def _fallback_cells(
    tiles: bytes,
    size: int,
    rule: PlacementRule,
    needed: int,
    occupied: set[tuple[int, int]],
    margin: int,
) -> list[tuple[int, int]]:
    """
    Deterministic row-major scan for `needed` cells, loosening constraints pass by pass:
      1. walkable, inside the border margin, at least min_dist from center, unused
      2. any walkable unused cell
      3. walkable cells reused in order (center cell if nothing else exists)
    """
    cx = cy = size // 2
    cells: list[tuple[int, int]] = []
    taken = set(occupied)

    def scan(accept) -> None:
        for y in range(size):
            for x in range(size):
                if len(cells) >= needed:
                    return
                if (x, y) in taken or not _walkable(tiles, size, x, y):
                    continue
                if accept(x, y):
                    cells.append((x, y))
                    taken.add((x, y))

    scan(lambda x, y: _inside_margin(size, x, y, margin) and math.hypot(x - cx, y - cy) >= rule.min_dist)
    if len(cells) < needed:
        scan(lambda x, y: True)
    if len(cells) < needed:
        pool = [(x, y) for y in range(size) for x in range(size) if _walkable(tiles, size, x, y)]
        if not pool:
            pool = [(cx, cy)]
        i = 0
        while len(cells) < needed:
            cells.append(pool[i % len(pool)])
            i += 1
    return cells


def place_resources(
    tiles: bytes,
    size: int,
    rng: Mulberry32,
    rules: Optional[Iterable[PlacementRule]] = None,
    tunables: Optional[TerrainTunables] = None,
) -> PlacementResult:
    """Scatter nodes for each rule in order, continuing the terrain RNG stream."""
    tunables = tunables or TerrainTunables()
    rules = tuple(rules) if rules is not None else default_rules(size)
    margin = tunables.border_margin
    cx = cy = size // 2

    nodes: list[ResourceNode] = []
    stats: list[KindStats] = []
    occupied: set[tuple[int, int]] = set()

    for rule in rules:
        target = max(0, int(rule.count))
        placed = 0
        attempts = 0
        max_attempts = target * tunables.attempt_multiplier
        while placed < target and attempts < max_attempts:
            attempts += 1
            angle = rng.random() * math.pi * 2
            dist = rule.min_dist + rng.random() * (rule.max_dist - rule.min_dist)
            x = math.floor(cx + math.cos(angle) * dist)
            y = math.floor(cy + math.sin(angle) * dist)
            if not _inside_margin(size, x, y, margin):
                continue
            if not _walkable(tiles, size, x, y):
                continue
            nodes.append(ResourceNode(x, y, rule.kind, highlight=rule.highlight))
            occupied.add((x, y))
            placed += 1

        fallback = 0
        if placed < target:
            for x, y in _fallback_cells(tiles, size, rule, target - placed, occupied, margin):
                nodes.append(ResourceNode(x, y, rule.kind, highlight=rule.highlight))
                occupied.add((x, y))
                fallback += 1
            logger.info(
                "placement fallback for %s: %d/%d nodes from ring after %d attempts, %d from scan",
                rule.kind.value, placed, target, attempts, fallback,
            )

        stats.append(KindStats(rule.kind, target, placed, fallback, attempts))

    return PlacementResult(tuple(nodes), tuple(stats))


def counts_by_kind(nodes: Sequence[ResourceNode]) -> dict[ResourceKind, int]:
    counts = {k: 0 for k in ResourceKind}
    for n in nodes:
        counts[n.kind] += 1
    return counts
