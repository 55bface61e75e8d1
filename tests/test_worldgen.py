from __future__ import annotations

import logging
import math
from dataclasses import replace

import pytest

from castaway.sim.determinism import Mulberry32
from castaway.sim.tunables import TerrainTunables
from castaway.systems.resources import PlacementRule, counts_by_kind, default_rules, place_resources
from castaway.systems.terrain import clear_spawn, synthesize_terrain
from castaway.world import BLOCKING_TILES, ResourceKind, TileType, World
from castaway.worldgen import generate_world

SIZE = 40


def _resource_key(world: World):
    return [(n.grid_x, n.grid_y, n.kind, n.highlight) for n in world.resources]


def test_same_seed_same_island():
    a = generate_world(123, SIZE)
    b = generate_world(123, SIZE)
    assert a.tiles == b.tiles
    assert _resource_key(a) == _resource_key(b)


def test_different_seeds_give_different_islands():
    assert generate_world(1, SIZE).tiles != generate_world(2, SIZE).tiles


@pytest.mark.parametrize("size", [20, 21, 40, 151])
@pytest.mark.parametrize("seed", [0, 7, 99999])
def test_spawn_area_is_always_clear(seed, size):
    tunables = TerrainTunables()
    world = generate_world(seed, size)
    c = size // 2
    for y in range(size):
        for x in range(size):
            d = math.hypot(x - c, y - c)
            if d <= tunables.spawn_inner_radius:
                assert world.get_tile(x, y) is TileType.GROUND
            elif d <= tunables.spawn_outer_radius:
                assert world.get_tile(x, y) is TileType.SAND
    assert not world.is_blocked(*world.center)


@pytest.mark.parametrize("seed", [3, 11, 2024])
def test_resource_counts_are_exact(seed):
    world = generate_world(seed, SIZE)
    counts = counts_by_kind(world.resources)
    for rule in default_rules(SIZE):
        assert counts[rule.kind] == rule.count


@pytest.mark.parametrize("seed", [3, 11, 2024])
def test_resources_sit_on_walkable_tiles(seed):
    world = generate_world(seed, SIZE)
    for node in world.resources:
        assert world.is_walkable(node.grid_x, node.grid_y)
        assert not node.collected


def test_oil_and_scrap_are_highlighted():
    world = generate_world(5, SIZE)
    for node in world.resources:
        assert node.highlight == (node.kind in (ResourceKind.OIL, ResourceKind.SCRAP))


def test_default_rules_scale_with_size():
    rules = {r.kind: r for r in default_rules(100)}
    assert rules[ResourceKind.FOOD].count == 90
    assert rules[ResourceKind.WOOD].count == 120
    assert rules[ResourceKind.OIL].count == 35
    assert rules[ResourceKind.SCRAP].count == 20


def test_placement_on_all_water_still_meets_counts():
    size = 10
    tiles = bytes([TileType.WATER]) * (size * size)
    rules = [PlacementRule(ResourceKind.FOOD, 5, 2, 4), PlacementRule(ResourceKind.OIL, 3, 2, 4)]
    result = place_resources(tiles, size, Mulberry32(1), rules)
    assert result.count(ResourceKind.FOOD) == 5
    assert result.count(ResourceKind.OIL) == 3
    assert result.used_fallback
    # Nothing walkable anywhere: everything lands on the center cell.
    assert {(n.grid_x, n.grid_y) for n in result.nodes} == {(size // 2, size // 2)}


def test_placement_on_tiny_walkable_patch_uses_walkable_cells():
    size = 30
    tunables = TerrainTunables()
    tiles = bytearray([TileType.WATER]) * (size * size)
    clear_spawn(tiles, size, tunables)
    tiles = bytes(tiles)

    result = place_resources(tiles, size, Mulberry32(9), default_rules(size))
    for rule in default_rules(size):
        assert result.count(rule.kind) == rule.count
    for node in result.nodes:
        assert TileType(tiles[node.grid_y * size + node.grid_x]) not in BLOCKING_TILES


def test_fallback_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="castaway.systems.resources")
    size = 10
    tiles = bytes([TileType.WATER]) * (size * size)
    place_resources(tiles, size, Mulberry32(1), [PlacementRule(ResourceKind.WOOD, 2, 1, 3)])
    assert any("placement fallback" in r.getMessage() for r in caplog.records)


def test_placement_is_a_pure_function_of_its_inputs():
    size = 30
    tiles = synthesize_terrain(Mulberry32(4), size)
    a = place_resources(tiles, size, Mulberry32(77))
    b = place_resources(tiles, size, Mulberry32(77))
    assert [(n.grid_x, n.grid_y, n.kind) for n in a.nodes] == [(n.grid_x, n.grid_y, n.kind) for n in b.nodes]
    assert a.nodes[0] is not b.nodes[0]


def test_stats_account_for_every_node():
    result = place_resources(synthesize_terrain(Mulberry32(8), SIZE), SIZE, Mulberry32(8))
    assert sum(s.ring_placed + s.fallback_placed for s in result.stats) == len(result.nodes)
    for s in result.stats:
        assert s.attempts <= s.requested * TerrainTunables().attempt_multiplier


def test_zero_size_is_rejected():
    with pytest.raises(ValueError):
        synthesize_terrain(Mulberry32(1), 0)
    with pytest.raises(ValueError):
        generate_world(1, -4)


def test_single_tile_island():
    world = generate_world(5, 1)
    assert world.get_tile(0, 0) is TileType.GROUND
    counts = counts_by_kind(world.resources)
    assert counts == {ResourceKind.FOOD: 3, ResourceKind.WOOD: 6, ResourceKind.OIL: 3, ResourceKind.SCRAP: 2}
    assert all((n.grid_x, n.grid_y) == (0, 0) for n in world.resources)


def test_thresholds_must_ascend():
    with pytest.raises(ValueError):
        TerrainTunables(water_level=0.5, sand_level=0.45)
    with pytest.raises(ValueError):
        replace(TerrainTunables(), rock_level=0.4)


def test_world_queries():
    world = generate_world(21, SIZE)
    assert world.width == world.height == SIZE
    assert sum(world.tile_counts().values()) == SIZE * SIZE

    assert world.get_tile(-1, 0) is TileType.WATER
    assert world.get_tile(SIZE, 0) is TileType.WATER
    assert world.is_blocked(-1.0, 10.0)
    assert world.is_blocked(world.pixel_size + 1.0, 10.0)
    assert world.world_to_grid(-0.5, 33.0) == (-1, 1)
    assert world.grid_to_world(2, 3) == (2 * world.tile_size, 3 * world.tile_size)

    food = list(world.resources_of(ResourceKind.FOOD))
    before = world.remaining(ResourceKind.FOOD)
    assert food[0].collect()
    assert not food[0].collect()
    assert world.remaining(ResourceKind.FOOD) == before - 1


def test_world_rejects_wrong_tile_count():
    with pytest.raises(ValueError):
        World(seed=1, size=4, tiles=bytes(15), resources=[])


@pytest.mark.parametrize("size", [1, 5, 8, 9])
def test_small_islands_hold_enough_for_the_beacon(size):
    cost = {ResourceKind.FOOD: 3, ResourceKind.WOOD: 6, ResourceKind.OIL: 3, ResourceKind.SCRAP: 2}
    rules = {r.kind: r for r in default_rules(size)}
    for kind, needed in cost.items():
        assert rules[kind].count >= needed

    counts = counts_by_kind(generate_world(5, size).resources)
    for kind, needed in cost.items():
        assert counts[kind] >= needed


def test_custom_minimum_raises_counts():
    rules = {r.kind: r for r in default_rules(10, {"scrap": 7})}
    assert rules[ResourceKind.SCRAP].count == 7
    # Kinds not named keep their size-scaled count.
    assert rules[ResourceKind.OIL].count == 3
