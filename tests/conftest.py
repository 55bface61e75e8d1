from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

from castaway.simulation import SurvivalSimulation
from castaway.world import ResourceKind, ResourceNode, TileType, World

PROJECT_ROOT = Path(__file__).resolve().parents[1]

FLAT_SIZE = 40


def load_tool(name: str):
    """Import a script from tools/ (the directory is not a package)."""
    path = PROJECT_ROOT / "tools" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"tools_{name}", path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def make_flat_world(size: int = FLAT_SIZE, resources: list[ResourceNode] | None = None) -> World:
    """All-ground island: no blocking tiles, so movement tests don't depend on terrain."""
    return World(seed=1, size=size, tiles=bytes([TileType.GROUND]) * (size * size), resources=resources or [])


@pytest.fixture()
def flat_world() -> World:
    return make_flat_world()


@pytest.fixture()
def sim(flat_world) -> SurvivalSimulation:
    return SurvivalSimulation(flat_world)


@pytest.fixture()
def wood_sim() -> SurvivalSimulation:
    """Flat island with one wood node on the cell south-east of the ship."""
    c = FLAT_SIZE // 2
    world = make_flat_world(resources=[ResourceNode(c, c, ResourceKind.WOOD)])
    return SurvivalSimulation(world)


def move_away_from_ship(sim: SurvivalSimulation) -> None:
    sim.player.x = 3 * sim.world.tile_size
    sim.player.y = 3 * sim.world.tile_size
