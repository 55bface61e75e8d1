from __future__ import annotations

import math

import pytest

from castaway.entities.inventory import Inventory
from castaway.entities.player import Player
from castaway.world import ResourceKind, ResourceNode


def never_blocked(x, y):
    return False


def always_blocked(x, y):
    return True


def test_move_uses_fatigue_scaled_speed_and_drains_energy():
    p = Player(0, 0, speed=520)
    assert p.move(1, 0, 0.05, never_blocked)
    # Full energy: 520 * (0.6 + 100 / 200) * 0.05
    assert p.x == pytest.approx(28.6)
    assert p.y == 0
    assert p.energy == pytest.approx(100 - 6 * 0.05)
    assert p.facing == (1.0, 0.0)


def test_diagonal_movement_is_normalized():
    p = Player(0, 0, speed=520)
    p.move(1, 1, 0.05, never_blocked)
    assert math.hypot(p.x, p.y) == pytest.approx(28.6)


def test_tired_player_is_slower_but_not_stopped():
    p = Player(0, 0, speed=100)
    p.energy = 0
    assert p.effective_speed == pytest.approx(60)
    p.move(0, 1, 1.0, never_blocked)
    assert p.y == pytest.approx(60)
    assert p.energy == 0


def test_blocked_move_keeps_position_and_costs_less_energy():
    p = Player(10, 20)
    assert not p.move(-1, 0, 0.05, always_blocked)
    assert (p.x, p.y) == (10, 20)
    assert p.energy == pytest.approx(100 - 2 * 0.05)
    assert p.facing == (-1.0, 0.0)


def test_zero_intent_is_rest():
    p = Player(0, 0)
    p.energy = 50
    assert not p.move(0, 0, 1.0, never_blocked)
    assert p.energy == pytest.approx(65)
    assert p.direction == (0.0, 0.0)


def test_rest_is_capped():
    p = Player(0, 0)
    p.energy = 95
    p.rest(10)
    assert p.energy == 100


def test_vitals_are_clamped_on_write():
    p = Player(0, 0)
    p.health = 150
    p.warmth = -20
    p.energy = float("1e9")
    assert (p.health, p.warmth, p.energy) == (100, 0, 100)


def test_eat_restores_health_and_warmth():
    p = Player(0, 0, inventory={"food": 1})
    p.health = 50
    p.warmth = 50
    assert p.eat()
    assert p.health == 70
    assert p.warmth == 60
    assert p.inventory["food"] == 0

    assert not p.eat()
    assert p.health == 70
    assert p.warmth == 60
    assert p.inventory["food"] == 0


def test_eat_clamps_at_max():
    p = Player(0, 0, inventory={"food": 2})
    p.health = 95
    assert p.eat()
    assert p.health == 100
    assert p.warmth == 100


def test_collects_every_node_in_radius_in_one_call():
    p = Player(16, 16, inventory={})
    nodes = [
        ResourceNode(0, 0, ResourceKind.FOOD),
        ResourceNode(0, 0, ResourceKind.WOOD),
        ResourceNode(1, 0, ResourceKind.OIL),  # 32px away
    ]
    picked = p.collect_nearby(nodes, radius=22, tile_size=32)
    assert [n.kind for n in picked] == [ResourceKind.FOOD, ResourceKind.WOOD]
    assert p.inventory.as_dict() == {"food": 1, "wood": 1, "oil": 0, "scrap": 0}
    assert not nodes[2].collected

    # Collected nodes never pay out twice.
    assert p.collect_nearby(nodes, radius=22, tile_size=32) == []
    assert p.inventory["food"] == 1


def test_inventory_spend_is_all_or_nothing():
    inv = Inventory({"wood": 5, "oil": 1})
    assert not inv.spend({"wood": 3, "oil": 2})
    assert inv.as_dict() == {"food": 0, "wood": 5, "oil": 1, "scrap": 0}
    assert inv.spend({ResourceKind.WOOD: 3, "oil": 1})
    assert inv.as_dict() == {"food": 0, "wood": 2, "oil": 0, "scrap": 0}


def test_inventory_missing_lists_only_short_kinds():
    inv = Inventory({"food": 3, "wood": 1})
    assert inv.missing({"food": 3, "wood": 6, "scrap": 2}) == {"wood": 5, "scrap": 2}


def test_inventory_rejects_negative_add():
    inv = Inventory()
    with pytest.raises(ValueError):
        inv.add("food", -1)
    inv.set_count("oil", -4)
    assert inv.count("oil") == 0
