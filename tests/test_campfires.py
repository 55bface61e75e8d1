from __future__ import annotations

import pytest

from castaway.entities.campfire import Campfire
from castaway.entities.player import Player
from castaway.systems.campfires import CampfireSystem


def test_build_requires_full_cost():
    system = CampfireSystem(cost=3, burn_seconds=60)
    p = Player(100, 200, inventory={"wood": 2})
    assert system.build(p) is None
    assert p.inventory["wood"] == 2
    assert system.fires == []

    p.inventory.add("wood", 1)
    fire = system.build(p)
    assert fire is not None
    assert (fire.x, fire.y) == (100, 200)
    assert fire.timer == 60
    assert fire.active
    assert p.inventory["wood"] == 0


def test_fire_burns_out_and_stays_listed():
    system = CampfireSystem(cost=0, burn_seconds=1.0)
    system.build(Player(0, 0))
    system.update(0.6)
    assert system.active_fires()
    system.update(0.6)
    assert system.active_fires() == []
    assert len(system.fires) == 1
    assert system.fires[0].timer == 0.0


def test_any_active_within_uses_strict_radius():
    system = CampfireSystem(cost=0, burn_seconds=10)
    system.build(Player(0, 0))
    assert system.any_active_within(89.9, 0, 90)
    assert not system.any_active_within(90, 0, 90)


def test_spent_fire_gives_no_heat():
    system = CampfireSystem(cost=0, burn_seconds=1)
    system.build(Player(0, 0))
    system.update(5)
    assert not system.any_active_within(0, 0, 90)


def test_campfire_timer_never_negative():
    fire = Campfire(0, 0, burn_seconds=0.5)
    fire.update(2.0)
    assert fire.timer == pytest.approx(0.0)
    assert not fire.active


def test_active_fires_drive_proximity():
    system = CampfireSystem(cost=0, burn_seconds=1)
    system.build(Player(0, 0))
    system.build(Player(500, 0))
    system.fires[0].update(5)
    assert system.active_fires() == [system.fires[1]]
    assert not system.any_active_within(0, 0, 90)
    assert system.any_active_within(500, 0, 90)
