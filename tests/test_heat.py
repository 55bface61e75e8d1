from __future__ import annotations

import pytest

from castaway.entities.player import Player
from castaway.sim.tunables import SurvivalTunables
from castaway.systems.campfires import CampfireSystem
from castaway.systems.heat import HeatModel

SHIP = (1000.0, 1000.0)


@pytest.fixture()
def model():
    return HeatModel(SurvivalTunables())


@pytest.fixture()
def fires():
    return CampfireSystem(cost=0, burn_seconds=60)


def test_ship_restores_warmth_and_energy(model, fires):
    p = Player(*SHIP)
    p.warmth = 50
    p.energy = 50
    reading = model.apply(p, 1.0, ship_pos=SHIP, campfires=fires, is_night=False)
    assert reading.near_ship and reading.sheltered
    # +25 gain, then sheltered day chill of 4 * 0.2
    assert p.warmth == pytest.approx(74.2)
    assert p.energy == pytest.approx(75)


def test_ship_takes_precedence_over_fire(model, fires):
    p = Player(*SHIP)
    fires.build(p)
    p.warmth = 50
    reading = model.apply(p, 1.0, ship_pos=SHIP, campfires=fires, is_night=False)
    assert reading.near_ship and reading.near_fire
    assert p.warmth == pytest.approx(74.2)


def test_fire_warms_away_from_ship(model, fires):
    p = Player(0, 0)
    fires.build(p)
    p.warmth = 50
    reading = model.apply(p, 1.0, ship_pos=SHIP, campfires=fires, is_night=True)
    assert reading.near_fire and not reading.near_ship
    # +20 gain, then sheltered night chill of 8 * 0.2
    assert p.warmth == pytest.approx(68.4)


def test_exposed_chill_is_worse_at_night(model, fires):
    day = Player(0, 0)
    night = Player(0, 0)
    day.warmth = night.warmth = 50
    model.apply(day, 1.0, ship_pos=SHIP, campfires=fires, is_night=False)
    model.apply(night, 1.0, ship_pos=SHIP, campfires=fires, is_night=True)
    assert day.warmth == pytest.approx(46)
    assert night.warmth == pytest.approx(42)


def test_cold_damages_health(model, fires):
    p = Player(0, 0)
    p.warmth = 20
    reading = model.apply(p, 1.0, ship_pos=SHIP, campfires=fires, is_night=False)
    assert reading.freezing
    assert p.health == pytest.approx(96)


def test_cold_damage_is_reduced_at_ship(model, fires):
    p = Player(*SHIP)
    p.warmth = 0
    reading = model.apply(p, 0.05, ship_pos=SHIP, campfires=fires, is_night=True)
    assert reading.freezing
    assert p.health == pytest.approx(100 - 1 * 0.05)


def test_warm_player_takes_no_damage(model, fires):
    p = Player(0, 0)
    reading = model.apply(p, 1.0, ship_pos=SHIP, campfires=fires, is_night=True)
    assert not reading.freezing
    assert p.health == 100


def test_chill_rate_table(model):
    assert model.chill_rate(is_night=False, sheltered=False) == 4
    assert model.chill_rate(is_night=True, sheltered=False) == 8
    assert model.chill_rate(is_night=True, sheltered=True) == pytest.approx(1.6)


def test_ship_radius_is_strict(model):
    assert model.is_near_ship(SHIP[0] + 79.9, SHIP[1], SHIP)
    assert not model.is_near_ship(SHIP[0] + 80, SHIP[1], SHIP)
