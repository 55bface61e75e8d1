from __future__ import annotations

from castaway.entities.player import Player
from castaway.sim.contracts import RescuePhase
from castaway.systems.rescue import RescueSystem

COST = {"food": 3, "wood": 6, "oil": 3, "scrap": 2}


def stocked_player(**overrides) -> Player:
    inv = dict(COST)
    inv.update(overrides)
    return Player(0, 0, inventory=inv)


def test_beacon_needs_the_ship():
    rescue = RescueSystem(COST, duration=20)
    p = stocked_player()
    assert not rescue.can_arm(p, at_ship=False)
    assert not rescue.arm(p, at_ship=False)
    assert rescue.phase is RescuePhase.EXPLORING
    assert p.inventory.as_dict() == COST


def test_beacon_needs_every_material():
    rescue = RescueSystem(COST, duration=20)
    p = stocked_player(scrap=1)
    assert not rescue.arm(p, at_ship=True)
    assert p.inventory.as_dict() == {**COST, "scrap": 1}
    assert rescue.phase is RescuePhase.EXPLORING
    assert not rescue.beacon_armed


def test_arming_spends_the_full_cost_once():
    rescue = RescueSystem(COST, duration=20)
    p = stocked_player(wood=10)
    assert rescue.arm(p, at_ship=True)
    assert p.inventory.as_dict() == {"food": 0, "wood": 4, "oil": 0, "scrap": 0}
    assert rescue.phase is RescuePhase.BEACON_ARMED
    assert rescue.beacon_armed
    assert rescue.time_remaining == 20

    # Already armed: no second charge.
    assert not rescue.arm(p, at_ship=True)
    assert p.inventory["wood"] == 4


def test_rescue_completes_on_the_crossing_update_only():
    rescue = RescueSystem(COST, duration=20)
    rescue.arm(stocked_player(), at_ship=True)

    completions = 0
    for _ in range(1000):
        before = rescue.rescue_timer
        if rescue.update(0.05):
            completions += 1
            assert before <= 20 < rescue.rescue_timer
            break
    assert completions == 1
    assert rescue.phase is RescuePhase.RESCUED
    assert rescue.time_remaining is None
    assert rescue.beacon_armed

    assert not rescue.update(0.05)
    assert rescue.phase is RescuePhase.RESCUED


def test_timer_does_not_run_before_arming():
    rescue = RescueSystem(COST, duration=20)
    assert not rescue.update(100)
    assert rescue.rescue_timer == 0
    assert rescue.time_remaining is None


def test_death_is_terminal_and_reported_once():
    rescue = RescueSystem(COST, duration=20)
    rescue.arm(stocked_player(), at_ship=True)
    assert rescue.mark_dead()
    assert rescue.phase is RescuePhase.DEAD
    assert not rescue.mark_dead()
    assert not rescue.update(30)
    assert rescue.phase is RescuePhase.DEAD


def test_rescued_cannot_die():
    rescue = RescueSystem(COST, duration=0.01)
    rescue.arm(stocked_player(), at_ship=True)
    assert rescue.update(0.05)
    assert not rescue.mark_dead()
    assert rescue.phase is RescuePhase.RESCUED
