"""
Headless "observer" runner for the survival simulation.

Runs the simulation core with a scripted input-intent stream (no rendering, no pygame)
and prints a periodic status line:
- day / time of day / night flag
- vitals and inventory
- rescue phase and beacon countdown

Usage:
  python tools/observe_survival.py --seconds 120 --seed 3
  python tools/observe_survival.py --scenario forage --seconds 600 --seed 7 --qa
"""

import argparse
import math
import sys
from pathlib import Path

# Ensure imports work when running as `python tools/observe_survival.py`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from castaway.sim.contracts import REST, InputIntent, RescuePhase, SimEvent  # noqa: E402
from castaway.simulation import SurvivalSimulation  # noqa: E402

SCENARIOS = ("idle", "wander", "forage")

# Wander cycles through these headings, one per WANDER_LEG_SECONDS.
WANDER_HEADINGS = ((1, 0), (0, 1), (-1, 0), (0, -1), (1, 1), (-1, -1))
WANDER_LEG_SECONDS = 2.0


def _nearest_resource(sim: SurvivalSimulation):
    p = sim.player
    ts = sim.world.tile_size
    best = None
    best_d = math.inf
    for node in sim.world.resources:
        if node.collected:
            continue
        rx, ry = node.world_center(ts)
        d = math.hypot(rx - p.x, ry - p.y)
        if d < best_d:
            best, best_d = node, d
    return best


def _heading_to(sim: SurvivalSimulation, x: float, y: float) -> InputIntent:
    dx = x - sim.player.x
    dy = y - sim.player.y
    # Snap to the 8 key directions a keyboard player could produce.
    sx = 0 if abs(dx) < 4 else (1 if dx > 0 else -1)
    sy = 0 if abs(dy) < 4 else (1 if dy > 0 else -1)
    return InputIntent(sx, sy)


def forage_intent(sim: SurvivalSimulation) -> InputIntent:
    """
    Simple greedy castaway: eat when hurt, light fires when cold, head home to arm the
    beacon once it is affordable, otherwise walk to the nearest supply.
    """
    p = sim.player
    if p.health < 50:
        sim.eat()
    if p.warmth < 40 and not sim.near_ship and not (sim.last_heat and sim.last_heat.sheltered):
        sim.build_fire()

    if sim.phase is RescuePhase.EXPLORING and not sim.beacon_cost_outstanding():
        if sim.near_ship:
            sim.activate_beacon()
            return REST
        cx, cy = sim.world.center
        return _heading_to(sim, cx, cy)

    if sim.phase is RescuePhase.BEACON_ARMED:
        cx, cy = sim.world.center
        return REST if sim.near_ship else _heading_to(sim, cx, cy)

    node = _nearest_resource(sim)
    if node is None:
        return REST
    rx, ry = node.world_center(sim.world.tile_size)
    return _heading_to(sim, rx, ry)


def scripted_intent(sim: SurvivalSimulation, scenario: str, t: float) -> InputIntent:
    if scenario == "idle":
        return REST
    if scenario == "wander":
        leg = int(t // WANDER_LEG_SECONDS) % len(WANDER_HEADINGS)
        return InputIntent(*WANDER_HEADINGS[leg])
    if scenario == "forage":
        return forage_intent(sim)
    raise ValueError(f"unknown scenario: {scenario}")


def _qa_check(sim: SurvivalSimulation) -> list[str]:
    """Per-tick invariants. Returns a list of failure messages (empty when fine)."""
    failures = []
    p = sim.player
    for name in ("health", "energy", "warmth"):
        v = getattr(p, name)
        if not (0.0 <= v <= 100.0):
            failures.append(f"{name} out of range: {v}")
    for kind, n in p.inventory.as_dict().items():
        if n < 0:
            failures.append(f"negative inventory: {kind}={n}")
    if not (0.0 <= sim.clock.time_of_day < sim.clock.day_length):
        failures.append(f"time_of_day out of range: {sim.clock.time_of_day}")
    return failures


def run_scenario(
    *,
    seed,
    seconds: float,
    scenario: str = "idle",
    size: int = 60,
    tick_hz: int = 60,
    log_every: int = 0,
    qa: bool = False,
) -> dict:
    """Run one headless game and return a summary dict (used by tests and the CLI)."""
    if scenario not in SCENARIOS:
        raise ValueError(f"unknown scenario: {scenario}")
    sim = SurvivalSimulation.new_game(seed, size)
    dt = 1.0 / max(1, int(tick_hz))
    ticks = int(seconds * tick_hz)

    events: list[SimEvent] = []
    failures: list[str] = []
    phase_seen_terminal = None
    t = 0.0

    for i in range(ticks):
        intent = scripted_intent(sim, scenario, t)
        sim.update(dt, intent)
        t += dt
        events.extend(sim.poll_events())

        if qa:
            failures.extend(f"tick {i}: {msg}" for msg in _qa_check(sim))
            if phase_seen_terminal is not None and sim.phase is not phase_seen_terminal:
                failures.append(f"tick {i}: terminal phase changed {phase_seen_terminal} -> {sim.phase}")
        if sim.is_over and phase_seen_terminal is None:
            phase_seen_terminal = sim.phase

        if log_every and i % log_every == 0:
            s = sim.snapshot()
            inv = " ".join(f"{k}={v}" for k, v in s.inventory.items())
            print(
                f"[observe] t={t:6.1f}s day={s.day} tod={s.time_of_day:5.1f}{' night' if s.is_night else ''} "
                f"hp={s.health:5.1f} en={s.energy:5.1f} warm={s.warmth:5.1f} {inv} phase={s.phase.name}"
            )
        if sim.is_over:
            break

    if qa and len(events) > 1:
        failures.append(f"expected at most one terminal event, got {[e.value for e in events]}")

    snap = sim.snapshot()
    return {
        "seed": sim.seed,
        "scenario": scenario,
        "seconds": round(t, 3),
        "phase": snap.phase,
        "events": events,
        "snapshot": snap.to_dict(),
        "collected": sum(1 for n in sim.world.resources if n.collected),
        "failures": failures,
    }


def main() -> int:
    ap = argparse.ArgumentParser(description="Headless survival observer")
    ap.add_argument("--seconds", type=float, default=120.0)
    ap.add_argument("--seed", type=str, default="3")
    ap.add_argument("--size", type=int, default=60, help="island size in tiles")
    ap.add_argument("--scenario", type=str, default="idle", choices=list(SCENARIOS))
    ap.add_argument("--log-every", type=int, default=600, help="log every N ticks (60 ~= 1s)")
    ap.add_argument("--qa", action="store_true", help="enable QA assertions (nonzero exit on failure)")
    args = ap.parse_args()

    result = run_scenario(
        seed=args.seed,
        seconds=args.seconds,
        scenario=args.scenario,
        size=args.size,
        log_every=max(0, args.log_every),
        qa=args.qa,
    )

    print(
        f"[observe] done seed={result['seed']} scenario={result['scenario']} t={result['seconds']}s "
        f"phase={result['phase'].name} collected={result['collected']} "
        f"events={[e.value for e in result['events']]}"
    )

    if args.qa:
        if result["failures"]:
            print(f"[observe] QA FAIL: {len(result['failures'])} failure(s)")
            for f in result["failures"][:20]:
                print(f"- {f}")
            return 1
        print("[observe] QA PASS")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
