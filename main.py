"""
Castaway - survive the island until a rescue beacon brings help.

Usage:
    python main.py [--seed <number>] [--size <tiles>] [--deterministic]

The seed may also come from CASTAWAY_SEED (.env supported). Without one, a fresh
seed is chosen and printed so the island can be replayed.
"""
import argparse
import logging

from config import SIM_SEED, WORLD_SIZE, DETERMINISTIC_SIM, LOG_LEVEL


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Castaway - island survival on a seeded procedural map"
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=SIM_SEED or None,
        help="World seed (integer). Invalid or missing -> fresh random seed"
    )
    parser.add_argument(
        "--size",
        type=int,
        default=WORLD_SIZE,
        help=f"Island size in tiles per side (default: {WORLD_SIZE})"
    )
    parser.add_argument(
        "--deterministic",
        action="store_true",
        default=DETERMINISTIC_SIM,
        help="Drive the simulation with a fixed tick instead of wall-clock frame time"
    )
    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 50)
    print("  Castaway - Island Survival")
    print("=" * 50)
    print()

    print("Generating island...")
    from castaway.engine import GameEngine
    game = GameEngine(seed=args.seed, world_size=args.size, deterministic=args.deterministic)

    print()
    print("Controls:")
    print("  WASD / Arrows - Move (stand still to rest)")
    print("  (walk over)   - Gather food, wood, oil and scrap")
    print("  Q             - Eat")
    print("  F             - Build campfire (3 wood)")
    print("  B             - Arm rescue beacon (at the ship)")
    print("  R             - Sleep until morning (at the ship)")
    print("  Esc           - Pause")
    print("  F3            - Toggle help")
    print("  Enter         - New island after game over")
    print()
    print("Starting game...")
    print()

    game.run()

    print("Thanks for playing!")


if __name__ == "__main__":
    main()
