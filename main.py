"""
2D Boids Simulation
===================

A real-time flocking simulation on a wrap-around plane sized to the display.

Controls:
    - SPACE: Pause/Resume simulation
    - . (period): Single tick while paused
    - R: Reset flock
    - H: Toggle help text
    - ESC: Quit

Usage:
    python main.py                    # Fullscreen, default population
    python main.py --windowed         # Window sized from config
    python main.py --count 800 --seed 7
"""

import argparse

from config import boids as config
from core.application import Application


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="2D boids flocking simulation")
    parser.add_argument("--count", type=int, default=config.BOIDS["count"],
                        help="Number of boids (fixed for the run)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for initial placement and heading jitter")
    parser.add_argument("--windowed", action="store_true",
                        help="Run in a window instead of fullscreen")
    parser.add_argument("--width", type=int, default=config.WINDOW["width"],
                        help="Window width when windowed")
    parser.add_argument("--height", type=int, default=config.WINDOW["height"],
                        help="Window height when windowed")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.count < 1:
        raise SystemExit("--count must be at least 1")

    config.WINDOW["width"] = args.width
    config.WINDOW["height"] = args.height

    fullscreen = False if args.windowed else None
    app = Application(num_boids=args.count, seed=args.seed, fullscreen=fullscreen)
    app.run()


if __name__ == "__main__":
    main()
