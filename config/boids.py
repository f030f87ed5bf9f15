"""Configuration for 2D boids flocking simulation."""

import math

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "boids",
    "fullscreen": True,        # Plane bounds follow the current monitor
    "fps": 0,                  # 0 = uncapped
    "hud_refresh_ms": 250,     # Status text refresh interval
}

_SEPARATION_RANGE = 20.0

BOIDS = {
    "count": 400,
    "velocity": 2.0,           # Units per tick
    "chaos": 0.01,             # Per-axis heading jitter magnitude
    "size": 10.0,              # Triangle length

    # Flocking behavior
    "separation_range": _SEPARATION_RANGE,
    "separation_rate": 0.05,
    # 5 boids per separation disc
    "max_density": 5.0 / (math.pi * _SEPARATION_RANGE ** 2),
    "alignment_range": 25.0,
    "alignment_rate": 0.1,
    "cohesion_range": 100.0,
    "cohesion_rate": 0.005,
}

COLORS = {
    "background": (0.0, 0.0, 0.0, 1.0),
    "text": (230, 230, 230),
    "boid_saturation": 0.6,
    "boid_value": 1.0,
}
