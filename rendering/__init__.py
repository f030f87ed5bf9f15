"""Rendering components for the 2D boids simulation."""

from .flock_renderer import FlockRenderer
from .hud import HudOverlay

__all__ = ["FlockRenderer", "HudOverlay"]
