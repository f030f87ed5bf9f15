"""2D boids simulation core."""

from .boid import Boid
from .flock import Flock
from .projector import project

__all__ = ["Boid", "Flock", "project"]
