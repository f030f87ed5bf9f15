"""Individual boid snapshot with position and heading."""

import math
import numpy as np
from dataclasses import dataclass, field


@dataclass
class Boid:
    """
    A single boid (bird-oid object) read out of a flock.

    Attributes:
        index: Slot of the boid in its flock
        position: 2D position on the plane
        heading: 2D heading, nominally unit length
    """
    index: int = 0
    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    heading: np.ndarray = field(default_factory=lambda: np.zeros(2))

    @property
    def angle(self) -> float:
        """Signed heading angle from the +x axis, in radians."""
        return math.atan2(self.heading[1], self.heading[0])
