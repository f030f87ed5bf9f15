import numpy as np
import pytest

from boids import Flock


class FixedRng:
    """Random source that always returns the upper end of the requested range."""

    def uniform(self, low, high, size):
        return np.full(size, high, dtype=np.float64)


@pytest.fixture
def still_params():
    """No displacement and no jitter."""
    return {"velocity": 0.0, "chaos": 0.0}


@pytest.fixture
def make_flock():
    def _make(positions, headings, bounds=(300.0, 300.0), params=None, rng=0):
        return Flock.from_arrays(positions, headings, bounds, params=params, rng=rng)
    return _make
