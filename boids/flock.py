"""Flock state and per-tick simulation - double-buffered arrays with Numba JIT kernels."""

import numpy as np
from numba import njit, prange

from config import boids as config
from .boid import Boid
from .projector import PIVOT_OFFSET, build_triangles_numba
from .steering import (
    normalize,
    neighbors_numba,
    separation_numba,
    alignment_numba,
    cohesion_numba,
)


# ============================================================================
# NUMBA JIT-COMPILED INTEGRATOR
# ============================================================================

@njit(cache=True)
def wrap_axis(value: float, bound: float) -> float:
    """Clamp-style wrap: below zero goes to bound - 1, past the bound goes to 0."""
    if value < 0.0:
        return bound - 1.0
    if value >= bound:
        return 0.0
    return value


@njit(parallel=True, cache=True)
def simulate_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    chaos: np.ndarray,
    out_positions: np.ndarray,
    out_headings: np.ndarray,
    width: float,
    height: float,
    velocity: float,
    num_boids: int
):
    """Numba JIT-compiled integrator: jitter, normalize, advance, wrap."""
    for i in prange(num_boids):
        hx, hy = normalize(headings[i, 0] + chaos[i, 0], headings[i, 1] + chaos[i, 1])

        out_headings[i, 0] = hx
        out_headings[i, 1] = hy
        out_positions[i, 0] = wrap_axis(positions[i, 0] + hx * velocity, width)
        out_positions[i, 1] = wrap_axis(positions[i, 1] + hy * velocity, height)


# ============================================================================
# FLOCK CLASS
# ============================================================================

class Flock:
    """
    Fixed-size flock on a toroidal plane.

    Positions and headings live in (N, 2) float64 front buffers. Each stage
    reads the front buffers, writes the back buffers and swaps them, so no
    stage ever sees a partially updated tick.
    """

    _kernels_compiled = False

    def __init__(
        self,
        num_boids: int = None,
        bounds=(config.WINDOW["width"], config.WINDOW["height"]),
        params: dict = None,
        rng=None,
        positions: np.ndarray = None,
        headings: np.ndarray = None,
    ):
        self.params = self._merge_params(params)
        if num_boids is None:
            num_boids = self.params["count"]
        if num_boids < 1:
            raise ValueError(f"Flock needs at least one boid, got {num_boids}")

        self.num_boids = int(num_boids)
        self.bounds = self._check_bounds(bounds)
        # Anything with uniform(low, high, size) works; ints and None are seeds
        if rng is None or isinstance(rng, (int, np.integer)):
            rng = np.random.default_rng(rng)
        self.rng = rng

        self.velocity = np.float64(self.params["velocity"])
        self.chaos = np.float64(self.params["chaos"])
        self.size = np.float64(self.params["size"])

        # Flocking parameters
        self.separation_range = np.float64(self.params["separation_range"])
        self.separation_rate = np.float64(self.params["separation_rate"])
        self.max_density = np.float64(self.params["max_density"])
        self.alignment_range = np.float64(self.params["alignment_range"])
        self.alignment_rate = np.float64(self.params["alignment_rate"])
        self.cohesion_range = np.float64(self.params["cohesion_range"])
        self.cohesion_rate = np.float64(self.params["cohesion_rate"])

        # Front buffers (read) and back buffers (written, then swapped in)
        self.positions = np.zeros((self.num_boids, 2), dtype=np.float64)
        self.headings = np.zeros((self.num_boids, 2), dtype=np.float64)
        self._back_positions = np.zeros_like(self.positions)
        self._back_headings = np.zeros_like(self.headings)

        # Scratch for neighbor queries
        self._neighbor_indices = np.zeros(self.num_boids, dtype=np.int64)

        self.tick = 0
        if positions is None and headings is None:
            self.reset()
        else:
            # Explicit agents leave the random source untouched
            shape = (self.num_boids, 2)
            if np.shape(positions) != shape or np.shape(headings) != shape:
                raise ValueError(f"Positions and headings must both have shape {shape}")
            self.positions[:] = positions
            self.headings[:] = headings

        if not Flock._kernels_compiled:
            self._warmup_numba()
            Flock._kernels_compiled = True

        print(f"[Flock] Initialized {self.num_boids:,} boids on "
              f"{self.bounds[0]:.0f}x{self.bounds[1]:.0f} plane")

    @classmethod
    def from_arrays(cls, positions, headings, bounds, params: dict = None, rng=None):
        """Build a flock from explicit positions and headings."""
        positions = np.asarray(positions, dtype=np.float64)
        headings = np.asarray(headings, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ValueError(f"Positions must have shape (N, 2), got {positions.shape}")
        if headings.shape != positions.shape:
            raise ValueError(
                f"Headings shape {headings.shape} does not match positions {positions.shape}"
            )

        return cls(
            num_boids=len(positions),
            bounds=bounds,
            params=params,
            rng=rng,
            positions=positions,
            headings=headings,
        )

    @staticmethod
    def _merge_params(params: dict) -> dict:
        """Overlay parameter overrides on the configured defaults."""
        merged = dict(config.BOIDS)
        if params:
            unknown = set(params) - set(merged)
            if unknown:
                raise ValueError(f"Unknown flock parameters: {', '.join(sorted(unknown))}")
            merged.update(params)
        return merged

    @staticmethod
    def _check_bounds(bounds) -> np.ndarray:
        bounds = np.asarray(bounds, dtype=np.float64)
        if bounds.shape != (2,):
            raise ValueError(f"Bounds must be (width, height), got {bounds.shape}")
        if np.any(bounds < 1.0):
            raise ValueError(f"Bounds must be at least 1.0 on each axis, got {tuple(bounds)}")
        return bounds

    def __len__(self) -> int:
        return self.num_boids

    def __getitem__(self, index: int) -> Boid:
        if index < 0:
            index += self.num_boids
        if not 0 <= index < self.num_boids:
            raise IndexError(f"Boid index {index} out of range")
        return Boid(
            index=index,
            position=self.positions[index].copy(),
            heading=self.headings[index].copy(),
        )

    def reset(self):
        """Scatter every boid uniformly over the plane with random headings."""
        n = self.num_boids
        self.positions[:] = self.rng.uniform(0.0, 1.0, (n, 2)) * self.bounds
        self.headings[:] = self.rng.uniform(-1.0, 1.0, (n, 2))
        self.tick = 0

    def _warmup_numba(self):
        """Pre-compile Numba functions."""
        print("[Flock] Compiling kernels...")
        n = 16
        pos = np.random.rand(n, 2).astype(np.float64) * 10
        head = np.random.rand(n, 2).astype(np.float64)
        out_pos = np.zeros((n, 2), dtype=np.float64)
        out_head = np.zeros((n, 2), dtype=np.float64)
        chaos = np.zeros((n, 2), dtype=np.float64)
        idx = np.zeros(n, dtype=np.int64)
        tris = np.zeros((n, 3, 2), dtype=np.float64)

        neighbors_numba(pos, 0.0, 0.0, 5.0, idx, n)
        separation_numba(pos, head, out_head, 5.0, 0.05, 0.01, n)
        alignment_numba(pos, head, out_head, 5.0, 0.1, n)
        cohesion_numba(pos, head, out_head, 5.0, 0.005, n)
        simulate_numba(pos, head, chaos, out_pos, out_head, 10.0, 10.0, 1.0, n)
        build_triangles_numba(pos, head, tris, 10.0, PIVOT_OFFSET, n)

    # ------------------------------------------------------------------
    # Buffer handling
    # ------------------------------------------------------------------

    def _swap(self):
        """Exchange front and back buffers."""
        self.positions, self._back_positions = self._back_positions, self.positions
        self.headings, self._back_headings = self._back_headings, self.headings

    def _steer(self, kernel, *args):
        """Run a heading-only stage and swap."""
        np.copyto(self._back_positions, self.positions)
        kernel(self.positions, self.headings, self._back_headings, *args, self.num_boids)
        self._swap()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def neighbors(self, center, radius: float) -> np.ndarray:
        """Indices of every boid within ``radius`` of ``center`` (inclusive), in index order."""
        if radius < 0:
            raise ValueError(f"Radius must be non-negative, got {radius}")
        count = neighbors_numba(
            self.positions,
            float(center[0]),
            float(center[1]),
            float(radius),
            self._neighbor_indices,
            self.num_boids
        )
        return self._neighbor_indices[:count].copy()

    def separate(self):
        self._steer(
            separation_numba,
            float(self.separation_range),
            float(self.separation_rate),
            float(self.max_density),
        )

    def align(self):
        self._steer(
            alignment_numba,
            float(self.alignment_range),
            float(self.alignment_rate),
        )

    def cohere(self):
        self._steer(
            cohesion_numba,
            float(self.cohesion_range),
            float(self.cohesion_rate),
        )

    def simulate(self):
        """Jitter and normalize headings, advance positions and wrap them onto the plane."""
        chaos = np.asarray(
            self.rng.uniform(-self.chaos, self.chaos, (self.num_boids, 2)),
            dtype=np.float64,
        )
        simulate_numba(
            self.positions,
            self.headings,
            chaos,
            self._back_positions,
            self._back_headings,
            float(self.bounds[0]),
            float(self.bounds[1]),
            float(self.velocity),
            self.num_boids
        )
        self._swap()

    def update(self):
        """Advance one tick: separation, alignment, cohesion, then integration."""
        self.separate()
        self.align()
        self.cohere()
        self.simulate()
        self.tick += 1
