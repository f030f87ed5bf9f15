"""Neighbor query and steering forces as Numba JIT kernels.

Every force kernel reads a frozen snapshot (``positions``, ``headings``) and
writes only ``out_headings``. The caller owns the buffer swap.
"""

import math
import numpy as np
from numba import njit, prange


# ============================================================================
# VECTOR HELPERS
# ============================================================================

@njit(cache=True)
def normalize(x: float, y: float):
    """Unit vector of (x, y); the zero vector maps to itself."""
    mag = math.sqrt(x * x + y * y)
    if mag > 0.0:
        return x / mag, y / mag
    return 0.0, 0.0


@njit(cache=True)
def in_range(dx: float, dy: float, radius_sq: float) -> bool:
    """Inclusive disc test shared by the query and every force."""
    return dx * dx + dy * dy <= radius_sq


# ============================================================================
# NEIGHBOR QUERY
# ============================================================================

@njit(cache=True)
def neighbors_numba(
    positions: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    out: np.ndarray,
    num_boids: int
) -> int:
    """
    Brute-force neighbor query.

    Writes the indices of every boid within ``radius`` of (cx, cy) into
    ``out`` in index order and returns how many were written.
    """
    radius_sq = radius * radius
    count = 0
    for j in range(num_boids):
        if in_range(positions[j, 0] - cx, positions[j, 1] - cy, radius_sq):
            out[count] = j
            count += 1
    return count


# ============================================================================
# STEERING FORCES
# ============================================================================

@njit(parallel=True, cache=True)
def separation_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    out_headings: np.ndarray,
    separation_range: float,
    separation_rate: float,
    max_density: float,
    num_boids: int
):
    """Push boids away from the centroid of an overcrowded separation disc."""
    range_sq = separation_range * separation_range
    area = math.pi * range_sq

    for i in prange(num_boids):
        px = positions[i, 0]
        py = positions[i, 1]
        hx = headings[i, 0]
        hy = headings[i, 1]

        sum_x, sum_y = 0.0, 0.0
        count = 0
        for j in range(num_boids):
            if in_range(positions[j, 0] - px, positions[j, 1] - py, range_sq):
                sum_x += positions[j, 0]
                sum_y += positions[j, 1]
                count += 1

        if count > 0 and area > 0.0 and count / area > max_density:
            dx, dy = normalize(sum_x / count - px, sum_y / count - py)
            hx -= dx * separation_rate
            hy -= dy * separation_rate

        out_headings[i, 0] = hx
        out_headings[i, 1] = hy


@njit(parallel=True, cache=True)
def cohesion_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    out_headings: np.ndarray,
    cohesion_range: float,
    cohesion_rate: float,
    num_boids: int
):
    """Pull boids toward the centroid of their cohesion disc."""
    range_sq = cohesion_range * cohesion_range

    for i in prange(num_boids):
        px = positions[i, 0]
        py = positions[i, 1]
        hx = headings[i, 0]
        hy = headings[i, 1]

        sum_x, sum_y = 0.0, 0.0
        count = 0
        for j in range(num_boids):
            if in_range(positions[j, 0] - px, positions[j, 1] - py, range_sq):
                sum_x += positions[j, 0]
                sum_y += positions[j, 1]
                count += 1

        if count > 0:
            dx, dy = normalize(sum_x / count - px, sum_y / count - py)
            hx += dx * cohesion_rate
            hy += dy * cohesion_rate

        out_headings[i, 0] = hx
        out_headings[i, 1] = hy


@njit(parallel=True, cache=True)
def alignment_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    out_headings: np.ndarray,
    alignment_range: float,
    alignment_rate: float,
    num_boids: int
):
    """Nudge each heading toward the normalized mean heading of its disc."""
    range_sq = alignment_range * alignment_range

    for i in prange(num_boids):
        px = positions[i, 0]
        py = positions[i, 1]
        hx = headings[i, 0]
        hy = headings[i, 1]

        sum_x, sum_y = 0.0, 0.0
        count = 0
        for j in range(num_boids):
            if in_range(positions[j, 0] - px, positions[j, 1] - py, range_sq):
                sum_x += headings[j, 0]
                sum_y += headings[j, 1]
                count += 1

        if count > 0:
            mx, my = normalize(sum_x / count, sum_y / count)
            hx += (mx - headings[i, 0]) * alignment_rate
            hy += (my - headings[i, 1]) * alignment_rate

        out_headings[i, 0] = hx
        out_headings[i, 1] = hy
