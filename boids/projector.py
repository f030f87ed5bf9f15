"""Triangle footprints for rendering boids."""

import math
import numpy as np
from numba import njit, prange

# Rotation pivot offset behind the tip
PIVOT_OFFSET = math.sqrt(3.0) / 2.0


@njit(parallel=True, cache=True)
def build_triangles_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    triangles: np.ndarray,
    size: float,
    pivot_offset: float,
    num_boids: int
):
    """Numba JIT-compiled triangle building (tip, back-left, back-right)."""
    half = size * 0.5

    for i in prange(num_boids):
        px, py = positions[i, 0], positions[i, 1]
        cx = px - pivot_offset
        cy = py

        angle = math.atan2(headings[i, 1], headings[i, 0])
        c = math.cos(angle)
        s = math.sin(angle)

        # Untransformed triangle points along +x, relative to the pivot
        rx0, ry0 = px - cx, py - cy
        rx1, ry1 = px - size - cx, py - half - cy
        rx2, ry2 = px - size - cx, py + half - cy

        triangles[i, 0, 0] = c * rx0 - s * ry0 + cx
        triangles[i, 0, 1] = s * rx0 + c * ry0 + cy
        triangles[i, 1, 0] = c * rx1 - s * ry1 + cx
        triangles[i, 1, 1] = s * rx1 + c * ry1 + cy
        triangles[i, 2, 0] = c * rx2 - s * ry2 + cx
        triangles[i, 2, 1] = s * rx2 + c * ry2 + cy


def project(flock, size: float = None, out: np.ndarray = None) -> np.ndarray:
    """
    Map every boid of ``flock`` to a triangle.

    Args:
        flock: Flock snapshot to read (never modified)
        size: Triangle length, defaults to the flock's configured size
        out: Optional (N, 3, 2) float64 array to fill instead of allocating

    Returns:
        (N, 3, 2) array of triangle points in flock index order
    """
    if size is None:
        size = flock.size
    n = len(flock)
    if out is None:
        out = np.empty((n, 3, 2), dtype=np.float64)
    elif out.shape != (n, 3, 2):
        raise ValueError(f"Triangle buffer must have shape {(n, 3, 2)}, got {out.shape}")

    build_triangles_numba(
        flock.positions,
        flock.headings,
        out,
        float(size),
        PIVOT_OFFSET,
        n
    )
    return out
