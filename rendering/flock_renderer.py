"""Flock rendering - uploads projected triangles to a VBO and draws them."""

import numpy as np
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import boids as config


def heading_colors(headings: np.ndarray) -> np.ndarray:
    """Color each boid by heading angle (hue wheel)."""
    hues = (np.arctan2(headings[:, 1], headings[:, 0]) / (2 * np.pi)) % 1.0

    s = config.COLORS["boid_saturation"]
    v = config.COLORS["boid_value"]
    h6 = hues * 6.0
    i = h6.astype(np.int32) % 6
    f = h6 - np.floor(h6)
    p = np.full_like(hues, v * (1.0 - s))
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))
    full = np.full_like(hues, v)

    sectors = [(full, t, p), (q, full, p), (p, full, t), (p, q, full), (t, p, full), (full, p, q)]
    colors = np.zeros((len(hues), 3), dtype=np.float32)
    for idx, (r, g, b) in enumerate(sectors):
        mask = i == idx
        colors[mask, 0] = r[mask]
        colors[mask, 1] = g[mask]
        colors[mask, 2] = b[mask]

    return colors


class FlockRenderer:
    """Draws a flat triangle list in plane coordinates."""

    def __init__(self, num_boids: int, screen_size: tuple):
        self.num_boids = num_boids
        self.screen_size = screen_size
        self.verts_per_boid = 3

        # Vertex data (float32 for GPU)
        self._vertices = np.zeros((num_boids * self.verts_per_boid, 2), dtype=np.float32)
        self._vert_colors = np.zeros((num_boids * self.verts_per_boid, 3), dtype=np.float32)

        # VBOs for GPU-side storage
        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Renderer] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def apply_projection(self):
        """Map plane coordinates 1:1 onto window pixels."""
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, self.screen_size[0], 0, self.screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def draw(self, triangles: np.ndarray, headings: np.ndarray):
        """
        Render one frame of boids.

        Args:
            triangles: (N, 3, 2) triangle points from the projector
            headings: (N, 2) headings used for coloring
        """
        if not self._vbos_initialized:
            self._init_vbos()

        total_verts = len(triangles) * self.verts_per_boid
        self._vertices[:total_verts] = triangles.reshape(-1, 2)
        self._vert_colors[:total_verts] = np.repeat(
            heading_colors(headings), self.verts_per_boid, axis=0
        )

        if self._vbos_initialized and self._vbo_vertices is not None:
            # VBO rendering path (faster)
            self._vbo_vertices.set_array(self._vertices[:total_verts])
            self._vbo_colors.set_array(self._vert_colors[:total_verts])

            self._vbo_vertices.bind()
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(2, GL_FLOAT, 0, None)

            self._vbo_colors.bind()
            glEnableClientState(GL_COLOR_ARRAY)
            glColorPointer(3, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            self._vbo_colors.unbind()
            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
        else:
            # Fallback to immediate mode
            glEnableClientState(GL_VERTEX_ARRAY)
            glEnableClientState(GL_COLOR_ARRAY)

            glVertexPointer(2, GL_FLOAT, 0, self._vertices[:total_verts])
            glColorPointer(3, GL_FLOAT, 0, self._vert_colors[:total_verts])
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
