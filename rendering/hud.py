"""Status overlay drawn on top of the flock."""

import pygame
from OpenGL.GL import *

from config import boids as config


class HudOverlay:
    """
    Text lines in the top-left corner of the plane.

    Each line is rasterized once and reused until its text changes, so a
    steady HUD costs one glDrawPixels per line per frame.
    """

    def __init__(self, screen_size: tuple, font_size: int = 18, line_spacing: int = 25):
        pygame.font.init()
        self.font = pygame.font.SysFont("monospace", font_size)
        self.screen_size = screen_size
        self.line_spacing = line_spacing
        self._lines = []
        self._bitmaps = {}

    def set_lines(self, lines: list):
        """Replace the overlay text, rasterizing only lines not seen last time."""
        bitmaps = {}
        for text in lines:
            bitmap = self._bitmaps.get(text)
            if bitmap is None:
                surface = self.font.render(text, True, config.COLORS["text"])
                w, h = surface.get_size()
                bitmap = (w, h, pygame.image.tostring(surface, "RGBA", True))
            bitmaps[text] = bitmap
        self._bitmaps = bitmaps
        self._lines = list(lines)

    def draw(self):
        """Blit cached lines; expects the renderer's pixel projection to be active."""
        if not self._lines:
            return

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        for row, text in enumerate(self._lines):
            w, h, pixels = self._bitmaps[text]
            top = 10 + row * self.line_spacing
            glRasterPos2f(10, self.screen_size[1] - top - h)
            glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, pixels)
        glDisable(GL_BLEND)
