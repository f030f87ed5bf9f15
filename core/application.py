"""Main application class that ties everything together."""

import pygame
from pygame.locals import *
from OpenGL.GL import *

from config import boids as config
from .input_handler import InputHandler
from rendering import FlockRenderer, HudOverlay
from boids import Flock, project


class Application:
    """Main application managing the window, tick loop and rendering."""

    def __init__(self, num_boids: int = None, seed: int = None, fullscreen: bool = None):
        pygame.init()

        if fullscreen is None:
            fullscreen = config.WINDOW["fullscreen"]

        if fullscreen:
            # Plane bounds follow the current monitor
            info = pygame.display.Info()
            self.screen_size = (info.current_w, info.current_h)
            flags = DOUBLEBUF | OPENGL | FULLSCREEN
        else:
            self.screen_size = (config.WINDOW["width"], config.WINDOW["height"])
            flags = DOUBLEBUF | OPENGL

        pygame.display.set_mode(self.screen_size, flags)
        pygame.display.set_caption(config.WINDOW["title"])

        # Simulation
        print("[App] Initializing flock...")
        self.flock = Flock(num_boids=num_boids, bounds=self.screen_size, rng=seed)
        self._triangles = None

        # Core components
        self.input_handler = InputHandler(self.flock)

        # Rendering components
        self.flock_renderer = FlockRenderer(len(self.flock), self.screen_size)
        self.hud = HudOverlay(self.screen_size)

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0
        self._hud_due = 0

        self._setup_gl()
        print("[App] Ready!")

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glDisable(GL_DEPTH_TEST)
        self.flock_renderer.apply_projection()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == KEYDOWN:
                # Key presses change pause/help state, show it right away
                self._hud_due = 0
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self):
        """Advance the flock and rebuild its triangles."""
        if self.input_handler.should_tick():
            self.flock.update()
        self._triangles = project(self.flock, out=self._triangles)

        now = pygame.time.get_ticks()
        if now >= self._hud_due:
            self.hud.set_lines(self.input_handler.status_lines(self.fps))
            self._hud_due = now + config.WINDOW["hud_refresh_ms"]

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT)

        self.flock_renderer.draw(self._triangles, self.flock.headings)
        self.hud.draw()

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")

        while self.running:
            self.clock.tick(config.WINDOW["fps"])
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update()
            self._render()

        pygame.quit()
        print("[App] Shutdown complete")
