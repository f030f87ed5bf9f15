"""Input handling for keyboard and window events."""

import pygame
from pygame.locals import *

from boids import Flock


class InputHandler:
    """Handles quit, pause, single-step, reset and help toggling."""

    def __init__(self, flock: Flock):
        self.flock = flock
        self.paused = False
        self.show_help = True
        self.step_requested = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            elif event.key == K_SPACE:
                self.paused = not self.paused
                print(f"[App] {'Paused' if self.paused else 'Running'}")
            elif event.key == K_PERIOD:
                if self.paused:
                    self.step_requested = True
            elif event.key == K_r:
                print("[App] Resetting flock...")
                self.flock.reset()
            elif event.key == K_h:
                self.show_help = not self.show_help

        return True

    def status_lines(self, fps: float) -> list:
        """HUD lines for the current flock and pause state."""
        status = "PAUSED" if self.paused else "RUNNING"
        lines = [
            f"Boids: {len(self.flock):,}  |  Tick: {self.flock.tick:,}  |  "
            f"FPS: {fps:.0f}  |  {status}"
        ]
        if self.show_help:
            lines.append("SPACE: Pause | .: Step | R: Reset | H: Toggle help | ESC: Quit")
        return lines

    def should_tick(self) -> bool:
        """Whether the simulation advances this frame (consumes a pending single step)."""
        if not self.paused:
            return True
        if self.step_requested:
            self.step_requested = False
            return True
        return False
