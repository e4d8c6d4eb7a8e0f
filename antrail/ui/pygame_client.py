"""Pygame window for watching a Simulation.

The simulation advances a fixed number of ticks per displayed frame;
each frame is rendered into one reusable RGBA buffer and blitted as a
single surface.  A side panel shows tick count and food totals.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from antrail.simulation.engine import Simulation

log = logging.getLogger(__name__)

_PANEL_BG = (20, 20, 20)
_TEXT = (200, 200, 200)
_MAX_UPDATES_PER_FRAME = 500


class PygameRenderer:
    """Displays a Simulation in a Pygame window.

    Attributes:
        simulation: The simulation to visualise.
        updates_per_frame: Ticks advanced before each redraw.
        screen: The Pygame display surface.
    """

    def __init__(
        self,
        simulation: Simulation,
        updates_per_frame: int | None = None,
    ) -> None:
        """Initialise the renderer and open the window.

        Args:
            simulation: The simulation to render.
            updates_per_frame: Ticks per frame (default: from config).
        """
        self.simulation = simulation
        if updates_per_frame is None:
            updates_per_frame = simulation.config.updates_per_render
        self.updates_per_frame = updates_per_frame
        self._frame = simulation.new_frame()

        self._panel_width = 200
        self._size = (simulation.pixel_width, simulation.pixel_height)
        win_w = simulation.pixel_width + self._panel_width
        win_h = max(simulation.pixel_height, 160)

        pygame.init()
        self.screen = pygame.display.set_mode((win_w, win_h))
        pygame.display.set_caption("Ants Simulation")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def run(self, fps: int = 60) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            if not self.paused:
                self.simulation.run(self.updates_per_frame)
            self._draw()

        stats = self.simulation.stats()
        log.info(
            "Viewer closed at tick %d, %d food delivered",
            stats.tick,
            stats.food_delivered,
        )
        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self.updates_per_frame = min(
                        _MAX_UPDATES_PER_FRAME,
                        self.updates_per_frame * 2,
                    )
                elif event.key == pygame.K_MINUS:
                    self.updates_per_frame = max(1, self.updates_per_frame // 2)

    def _draw(self) -> None:
        """Render one frame."""
        self.simulation.render(self._frame)
        surface = pygame.image.frombuffer(self._frame, self._size, "RGBA")
        self.screen.fill(_PANEL_BG)
        self.screen.blit(surface, (0, 0))
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        stats = self.simulation.stats()
        panel_x = self.simulation.pixel_width + 10
        y = 10

        lines = [
            f"Tick: {stats.tick}",
            f"Ticks/frame: {self.updates_per_frame}",
            "PAUSED" if self.paused else "RUNNING",
            "",
            f"Ants: {len(self.simulation.ants)}",
            f"Carrying: {stats.ants_carrying}",
            f"Food left: {stats.food_remaining}",
            f"Delivered: {stats.food_delivered}",
            f"Trail cells: {stats.pheromone_cells}",
            "",
            "SPACE: pause",
            "+/-: speed",
            "ESC: quit",
        ]
        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
