"""Simulation — the main tick loop.

Owns the environment and the ants and advances them in the canonical
tick order:

1. Update ants, one at a time in list order.  Each ant gets the same
   Environment object, so ant N sees the pickups and trail deposits of
   ants 0..N-1 from this very tick.
2. Decay the pheromone field once.

Rendering is a read-only pass and must only happen between ticks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from antrail.colony.ant import Ant
from antrail.simulation.config import SimulationConfig
from antrail.ui.raster import frame_length, render_frame
from antrail.world.environment import Environment

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationStats:
    """Snapshot of headline numbers after a tick."""

    tick: int
    food_remaining: int
    food_delivered: int
    ants_carrying: int
    pheromone_cells: int


@dataclass
class Simulation:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Simulation configuration, validated on construction.
        environment: Shared grid state (food, nest, pheromone).
        ants: All ants, in update order.
        rng: Master seeded random generator.
        tick: Number of completed ticks.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    environment: Environment = field(init=False)
    ants: list[Ant] = field(init=False, default_factory=list)
    rng: Generator = field(init=False)
    tick: int = 0

    def __post_init__(self) -> None:
        """Validate config, then build the RNG, environment and ants.

        Raises:
            ConfigError: If the configuration is unusable.
        """
        self.config.validate()
        self.rng = np.random.default_rng(self.config.seed)
        self.environment = Environment.from_config(self.config, self.rng)

        traits = self.config.traits()
        nest_x, nest_y = self.environment.nest
        self.ants = [
            Ant.from_traits(nest_x, nest_y, traits)
            for _ in range(self.config.ant_count)
        ]
        log.info(
            "Simulation ready seed=%d ants=%d food=%d",
            self.config.seed,
            len(self.ants),
            len(self.environment.food),
        )

    @property
    def pixel_width(self) -> int:
        """Width of a rendered frame in pixels."""
        return self.config.pixel_width

    @property
    def pixel_height(self) -> int:
        """Height of a rendered frame in pixels."""
        return self.config.pixel_height

    def update(self) -> None:
        """Advance the simulation by exactly one tick."""
        for ant in self.ants:
            ant.update(self.environment, self.rng)
        self.environment.decay_pheromones()
        self.tick += 1

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.update()

    def new_frame(self) -> bytearray:
        """Allocate a zeroed RGBA8 buffer sized for ``render``."""
        return bytearray(frame_length(self.pixel_width, self.pixel_height))

    def render(self, buffer: bytearray | memoryview | np.ndarray) -> None:
        """Draw the current state into an RGBA8 buffer.

        Args:
            buffer: Writable buffer of ``pixel_width * pixel_height * 4``
                bytes.

        Raises:
            ValueError: If the buffer is the wrong size or read-only.
        """
        render_frame(
            self.environment,
            self.ants,
            buffer,
            self.config.scale_x,
            self.config.scale_y,
        )

    def stats(self) -> SimulationStats:
        """Return the current headline numbers."""
        return SimulationStats(
            tick=self.tick,
            food_remaining=len(self.environment.food),
            food_delivered=self.environment.food_delivered,
            ants_carrying=sum(1 for ant in self.ants if ant.carrying_food),
            pheromone_cells=self.environment.pheromones.present_count,
        )
