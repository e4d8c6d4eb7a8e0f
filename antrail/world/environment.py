"""Environment — everything the ants share.

Owns the pheromone field, the list of food items and the fixed nest.
A single Environment is handed to every ant in turn during a tick, so
each ant sees the pickups and trail deposits of the ants before it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antrail.pheromones.fields import Direction, PheromoneField
from antrail.world.food import Position, scatter_food

if TYPE_CHECKING:
    from numpy.random import Generator

    from antrail.simulation.config import SimulationConfig

log = logging.getLogger(__name__)


@dataclass
class Environment:
    """Grid-wide simulation state and spatial queries.

    Attributes:
        width: Grid columns.
        height: Grid rows.
        nest: Fixed nest position (spawn and drop-off point).
        food: Food item positions, in placement order.
        pheromones: Trail pheromone field.
        food_delivered: Number of food items carried back to the nest.
        decay_factor: Per-tick pheromone multiplier.
        decay_threshold: Pheromone intensity at or below which a cell clears.
    """

    width: int
    height: int
    nest: Position
    food: list[Position] = field(default_factory=list)
    pheromones: PheromoneField = field(init=False, repr=False)
    food_delivered: int = 0
    decay_factor: float = 0.995
    decay_threshold: float = 0.01

    def __post_init__(self) -> None:
        """Create the pheromone field to match the grid.

        Raises:
            ValueError: If the nest lies outside the grid.
        """
        if not self.in_bounds(*self.nest):
            msg = f"Nest {self.nest} outside {self.width}x{self.height} grid"
            raise ValueError(msg)
        self.pheromones = PheromoneField(
            width=self.width,
            height=self.height,
            decay_factor=self.decay_factor,
            threshold=self.decay_threshold,
        )

    @classmethod
    def from_config(cls, config: SimulationConfig, rng: Generator) -> Environment:
        """Build an environment with clumped food from a configuration.

        Args:
            config: Validated simulation configuration.
            rng: Seeded random generator used for food placement.

        Returns:
            A fresh Environment with no pheromone and nothing delivered.
        """
        food = scatter_food(
            rng,
            config.grid_width,
            config.grid_height,
            food_count=config.food_count,
            clump_count=config.clump_count,
            clump_radius=config.clump_radius,
            padding=config.padding,
        )
        env = cls(
            width=config.grid_width,
            height=config.grid_height,
            nest=config.nest_position,
            food=food,
            decay_factor=config.decay_factor,
            decay_threshold=config.decay_threshold,
        )
        log.info(
            "Environment created size=%dx%d nest=%s food=%d",
            env.width,
            env.height,
            env.nest,
            len(env.food),
        )
        return env

    # -- Spatial helpers --

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies on the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def clamp(self, x: int, y: int) -> Position:
        """Clamp a coordinate pair onto the grid (no wrapping)."""
        return (
            max(0, min(self.width - 1, x)),
            max(0, min(self.height - 1, y)),
        )

    def at_nest(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` is the nest cell."""
        return (x, y) == self.nest

    # -- Food --

    def find_food_near(self, x: int, y: int) -> int | None:
        """Return the index of the first food item exactly at ``(x, y)``.

        "Near" means on the same cell; neighbouring cells never match.
        """
        for index, pos in enumerate(self.food):
            if pos == (x, y):
                return index
        return None

    def remove_food(self, index: int) -> Position:
        """Remove one food item and return its position.

        Raises:
            IndexError: If ``index`` does not refer to a food item.
        """
        return self.food.pop(index)

    def add_food_to_nest(self) -> None:
        """Record one food item delivered to the nest."""
        self.food_delivered += 1

    # -- Pheromone accessors --

    def deposit_pheromone(
        self,
        x: int,
        y: int,
        direction: Direction,
        intensity: float,
    ) -> None:
        """Replace the trail mark at ``(x, y)`` (no-op off-grid)."""
        self.pheromones.deposit(x, y, direction, intensity)

    def has_significant_pheromone(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` holds pheromone above the threshold."""
        return self.pheromones.has_significant(x, y)

    def pheromone_direction(self, x: int, y: int) -> Direction | None:
        """Return the trail direction at ``(x, y)``, or None."""
        return self.pheromones.direction_at(x, y)

    def decay_pheromones(self) -> None:
        """Fade the whole pheromone field by one tick."""
        self.pheromones.decay_all()
