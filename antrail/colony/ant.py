"""Ant -- individual forager with a two-state decision loop.

An ant is either FORAGING (searching for food) or RETURNING (carrying a
food item home).  Behaviour per tick:

- **Foraging**: pick up food if standing on it; otherwise follow a
  trail if one lies under the ant; otherwise wander with a small
  probability; otherwise stay put.  At most one cell per tick.
- **Returning**: walk straight home in a single tick, laying a trail
  mark on every cell entered.  Every mark points along the nest-to-food
  vector, so the trail tells later foragers which way leads *out*.
- **Trail following**: among the eight neighbours, only cells whose
  trail points the same way as the ant's own offset from the nest are
  considered; the strongest one wins.
- **Short memory**: the last few cells visited are avoided so ants do
  not immediately step back where they came from.

Only returning ants deposit pheromone.  Foragers consume trails but
never reinforce them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from antrail.colony.memory import PositionMemory
from antrail.colony.traits import Traits

if TYPE_CHECKING:
    from numpy.random import Generator

    from antrail.pheromones.fields import Direction
    from antrail.world.environment import Environment
    from antrail.world.food import Position

log = logging.getLogger(__name__)

# Moore neighbourhood, column offset outer, row offset inner
_NEIGHBOUR_OFFSETS = [
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx != 0 or dy != 0
]


class Task(Enum):
    """What an ant is currently doing."""

    FORAGING = auto()
    RETURNING = auto()


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_aligned(heading: Direction, trail: Direction, threshold: float) -> bool:
    """Return True if two vectors point the same way closely enough.

    Compares the cosine of the angle between ``heading`` and ``trail``
    against ``threshold``.  A zero-length vector has no direction and is
    never aligned.
    """
    h_len = math.hypot(*heading)
    t_len = math.hypot(*trail)
    if h_len == 0.0 or t_len == 0.0:
        return False
    cosine = (heading[0] * trail[0] + heading[1] * trail[1]) / (h_len * t_len)
    return cosine > threshold


@dataclass
class Ant:
    """A single ant agent.

    Attributes:
        x: Current column.
        y: Current row.
        task: FORAGING or RETURNING.
        traits: Shared behaviour constants.
        memory: Recently visited positions, pre-filled with the spawn cell.
    """

    x: int
    y: int
    task: Task = Task.FORAGING
    traits: Traits = field(default_factory=Traits, repr=False)
    memory: PositionMemory = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Fill the position memory with the starting cell."""
        self.memory = PositionMemory((self.x, self.y), self.traits.memory_size)

    @classmethod
    def from_traits(cls, x: int, y: int, traits: Traits) -> Ant:
        """Create a foraging ant at ``(x, y)`` sharing ``traits``."""
        return cls(x=x, y=y, task=Task.FORAGING, traits=traits)

    @property
    def position(self) -> Position:
        """Current ``(x, y)``."""
        return (self.x, self.y)

    @property
    def carrying_food(self) -> bool:
        """True while the ant is taking a food item home."""
        return self.task is Task.RETURNING

    def update(self, environment: Environment, rng: Generator) -> int:
        """Perform one tick of decision-making and movement.

        Args:
            environment: Shared grid state, mutated in place.
            rng: Seeded random generator.

        Returns:
            Number of food items delivered to the nest this tick (0 or 1).
        """
        match self.task:
            case Task.FORAGING:
                return self._forage(environment, rng)
            case Task.RETURNING:
                return self.return_to_nest(environment)

    # -- State handlers --

    def _forage(self, environment: Environment, rng: Generator) -> int:
        """FORAGING: pick up, follow a trail, wander, or wait.

        Picking up ends the tick for a forager.  If the food lay on the
        nest cell the return trip is empty and the item is delivered at
        once.
        """
        index = environment.find_food_near(self.x, self.y)
        if index is not None:
            environment.remove_food(index)
            self.task = Task.RETURNING
            log.debug("ant picked up food at %s", self.position)
            if environment.at_nest(self.x, self.y):
                return self._deliver(environment)
            return 0

        if environment.has_significant_pheromone(self.x, self.y):
            self.move_toward_food(environment, rng)
        elif rng.random() < self.traits.wander_probability:
            self.move_randomly(environment, rng)
        return 0

    def return_to_nest(self, environment: Environment) -> int:
        """RETURNING: walk all the way home, laying trail, then deliver.

        The trail direction is the nest-to-ant vector at the start of the
        walk.  x and y each move one cell toward the nest per step, so
        the walk takes exactly the Chebyshev distance in steps and lays
        one mark per step (the nest cell included).

        Returns:
            1, the food item handed over at the nest.
        """
        direction = self._direction_from_nest(environment)
        nest_x, nest_y = environment.nest
        while (self.x, self.y) != (nest_x, nest_y):
            self._step_to(
                self.x + _sign(nest_x - self.x),
                self.y + _sign(nest_y - self.y),
            )
            environment.deposit_pheromone(
                self.x,
                self.y,
                direction,
                self.traits.trail_intensity,
            )
        return self._deliver(environment)

    def _deliver(self, environment: Environment) -> int:
        environment.add_food_to_nest()
        self.task = Task.FORAGING
        log.debug("ant delivered food, total=%d", environment.food_delivered)
        return 1

    # -- Movement --

    def move_toward_food(self, environment: Environment, rng: Generator) -> bool:
        """Step onto the strongest outbound trail cell next to the ant.

        A neighbour qualifies when its intensity exceeds
        ``follow_threshold``, it is not in memory, and its trail points
        the same way as the ant's offset from the nest.  Neighbours are
        clamped to the grid, so edge ants may examine a cell twice.  The
        first cell found wins ties.  With no candidate the ant wanders.

        Returns:
            True if the ant moved.
        """
        heading = self._direction_from_nest(environment)
        trails = environment.pheromones

        best: Position | None = None
        best_intensity = 0.0
        for dx, dy in _NEIGHBOUR_OFFSETS:
            nx, ny = environment.clamp(self.x + dx, self.y + dy)
            cell = trails.read(nx, ny)
            if cell is None:
                continue
            intensity, trail = cell
            if intensity <= self.traits.follow_threshold:
                continue
            if (nx, ny) in self.memory:
                continue
            if not is_aligned(heading, trail, self.traits.alignment_threshold):
                continue
            if best is None or intensity > best_intensity:
                best = (nx, ny)
                best_intensity = intensity

        if best is None:
            return self.move_randomly(environment, rng)
        self._step_to(*best)
        return True

    def move_randomly(self, environment: Environment, rng: Generator) -> bool:
        """Try a few random one-cell steps, taking the first unremembered one.

        Each attempt draws a delta from ``{-1, 0, 1}`` per axis (standing
        still included) and clamps it to the grid.

        Returns:
            True if the ant moved, False if every attempt hit memory.
        """
        for _ in range(self.traits.random_move_attempts):
            dx = int(rng.integers(-1, 2))
            dy = int(rng.integers(-1, 2))
            nx, ny = environment.clamp(self.x + dx, self.y + dy)
            if (nx, ny) not in self.memory:
                self._step_to(nx, ny)
                return True
        return False

    def _step_to(self, x: int, y: int) -> None:
        """Move to a cell and remember it."""
        self.x, self.y = x, y
        self.memory.push((x, y))

    def _direction_from_nest(self, environment: Environment) -> Direction:
        nest_x, nest_y = environment.nest
        return (float(self.x - nest_x), float(self.y - nest_y))
