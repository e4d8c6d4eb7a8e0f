"""PheromoneField — the shared trail grid.

Each cell is either empty or holds an ``(intensity, direction)`` pair.
Intensities live in one 2D NumPy array and directions in a second
``(height, width, 2)`` array; an intensity of ``0.0`` marks an empty
cell.  A stored intensity is always above ``threshold``, so "has
pheromone" is a single comparison.

Deposits replace whatever the cell held (freshest trail wins).  Decay
is delegated to ``decay.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from antrail.pheromones.decay import decay

Direction = tuple[float, float]


@dataclass
class PheromoneField:
    """Trail pheromone for the whole grid.

    Attributes:
        width: Grid columns.
        height: Grid rows.
        decay_factor: Multiplier applied to every intensity per tick.
        threshold: Intensities at or below this are cleared.
        intensity: Concentration per cell (0.0 = empty).
        direction: Trail direction vector per cell.
    """

    width: int
    height: int
    decay_factor: float = 0.995
    threshold: float = 0.01
    intensity: NDArray[np.float64] = field(init=False, repr=False)
    direction: NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate empty grids."""
        self.intensity = np.zeros((self.height, self.width), dtype=np.float64)
        self.direction = np.zeros((self.height, self.width, 2), dtype=np.float64)

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies on the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def deposit(
        self,
        x: int,
        y: int,
        direction: Direction,
        intensity: float,
    ) -> None:
        """Replace the cell at ``(x, y)`` with a new trail mark.

        Out-of-bounds coordinates are ignored.  An intensity at or below
        the threshold leaves the cell empty.

        Args:
            x: Column index.
            y: Row index.
            direction: Trail direction vector.
            intensity: New concentration for the cell.
        """
        if not self.in_bounds(x, y):
            return
        if intensity <= self.threshold:
            self.intensity[y, x] = 0.0
            self.direction[y, x] = 0.0
            return
        self.intensity[y, x] = intensity
        self.direction[y, x] = direction

    def read(self, x: int, y: int) -> tuple[float, Direction] | None:
        """Return ``(intensity, direction)`` at a cell, or None if empty."""
        if not self.in_bounds(x, y) or self.intensity[y, x] <= 0.0:
            return None
        dx, dy = self.direction[y, x]
        return float(self.intensity[y, x]), (float(dx), float(dy))

    def intensity_at(self, x: int, y: int) -> float:
        """Return the concentration at a cell (0.0 if empty or off-grid)."""
        if not self.in_bounds(x, y):
            return 0.0
        return float(self.intensity[y, x])

    def direction_at(self, x: int, y: int) -> Direction | None:
        """Return the trail direction at a cell, or None if empty."""
        cell = self.read(x, y)
        return None if cell is None else cell[1]

    def has_significant(self, x: int, y: int) -> bool:
        """Return True if the cell holds pheromone above the threshold."""
        return self.intensity_at(x, y) > self.threshold

    def decay_all(self) -> None:
        """Run one tick of decay over the whole grid."""
        decay(self)

    def clear(self) -> None:
        """Empty every cell."""
        self.intensity.fill(0.0)
        self.direction.fill(0.0)

    @property
    def present(self) -> NDArray[np.bool_]:
        """Boolean mask of non-empty cells."""
        return self.intensity > 0.0

    @property
    def present_count(self) -> int:
        """Number of non-empty cells."""
        return int(np.count_nonzero(self.intensity))
