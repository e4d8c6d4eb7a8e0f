"""Decay logic for the pheromone field.

Operates on the raw NumPy arrays inside ``PheromoneField``.  Kept apart
from ``fields.py`` so the decay rule can change without touching the
storage layout.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antrail.pheromones.fields import PheromoneField


def decay(field: PheromoneField) -> None:
    """Fade every trail mark by the field's decay factor.

    Present cells are multiplied by ``decay_factor``; any cell that ends
    at or below ``threshold`` is cleared, direction included.  Empty
    cells stay at exactly 0.0.  Directions of surviving cells are left
    untouched.

    Args:
        field: The pheromone field to decay in place.
    """
    grid = field.intensity
    grid *= field.decay_factor
    expired = grid <= field.threshold
    grid[expired] = 0.0
    field.direction[expired] = 0.0


def ticks_until_vanished(
    intensity: float,
    decay_factor: float,
    threshold: float,
) -> int:
    """Return how many decay ticks a fresh deposit survives.

    A deposit of ``intensity`` is present after ``n - 1`` ticks and
    absent after ``n`` ticks, where ``n`` is the value returned.

    Args:
        intensity: Deposited concentration.
        decay_factor: Per-tick multiplier (0 < factor < 1).
        threshold: Clearing threshold.

    Returns:
        ``ceil(log(threshold / intensity) / log(decay_factor))``, or 0
        if the deposit would never have been stored.
    """
    if intensity <= threshold:
        return 0
    return math.ceil(math.log(threshold / intensity) / math.log(decay_factor))
