"""Food placement — clumped scatter of food items across the grid.

Food is not spread uniformly: a handful of clump centres are chosen and
each receives an equal share of the items, jittered around the centre.
This gives the colony concentrated sources worth laying trails to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

Position = tuple[int, int]


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def scatter_food(
    rng: Generator,
    width: int,
    height: int,
    *,
    food_count: int,
    clump_count: int,
    clump_radius: int,
    padding: int,
) -> list[Position]:
    """Place food items in clumps around random centres.

    Centres are drawn uniformly from ``[padding, dim - padding)``.  Each
    centre gets ``food_count // clump_count`` items offset by a random
    vector within ``±clump_radius`` and clamped back into the padded
    area, so the remainder of the integer division is never placed.

    Args:
        rng: Seeded random generator.
        width: Grid columns.
        height: Grid rows.
        food_count: Total items requested.
        clump_count: Number of clumps (must be > 0).
        clump_radius: Maximum offset from a clump centre per axis.
        padding: Margin kept free of food along every edge.

    Returns:
        Food positions in placement order (duplicates allowed).
    """
    per_clump = food_count // clump_count
    max_x = width - padding - 1
    max_y = height - padding - 1

    food: list[Position] = []
    for _ in range(clump_count):
        cx = int(rng.integers(padding, width - padding))
        cy = int(rng.integers(padding, height - padding))
        for _ in range(per_clump):
            dx = int(rng.integers(-clump_radius, clump_radius + 1))
            dy = int(rng.integers(-clump_radius, clump_radius + 1))
            food.append(
                (_clamp(cx + dx, padding, max_x), _clamp(cy + dy, padding, max_y)),
            )
    return food
