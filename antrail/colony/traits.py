"""Traits — the fixed constants of the foraging heuristic.

Every ant in a run shares one Traits instance built from the simulation
config.  The values tune the heuristic; they do not change its shape.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Traits:
    """Behaviour constants shared by all ants.

    Attributes:
        follow_threshold: Minimum neighbour intensity worth following.
        alignment_threshold: Minimum cosine between the nest-to-ant
            vector and a trail's direction for the trail to be followed.
        wander_probability: Chance per tick that an ant with no trail
            under it takes a random step.
        random_move_attempts: Tries at finding an unremembered cell
            before a random step gives up.
        memory_size: Depth of the recently-visited position ring.
        trail_intensity: Pheromone laid on each cell of a return walk.
    """

    follow_threshold: float = 0.1
    alignment_threshold: float = 0.75
    wander_probability: float = 0.1
    random_move_attempts: int = 10
    memory_size: int = 3
    trail_intensity: float = 1.0
