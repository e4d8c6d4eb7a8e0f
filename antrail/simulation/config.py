"""Config — load simulation parameters from YAML files.

All tunable constants (grid size, food layout, pheromone decay,
foraging thresholds, display scale) live in YAML and are parsed into a
typed dataclass here.  ``validate`` rejects impossible combinations up
front so a bad config never surfaces as a crash mid-run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from antrail.colony.traits import Traits

log = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        grid_width: Number of grid columns.
        grid_height: Number of grid rows.
        scale_x: Pixels per grid cell horizontally when rendering.
        scale_y: Pixels per grid cell vertically when rendering.
        ant_count: Ants spawned at the nest.
        food_count: Total food items requested (split evenly per clump).
        clump_count: Number of food clumps.
        clump_radius: Maximum per-axis offset of food from its clump centre.
        padding: Margin along each edge kept free of food.
        nest_position: Nest cell ``(x, y)``.
        decay_factor: Pheromone multiplier applied every tick.
        decay_threshold: Pheromone intensity at or below which a cell clears.
        follow_threshold: Minimum neighbour intensity a forager will follow.
        alignment_threshold: Minimum cosine between nest-to-ant vector and
            trail direction for a trail to be followed.
        wander_probability: Chance per tick of a random step off-trail.
        random_move_attempts: Tries per random step before giving up.
        memory_size: Depth of each ant's position memory.
        trail_intensity: Pheromone laid per cell on the way home.
        updates_per_render: Ticks advanced per displayed frame.
    """

    seed: int = 42
    grid_width: int = 200
    grid_height: int = 150
    scale_x: int = 4
    scale_y: int = 4
    ant_count: int = 100

    # Food layout
    food_count: int = 600
    clump_count: int = 6
    clump_radius: int = 8
    padding: int = 10
    nest_position: tuple[int, int] = (100, 75)

    # Pheromone decay
    decay_factor: float = 0.995
    decay_threshold: float = 0.01

    # Foraging heuristic
    follow_threshold: float = 0.1
    alignment_threshold: float = 0.75
    wander_probability: float = 0.1
    random_move_attempts: int = 10
    memory_size: int = 3
    trail_intensity: float = 1.0

    updates_per_render: int = 5

    @property
    def pixel_width(self) -> int:
        """Width of a rendered frame in pixels."""
        return self.grid_width * self.scale_x

    @property
    def pixel_height(self) -> int:
        """Height of a rendered frame in pixels."""
        return self.grid_height * self.scale_y

    def traits(self) -> Traits:
        """Return the foraging constants as a Traits instance."""
        return Traits(
            follow_threshold=self.follow_threshold,
            alignment_threshold=self.alignment_threshold,
            wander_probability=self.wander_probability,
            random_move_attempts=self.random_move_attempts,
            memory_size=self.memory_size,
            trail_intensity=self.trail_intensity,
        )

    def validate(self) -> None:
        """Check every field for a usable value.

        Raises:
            ConfigError: Naming the first offending field.
        """
        for name in _INT_FIELDS:
            if not _is_int(getattr(self, name)):
                _fail(name, f"must be an integer, got {getattr(self, name)!r}")
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if not (_is_int(value) or isinstance(value, float)):
                _fail(name, f"must be a number, got {value!r}")
        if not (
            isinstance(self.nest_position, (tuple, list))
            and len(self.nest_position) == 2
            and all(_is_int(v) for v in self.nest_position)
        ):
            _fail("nest_position", "must be an (x, y) pair of integers")

        for name in ("grid_width", "grid_height", "scale_x", "scale_y"):
            if getattr(self, name) < 1:
                _fail(name, "must be >= 1")
        for name in ("ant_count", "food_count", "clump_radius", "padding"):
            if getattr(self, name) < 0:
                _fail(name, "must be >= 0")
        if self.clump_count < 1:
            _fail("clump_count", "must be >= 1")
        if 2 * self.padding >= min(self.grid_width, self.grid_height):
            _fail("padding", "leaves no room for food inside the grid")

        nest_x, nest_y = self.nest_position
        if not (0 <= nest_x < self.grid_width and 0 <= nest_y < self.grid_height):
            _fail("nest_position", f"{self.nest_position} is outside the grid")

        if not 0.0 < self.decay_factor < 1.0:
            _fail("decay_factor", "must be between 0 and 1 (exclusive)")
        if self.decay_threshold <= 0.0:
            _fail("decay_threshold", "must be > 0")
        if self.trail_intensity <= self.decay_threshold:
            _fail("trail_intensity", "must be above decay_threshold")
        if self.follow_threshold < 0.0:
            _fail("follow_threshold", "must be >= 0")
        if not -1.0 <= self.alignment_threshold <= 1.0:
            _fail("alignment_threshold", "must be within [-1, 1]")
        if not 0.0 <= self.wander_probability <= 1.0:
            _fail("wander_probability", "must be within [0, 1]")
        if self.random_move_attempts < 0:
            _fail("random_move_attempts", "must be >= 0")
        if self.memory_size < 1:
            _fail("memory_size", "must be >= 1")
        if self.updates_per_render < 1:
            _fail("updates_per_render", "must be >= 1")

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Keys missing from the file keep their defaults; unknown keys are
        logged and ignored.  The result is not validated here.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigError: If the file is not a YAML mapping.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            msg = f"{path}: expected a mapping at top level"
            raise ConfigError(msg)

        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            log.warning("Ignoring unknown config key %r in %s", key, path)

        kwargs = {key: value for key, value in data.items() if key in known}
        if "nest_position" in kwargs:
            nest = kwargs["nest_position"]
            if not isinstance(nest, (list, tuple)) or len(nest) != 2:
                msg = f"{path}: nest_position must be an [x, y] pair, got {nest!r}"
                raise ConfigError(msg)
            kwargs["nest_position"] = tuple(nest)
        return cls(**kwargs)


_INT_FIELDS = (
    "seed",
    "grid_width",
    "grid_height",
    "scale_x",
    "scale_y",
    "ant_count",
    "food_count",
    "clump_count",
    "clump_radius",
    "padding",
    "random_move_attempts",
    "memory_size",
    "updates_per_render",
)
_FLOAT_FIELDS = (
    "decay_factor",
    "decay_threshold",
    "follow_threshold",
    "alignment_threshold",
    "wander_probability",
    "trail_intensity",
)


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a sensible count
    return isinstance(value, int) and not isinstance(value, bool)


def _fail(name: str, reason: str) -> None:
    msg = f"{name} {reason}"
    raise ConfigError(msg)
