"""Shared fixtures for the antrail test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from antrail.pheromones.fields import PheromoneField
from antrail.simulation.config import SimulationConfig
from antrail.world.environment import Environment


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_field() -> PheromoneField:
    """An 8x8 pheromone field with default decay."""
    return PheromoneField(width=8, height=8)


@pytest.fixture
def small_env() -> Environment:
    """A 10x10 environment with the nest at (5, 5) and no food."""
    return Environment(width=10, height=10, nest=(5, 5))


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def tiny_config() -> SimulationConfig:
    """A small, fast config: 20x20 grid, 10 ants, 40 food."""
    return SimulationConfig(
        seed=777,
        grid_width=20,
        grid_height=20,
        scale_x=2,
        scale_y=3,
        ant_count=10,
        food_count=40,
        clump_count=2,
        clump_radius=2,
        padding=3,
        nest_position=(10, 10),
    )
