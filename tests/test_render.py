"""Tests for antrail.ui.raster and Simulation.render."""

import numpy as np
import pytest

from antrail.colony.ant import Ant, Task
from antrail.simulation.config import SimulationConfig
from antrail.simulation.engine import Simulation
from antrail.ui import raster
from antrail.world.environment import Environment


def _pixel(frame: bytearray, width: int, x: int, y: int) -> tuple[int, ...]:
    idx = (y * width + x) * 4
    return tuple(frame[idx : idx + 4])


@pytest.fixture
def sim() -> Simulation:
    """A 6x4 grid at 2x3 pixels per cell, one ant, no food."""
    cfg = SimulationConfig(
        grid_width=6,
        grid_height=4,
        scale_x=2,
        scale_y=3,
        ant_count=1,
        food_count=0,
        clump_count=1,
        padding=0,
        nest_position=(0, 0),
    )
    return Simulation(config=cfg)


class TestCompose:
    """Tests for the grid-resolution composition and draw order."""

    def test_background_is_opaque_black(self) -> None:
        env = Environment(width=3, height=2, nest=(0, 0))
        image = raster.compose(env, [])
        assert image.shape == (2, 3, 4)
        assert tuple(image[1, 2]) == (0, 0, 0, 255)

    def test_food_and_nest_colours(self) -> None:
        env = Environment(width=3, height=2, nest=(0, 0), food=[(2, 1)])
        image = raster.compose(env, [])
        assert tuple(image[1, 2, :3]) == (0, 0, 255)
        assert tuple(image[0, 0, :3]) == (255, 101, 0)

    def test_nest_drawn_over_food(self) -> None:
        env = Environment(width=3, height=2, nest=(1, 1), food=[(1, 1)])
        image = raster.compose(env, [])
        assert tuple(image[1, 1, :3]) == (255, 101, 0)

    def test_full_pheromone_hides_what_is_below(self) -> None:
        env = Environment(width=3, height=2, nest=(0, 0), food=[(1, 0)])
        env.deposit_pheromone(1, 0, (1.0, 0.0), 1.0)
        image = raster.compose(env, [])
        assert tuple(image[0, 1, :3]) == (128, 0, 128)

    def test_pheromone_blends_by_intensity(self) -> None:
        env = Environment(width=3, height=2, nest=(0, 0), food=[(1, 0)])
        env.deposit_pheromone(1, 0, (1.0, 0.0), 0.5)
        image = raster.compose(env, [])
        assert tuple(image[0, 1, :3]) == (64, 0, 192)

    def test_ants_drawn_last(self) -> None:
        env = Environment(width=3, height=2, nest=(0, 0))
        env.deposit_pheromone(0, 0, (1.0, 0.0), 1.0)
        ants = [Ant(x=0, y=0), Ant(x=2, y=1, task=Task.RETURNING)]
        image = raster.compose(env, ants)
        assert tuple(image[0, 0, :3]) == (0, 255, 0)
        assert tuple(image[1, 2, :3]) == (255, 0, 0)


class TestSimulationRender:
    """Tests for rendering into caller-provided buffers."""

    def test_new_frame_size(self, sim: Simulation) -> None:
        assert len(sim.new_frame()) == 12 * 12 * 4

    def test_render_scales_cells(self, sim: Simulation) -> None:
        sim.environment.food = [(3, 2)]
        frame = sim.new_frame()
        sim.render(frame)
        width = sim.pixel_width
        # Cell (3, 2) covers pixels x 6..7, y 6..8
        for px in (6, 7):
            for py in (6, 7, 8):
                assert _pixel(frame, width, px, py) == (0, 0, 255, 255)
        assert _pixel(frame, width, 8, 6) == (0, 0, 0, 255)
        assert _pixel(frame, width, 6, 9) == (0, 0, 0, 255)
        # Ant on the nest at (0, 0)
        assert _pixel(frame, width, 1, 2) == (0, 255, 0, 255)

    def test_render_into_numpy_array(self, sim: Simulation) -> None:
        frame = np.zeros((sim.pixel_height, sim.pixel_width, 4), dtype=np.uint8)
        sim.render(frame)
        assert tuple(frame[0, 0]) == (0, 255, 0, 255)
        assert tuple(frame[-1, -1]) == (0, 0, 0, 255)

    def test_render_into_memoryview(self, sim: Simulation) -> None:
        frame = sim.new_frame()
        sim.render(memoryview(frame))
        assert _pixel(frame, sim.pixel_width, 0, 0) == (0, 255, 0, 255)

    def test_render_is_repeatable(self, sim: Simulation) -> None:
        first = sim.new_frame()
        second = sim.new_frame()
        sim.render(first)
        sim.render(second)
        assert first == second

    @pytest.mark.parametrize("delta", [-4, -1, 1, 4])
    def test_wrong_size_rejected(self, sim: Simulation, delta: int) -> None:
        frame = bytearray(len(sim.new_frame()) + delta)
        with pytest.raises(ValueError, match="expected"):
            sim.render(frame)
        assert not any(frame)

    def test_read_only_rejected(self, sim: Simulation) -> None:
        with pytest.raises(ValueError, match="read-only"):
            sim.render(bytes(len(sim.new_frame())))

    def test_wrong_dtype_rejected(self, sim: Simulation) -> None:
        frame = np.zeros(sim.pixel_width * sim.pixel_height * 4, dtype=np.int32)
        with pytest.raises(ValueError, match="uint8"):
            sim.render(frame)
