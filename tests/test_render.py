import numpy as np
import pytest

from engine import FluidEngine
from pygame_runner import StepClock
from render.colors import mass_to_rgb, velocity_tint, water_gradient
from render.config import COLOR_BG, COLOR_WALL, COLOR_WATER_DEEP, COLOR_WATER_SPRAY
from simulation.config import SimulationConfig


def test_gradient_stops():
    colors = water_gradient(np.array([0.0, 0.5, 2.5, 4.0]))
    np.testing.assert_allclose(colors[0], COLOR_BG)
    np.testing.assert_allclose(colors[1], COLOR_WATER_SPRAY)
    np.testing.assert_allclose(colors[2], COLOR_WATER_DEEP)
    np.testing.assert_allclose(colors[3], COLOR_WATER_DEEP)


def test_slow_cells_get_no_tint():
    tint = velocity_tint(np.array([0.05, 1.0]), np.array([0.0, 0.0]), tick=0)
    assert not tint[0].any()
    assert tint[1].any()


def test_mass_to_rgb_colors_walls_water_and_background():
    engine = FluidEngine(SimulationConfig(grid_width=10, grid_height=8))
    engine.grid.set_mass(4, 6, 1.5)
    rgb = mass_to_rgb(engine.snapshot(), tick=0)
    assert rgb.shape == (8, 10, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[0, 0]) == COLOR_WALL
    assert tuple(rgb[3, 3]) == COLOR_BG
    assert tuple(rgb[6, 4]) != COLOR_BG


@pytest.mark.parametrize("frames,expected", [([0.5], [2]), ([0.125, 0.125], [0, 1])])
def test_step_clock_accumulates(frames, expected):
    clock = StepClock(interval=0.25, max_steps=4)
    assert [clock.advance(dt) for dt in frames] == expected


def test_step_clock_drops_backlog():
    clock = StepClock(interval=0.25, max_steps=4)
    assert clock.advance(5.0) == 4
    assert clock.accumulated == 0.0
    assert clock.advance(0.25) == 1
