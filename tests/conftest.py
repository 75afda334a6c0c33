import pytest

from engine import FluidEngine
from simulation.config import SimulationConfig
from tests.helpers import fill_random


@pytest.fixture
def small_config():
    return SimulationConfig(grid_width=20, grid_height=12)


@pytest.fixture
def engine(small_config):
    return FluidEngine(small_config)


@pytest.fixture
def busy_engine():
    """Engine on a 30x20 grid with obstacles, water and velocities."""
    eng = FluidEngine(SimulationConfig(grid_width=30, grid_height=20))
    fill_random(eng)
    return eng
