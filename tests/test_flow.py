import numpy as np
import pytest

from grid_state import GridState
from simulation.config import SimulationConfig
from simulation.flow import compute_flow
from simulation.flow_reference import compute_flow_sweep
from tests.helpers import fill_random
from engine import FluidEngine


def _run_flow(grid, config, solver=compute_flow):
    out = np.empty_like(grid.current_mass)
    vx, vy = solver(grid.current_mass, grid.wall, grid.vx, grid.vy, config, out)
    return out, vx, vy


def test_single_cell_spreads_to_both_sides():
    config = SimulationConfig(grid_width=5, grid_height=3)
    grid = GridState(5, 3)
    grid.set_mass(2, 1, 1.0)
    out, vx, vy = _run_flow(grid, config)
    assert out[1, 2] == pytest.approx(0.5)
    assert out[1, 1] == pytest.approx(0.25)
    assert out[1, 3] == pytest.approx(0.25)
    assert vx[1, 2] == pytest.approx(0.0)
    assert vy[1, 2] == pytest.approx(0.0)


def test_side_flows_scaled_to_remaining_mass():
    config = SimulationConfig(grid_width=5, grid_height=3, flow_speed=3.0)
    grid = GridState(5, 3)
    grid.set_mass(2, 1, 1.0)
    out, _, _ = _run_flow(grid, config)
    assert out[1, 1] == pytest.approx(0.5)
    assert out[1, 3] == pytest.approx(0.5)
    assert out[1, 2] == pytest.approx(0.0, abs=1e-12)
    assert out.min() >= 0.0


def test_light_stack_drains_into_lower_cell():
    config = SimulationConfig(grid_width=3, grid_height=4)
    grid = GridState(3, 4)
    grid.set_mass(1, 1, 0.5)
    grid.set_mass(1, 2, 0.5)
    out, _, vy = _run_flow(grid, config)
    assert out[1, 1] == pytest.approx(0.0)
    assert out[2, 1] == pytest.approx(1.0)
    assert vy[1, 1] == pytest.approx(0.25)


def test_compression_band_transfer():
    config = SimulationConfig(grid_width=3, grid_height=4)
    grid = GridState(3, 4)
    grid.set_mass(1, 1, 1.0)
    grid.set_mass(1, 2, 1.0)
    out, _, _ = _run_flow(grid, config)
    assert out[1, 1] == pytest.approx(0.8)
    assert out[2, 1] == pytest.approx(1.2)


def test_velocity_damped_on_active_cells_and_zero_elsewhere():
    config = SimulationConfig(grid_width=5, grid_height=3)
    grid = GridState(5, 3)
    grid.set_mass(1, 1, 0.5)
    grid.set_mass(2, 1, 0.5)
    grid.set_mass(3, 1, 0.5)
    grid.vx[1, 1:4] = 1.0
    grid.vy[1, 1:4] = -1.0
    _, vx, vy = _run_flow(grid, config)
    # Equal neighbours on both sides: the middle cell only damps
    assert vx[1, 2] == pytest.approx(0.98)
    assert vy[1, 2] == pytest.approx(-0.98)
    assert not vx[0, :].any() and not vy[2, :].any()


def test_inputs_are_not_modified(busy_engine):
    grid = busy_engine.grid
    before = [grid.current_mass.copy(), grid.vx.copy(), grid.vy.copy(), grid.wall.copy()]
    _run_flow(grid, busy_engine.config)
    after = [grid.current_mass, grid.vx, grid.vy, grid.wall]
    for old, new in zip(before, after):
        np.testing.assert_array_equal(old, new)


def test_flow_conserves_mass(busy_engine):
    grid = busy_engine.grid
    out, _, _ = _run_flow(grid, busy_engine.config)
    assert out.sum() == pytest.approx(grid.current_mass.sum(), rel=1e-12)
    assert out.min() >= 0.0
    assert not out[grid.wall].any()


@pytest.mark.parametrize("seed", [1, 2, 3])
@pytest.mark.parametrize("flow_speed", [0.1, 0.5, 1.0])
def test_vectorized_matches_loop_sweep(seed, flow_speed):
    engine = FluidEngine(SimulationConfig(grid_width=24, grid_height=16, flow_speed=flow_speed))
    fill_random(engine, seed=seed, walls=20)
    grid = engine.grid
    fast, fast_vx, fast_vy = _run_flow(grid, engine.config)
    loop, loop_vx, loop_vy = _run_flow(grid, engine.config, compute_flow_sweep)
    np.testing.assert_allclose(fast, loop, rtol=0, atol=1e-12)
    np.testing.assert_allclose(fast_vx, loop_vx, rtol=0, atol=1e-12)
    np.testing.assert_allclose(fast_vy, loop_vy, rtol=0, atol=1e-12)


def test_empty_cells_below_threshold_stay_put():
    config = SimulationConfig(grid_width=5, grid_height=4)
    grid = GridState(5, 4)
    grid.set_mass(2, 1, 0.0005)
    out, _, _ = _run_flow(grid, config)
    assert out[1, 2] == 0.0005
    assert out.sum() == pytest.approx(0.0005)
