import numpy as np
import pytest

from grid_state import CellView, GridState, InvalidDimension


def test_reset_builds_border_and_zeroes_arrays():
    grid = GridState(6, 4)
    assert grid.shape == (4, 6)
    assert grid.wall[0, :].all() and grid.wall[-1, :].all()
    assert grid.wall[:, 0].all() and grid.wall[:, -1].all()
    assert not grid.wall[1:-1, 1:-1].any()
    assert grid.total_mass() == 0.0
    assert not grid.vx.any() and not grid.vy.any()


@pytest.mark.parametrize("width,height", [(2, 10), (10, 2), (0, 0)])
def test_too_small_grid_is_rejected(width, height):
    with pytest.raises(InvalidDimension):
        GridState(width, height)


def test_invalid_dimension_is_a_value_error():
    assert issubclass(InvalidDimension, ValueError)


def test_reset_discards_previous_contents():
    grid = GridState(5, 5)
    grid.set_mass(2, 2, 1.0)
    grid.set_wall(1, 1, True)
    grid.reset(7, 3)
    assert grid.shape == (3, 7)
    assert grid.total_mass() == 0.0
    assert not grid.wall[1, 1:-1].any()


def test_set_mass_clamps_and_skips_walls():
    grid = GridState(5, 5)
    grid.set_mass(2, 2, -3.0)
    assert grid.get(2, 2).mass == 0.0
    grid.set_mass(0, 2, 1.0)
    assert grid.get(0, 2).mass == 0.0
    grid.set_mass(99, 99, 1.0)
    assert grid.total_mass() == 0.0


def test_set_wall_clears_cell():
    grid = GridState(5, 5)
    grid.set_mass(2, 2, 1.5)
    grid.vx[2, 2] = 0.4
    grid.vy[2, 2] = -0.2
    grid.set_wall(2, 2, True)
    assert grid.get(2, 2) == CellView(0.0, 0.0, 0.0, True)
    grid.set_wall(2, 2, False)
    assert not grid.get(2, 2).is_wall


def test_get_out_of_range_raises():
    grid = GridState(5, 5)
    with pytest.raises(IndexError):
        grid.get(5, 0)
    with pytest.raises(IndexError):
        grid.get(-1, 2)


def test_linear_index_is_row_major():
    grid = GridState(7, 5)
    grid.set_mass(3, 2, 0.75)
    assert grid.current_mass.ravel()[2 * 7 + 3] == 0.75


def test_swap_flips_buffer_roles():
    grid = GridState(5, 5)
    current = grid.current_mass
    following = grid.next_mass
    grid.swap_mass_buffers()
    assert grid.current_mass is following
    assert grid.next_mass is current


def test_snapshot_is_a_copy():
    grid = GridState(5, 5)
    grid.set_mass(2, 2, 1.0)
    snap = grid.snapshot(tick=3)
    grid.set_mass(2, 2, 4.0)
    assert snap.tick == 3
    assert snap.cell(2, 2).mass == 1.0
    assert snap.total_mass() == 1.0
    assert (snap.width, snap.height) == (5, 5)
    np.testing.assert_array_equal(snap.wall, grid.wall)
