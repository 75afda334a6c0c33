import numpy as np
import pytest

from brushes import BRUSH_WALL, BrushKind, BrushPalette, Edit, apply_edit
from config import BRUSH_SIZES
from grid_state import GridState


@pytest.fixture
def grid():
    return GridState(12, 10)


def test_water_brush_covers_plus_shape(grid):
    covered = apply_edit(grid, Edit(5, 5, 1, BrushKind.ADD_WATER, 0.5))
    assert covered == 5
    assert grid.total_mass() == pytest.approx(2.5)
    for x, y in [(5, 5), (4, 5), (6, 5), (5, 4), (5, 6)]:
        assert grid.get(x, y).mass == 0.5
    assert grid.get(4, 4).mass == 0.0


def test_water_brush_caps_cell_mass(grid):
    apply_edit(grid, Edit(5, 5, 0, BrushKind.ADD_WATER, 4.0))
    apply_edit(grid, Edit(5, 5, 0, BrushKind.ADD_WATER, 4.0))
    assert grid.get(5, 5).mass == 5.0


def test_water_brush_skips_walls(grid):
    grid.set_wall(5, 5, True)
    apply_edit(grid, Edit(5, 5, 1, BrushKind.ADD_WATER, 1.0))
    assert grid.get(5, 5).mass == 0.0
    assert grid.total_mass() == pytest.approx(4.0)


def test_wall_brush_clears_water_and_velocity(grid):
    apply_edit(grid, Edit(5, 5, 2, BrushKind.ADD_WATER, 1.0))
    grid.vx[:] = 0.3
    apply_edit(grid, Edit(5, 5, 1, BrushKind.ADD_WALL))
    cell = grid.get(5, 5)
    assert cell.is_wall and cell.mass == 0.0 and cell.vx == 0.0 and cell.vy == 0.0
    assert grid.get(5, 7).mass == 1.0


def test_eraser_removes_walls_and_water(grid):
    apply_edit(grid, Edit(5, 5, 0, BrushKind.ADD_WALL))
    apply_edit(grid, Edit(6, 5, 0, BrushKind.ADD_WATER, 1.0))
    apply_edit(grid, Edit(5, 5, 1, BrushKind.ERASE))
    assert not grid.get(5, 5).is_wall
    assert grid.get(6, 5).mass == 0.0


def test_drain_keeps_walls(grid):
    apply_edit(grid, Edit(5, 5, 0, BrushKind.ADD_WALL))
    apply_edit(grid, Edit(5, 5, 3, BrushKind.ADD_WATER, 1.0))
    walls_before = grid.wall.copy()
    apply_edit(grid, Edit(5, 5, 2, BrushKind.DRAIN))
    np.testing.assert_array_equal(grid.wall, walls_before)
    assert grid.get(4, 4).mass == 0.0
    assert grid.get(5, 8).mass == 1.0


def test_border_is_never_edited(grid):
    covered = apply_edit(grid, Edit(0, 0, 3, BrushKind.ERASE))
    assert covered > 0
    assert grid.wall[0, :].all() and grid.wall[:, 0].all()
    apply_edit(grid, Edit(0, 5, 2, BrushKind.ADD_WATER, 1.0))
    assert grid.current_mass[:, 0].sum() == 0.0


def test_edit_outside_grid_is_dropped(grid):
    assert apply_edit(grid, Edit(100, 100, 2, BrushKind.ADD_WALL)) == 0
    assert not grid.wall[1:-1, 1:-1].any()


def test_palette_selection_and_size():
    palette = BrushPalette()
    assert palette.get_selected().kind is BrushKind.ADD_WATER
    assert palette.select_by_number(2)
    assert palette.get_selected() is BRUSH_WALL
    assert not palette.select_by_number(9)
    assert palette.get_selected() is BRUSH_WALL

    for _ in range(10):
        palette.cycle_size(-1)
    assert palette.size == BRUSH_SIZES[0]
    for _ in range(10):
        palette.cycle_size(1)
    assert palette.size == BRUSH_SIZES[-1]

    edit = palette.make_edit(3, 4)
    assert edit == Edit(3, 4, BRUSH_SIZES[-1], BrushKind.ADD_WALL, BRUSH_WALL.amount)
