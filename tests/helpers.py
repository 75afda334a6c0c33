"""Grid setup shared by several test modules."""
import numpy as np

from brushes import BrushKind
from engine import FluidEngine


def fill_random(engine: FluidEngine, seed: int = 7, walls: int = 12) -> None:
    """Scatter interior walls and random water over an engine's grid."""
    rng = np.random.default_rng(seed)
    grid = engine.grid
    for _ in range(walls):
        x = int(rng.integers(1, grid.width - 1))
        y = int(rng.integers(1, grid.height - 1))
        engine.apply_edit(x, y, 0, BrushKind.ADD_WALL)
    mass = grid.current_mass
    open_cells = ~grid.wall
    count = int(np.count_nonzero(open_cells))
    mass[open_cells] = rng.uniform(0.0, 2.5, size=count)
    grid.vx[open_cells] = rng.uniform(-1.0, 1.0, size=count)
    grid.vy[open_cells] = rng.uniform(-1.0, 1.0, size=count)
