"""
emitter.py - Continuous water source for fluxgrid

A fixed band of cells just below the top wall that receives mass and a
downward velocity seed at the start of every tick while enabled.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import numpy as np

from simulation.config import (
    EMITTER_HALF_WIDTH,
    EMITTER_MASS_RATE,
    EMITTER_ROW,
    EMITTER_VELOCITY,
    MAX_CELL_MASS,
)
from utils import band_columns

if TYPE_CHECKING:
    from grid_state import GridState


@dataclass
class AutoEmitter:
    """Scripted injection into a centred band of cells."""
    enabled: bool = False
    mass_rate: float = EMITTER_MASS_RATE
    velocity: float = EMITTER_VELOCITY
    half_width: int = EMITTER_HALF_WIDTH
    row: int = EMITTER_ROW

    def band(self, width: int, height: int) -> Tuple[int, int, int] | None:
        """(row, x0, x1) of the band clipped to the interior, or None if empty."""
        if not 1 <= self.row <= height - 2:
            return None
        x0, x1 = band_columns(width, width // 2, self.half_width)
        if x0 > x1:
            return None
        return self.row, x0, x1

    def emit(self, grid: "GridState") -> int:
        """Inject one tick's worth of water. Returns the number of cells fed.

        Wall cells inside the band are skipped.
        """
        if not self.enabled:
            return 0
        band = self.band(grid.width, grid.height)
        if band is None:
            return 0
        row, x0, x1 = band
        cols = slice(x0, x1 + 1)
        mass = grid.current_mass[row, cols]
        vy = grid.vy[row, cols]
        open_cells = ~grid.wall[row, cols]
        mass[open_cells] = np.minimum(mass[open_cells] + self.mass_rate, MAX_CELL_MASS)
        vy[open_cells] = self.velocity
        return int(np.count_nonzero(open_cells))
