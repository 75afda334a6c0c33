# grid_state.py
"""Per-cell arrays for the water grid and their lifecycle.

Arrays have shape (height, width) so that ravel() gives the linear index
y * width + x. Two mass buffers are kept; `_current` says which one is the
committed state. Velocity and wall arrays are single buffers holding only
committed values; the solver builds its tentative velocities elsewhere.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

import numpy as np

from simulation.config import (
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    MIN_GRID_DIMENSION,
)
from utils import border_mask

logger = logging.getLogger(__name__)


class InvalidDimension(ValueError):
    """Grid dimensions cannot hold a wall border around an interior."""


class CellView(NamedTuple):
    mass: float
    vx: float
    vy: float
    is_wall: bool


@dataclass(frozen=True)
class GridSnapshot:
    """Read-only copy of the committed grid for renderers and tests."""
    mass: np.ndarray
    vx: np.ndarray
    vy: np.ndarray
    wall: np.ndarray
    tick: int = 0

    @property
    def width(self) -> int:
        return self.mass.shape[1]

    @property
    def height(self) -> int:
        return self.mass.shape[0]

    def cell(self, x: int, y: int) -> CellView:
        return CellView(
            float(self.mass[y, x]),
            float(self.vx[y, x]),
            float(self.vy[y, x]),
            bool(self.wall[y, x]),
        )

    def total_mass(self) -> float:
        return float(np.sum(self.mass))


class GridState:
    """Mass, velocity and wall arrays for one grid instance."""

    __slots__ = ("width", "height", "_mass", "_current", "vx", "vy", "wall")

    def __init__(self, width: int = DEFAULT_GRID_WIDTH, height: int = DEFAULT_GRID_HEIGHT) -> None:
        self.width = 0
        self.height = 0
        self._mass: List[np.ndarray] = []
        self._current = 0
        self.reset(width, height)

    # === Lifecycle ===

    def reset(self, width: int, height: int) -> None:
        """Allocate zeroed arrays and rebuild the border wall.

        Raises:
            InvalidDimension: if width or height is below 3.
        """
        if width < MIN_GRID_DIMENSION or height < MIN_GRID_DIMENSION:
            raise InvalidDimension(
                f"Grid must be at least {MIN_GRID_DIMENSION}x{MIN_GRID_DIMENSION}, got {width}x{height}"
            )
        self.width = width
        self.height = height
        shape = (height, width)
        self._mass = [np.zeros(shape, dtype=np.float64), np.zeros(shape, dtype=np.float64)]
        self._current = 0
        self.vx = np.zeros(shape, dtype=np.float64)
        self.vy = np.zeros(shape, dtype=np.float64)
        self.wall = border_mask(width, height)
        logger.debug("Grid reset to %dx%d", width, height)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    # === Buffer roles ===

    @property
    def current_mass(self) -> np.ndarray:
        """Committed mass; read by the solver and the renderer."""
        return self._mass[self._current]

    @property
    def next_mass(self) -> np.ndarray:
        """Scratch buffer the solver writes the upcoming tick into."""
        return self._mass[1 - self._current]

    def swap_mass_buffers(self) -> None:
        """Make the next buffer current. O(1); contents are not copied."""
        self._current = 1 - self._current

    def commit_velocity(self, vx: np.ndarray, vy: np.ndarray) -> None:
        """Install final velocities for the tick just computed."""
        self.vx = vx
        self.vy = vy

    # === Coordinates ===

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    # === Direct cell access ===

    def set_wall(self, x: int, y: int, value: bool) -> None:
        """Set or clear a wall. Out-of-range coordinates are ignored.

        Creating a wall clears the cell's mass and velocity.
        """
        if not self.in_bounds(x, y):
            return
        self.wall[y, x] = value
        if value:
            self.current_mass[y, x] = 0.0
            self.vx[y, x] = 0.0
            self.vy[y, x] = 0.0

    def set_mass(self, x: int, y: int, value: float) -> None:
        """Set mass at a cell. Ignored for walls and out-of-range coordinates."""
        if not self.in_bounds(x, y) or self.wall[y, x]:
            return
        self.current_mass[y, x] = max(0.0, value)

    def get(self, x: int, y: int) -> CellView:
        """Committed (mass, vx, vy, is_wall) at a cell.

        Raises:
            IndexError: if (x, y) is outside the grid.
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return CellView(
            float(self.current_mass[y, x]),
            float(self.vx[y, x]),
            float(self.vy[y, x]),
            bool(self.wall[y, x]),
        )

    def total_mass(self) -> float:
        return float(np.sum(self.current_mass))

    def snapshot(self, tick: int = 0) -> GridSnapshot:
        """Copy of the committed arrays."""
        return GridSnapshot(
            mass=self.current_mass.copy(),
            vx=self.vx.copy(),
            vy=self.vy.copy(),
            wall=self.wall.copy(),
            tick=tick,
        )
