"""
brushes.py - Brush edits for fluxgrid

Brushes are the only way (besides the emitter) to change how much water is in
the grid:
- Water: add mass, capped at MAX_CELL_MASS, never on walls
- Wall: place an obstacle and remove any water in it
- Eraser: remove walls and water
- Drain: remove water, leave walls alone

Edits only touch interior cells inside a Euclidean radius; anything outside
the grid or on the permanent border is silently dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from config import BRUSH_SIZES, DEFAULT_BRUSH_SIZE_INDEX, WATER_BRUSH_AMOUNT
from simulation.config import MAX_CELL_MASS
from utils import brush_footprint, clamp

if TYPE_CHECKING:
    from grid_state import GridState

logger = logging.getLogger(__name__)


class BrushKind(Enum):
    """What a brush stroke does to each cell it covers."""
    ADD_WATER = auto()
    ADD_WALL = auto()
    ERASE = auto()
    DRAIN = auto()


@dataclass(frozen=True)
class Edit:
    """One brush stamp at grid cell (x, y)."""
    x: int
    y: int
    radius: float
    kind: BrushKind
    amount: float = WATER_BRUSH_AMOUNT


def apply_edit(grid: "GridState", edit: Edit) -> int:
    """Apply a brush stamp directly to the grid's committed arrays.

    Args:
        grid: Grid to mutate
        edit: Brush position, radius, kind and water amount

    Returns:
        Number of interior cells covered by the stamp
    """
    mask = brush_footprint(grid.width, grid.height, (edit.x, edit.y), edit.radius)
    covered = int(np.count_nonzero(mask))
    if covered == 0:
        logger.debug("Edit at (%d, %d) fell outside the interior", edit.x, edit.y)
        return 0

    mass = grid.current_mass
    match edit.kind:
        case BrushKind.ADD_WATER:
            target = mask & ~grid.wall
            mass[target] = np.minimum(mass[target] + edit.amount, MAX_CELL_MASS)
        case BrushKind.ADD_WALL:
            grid.wall[mask] = True
            mass[mask] = 0.0
            grid.vx[mask] = 0.0
            grid.vy[mask] = 0.0
        case BrushKind.ERASE:
            grid.wall[mask] = False
            mass[mask] = 0.0
        case BrushKind.DRAIN:
            mass[mask] = 0.0
        case _:
            raise ValueError(f"Unknown brush kind: {edit.kind!r}")

    logger.debug("%s at (%d, %d) r=%s covered %d cells", edit.kind.name, edit.x, edit.y, edit.radius, covered)
    return covered


# =============================================================================
# Brush Palette (host-side selection state)
# =============================================================================

@dataclass
class Brush:
    """A selectable brush in the host palette."""
    id: str
    name: str
    kind: BrushKind
    icon: str = "?"
    amount: float = WATER_BRUSH_AMOUNT


BRUSH_WATER = Brush("water", "Water", BrushKind.ADD_WATER, icon="~")
BRUSH_WALL = Brush("wall", "Wall", BrushKind.ADD_WALL, icon="#")
BRUSH_ERASER = Brush("eraser", "Eraser", BrushKind.ERASE, icon="x")
BRUSH_DRAIN = Brush("drain", "Drain", BrushKind.DRAIN, icon="o")

DEFAULT_BRUSHES: List[Brush] = [
    BRUSH_WATER,
    BRUSH_WALL,
    BRUSH_ERASER,
    BRUSH_DRAIN,
]


@dataclass
class BrushPalette:
    """Selected brush and size for the host UI."""
    brushes: List[Brush] = field(default_factory=lambda: list(DEFAULT_BRUSHES))
    selected_index: int = 0
    size_index: int = DEFAULT_BRUSH_SIZE_INDEX

    def get_selected(self) -> Optional[Brush]:
        if 0 <= self.selected_index < len(self.brushes):
            return self.brushes[self.selected_index]
        return None

    def select_by_number(self, number: int) -> bool:
        """Select a brush by 1-based number key. Returns True if valid."""
        index = number - 1
        if 0 <= index < len(self.brushes):
            self.selected_index = index
            return True
        return False

    @property
    def size(self) -> int:
        return BRUSH_SIZES[self.size_index]

    def cycle_size(self, direction: int = 1) -> None:
        """Step through BRUSH_SIZES, stopping at either end."""
        self.size_index = int(clamp(self.size_index + direction, 0, len(BRUSH_SIZES) - 1))

    def make_edit(self, x: int, y: int) -> Optional[Edit]:
        """Build an Edit for the selected brush at (x, y)."""
        brush = self.get_selected()
        if brush is None:
            return None
        return Edit(x, y, self.size, brush.kind, brush.amount)
