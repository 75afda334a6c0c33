"""Vertical split rule for two stacked cells.

Given the combined mass of a cell and the cell directly below it, decide how
much of that mass should sit in the lower cell. Three bands:

- total <= 1.0: the lower cell takes a full unit (1.0)
- total < 2.0 + gravity: mild compression, 1.0 + total * 0.1
- otherwise: symmetric split biased by gravity, (total + gravity) / 2

The band edges are tuned so that two cells never trade mass back and forth
across ticks. Note the seam at total == 2.0 + gravity: the second band ends at
1.2 + 0.1 * gravity while the third starts at 1.0 + gravity. They only meet
when gravity == 2/9; at the default 0.8 the jump is 0.52.
"""
from __future__ import annotations

import numpy as np

from simulation.config import COMPRESSION_BASE, COMPRESSION_SLOPE, FULL_CELL_MASS


def stable_down_flow(total_mass: float, gravity: float) -> float:
    """Target mass for the lower of two vertically adjacent cells."""
    if total_mass <= FULL_CELL_MASS:
        return FULL_CELL_MASS
    if total_mass < COMPRESSION_BASE + gravity:
        return FULL_CELL_MASS + total_mass * COMPRESSION_SLOPE
    return (total_mass + gravity) / 2.0


def stable_down_flow_grid(total_mass: np.ndarray, gravity: float) -> np.ndarray:
    """Element-wise stable_down_flow over an array of combined masses."""
    compressed = FULL_CELL_MASS + total_mass * COMPRESSION_SLOPE
    split = (total_mass + gravity) / 2.0
    return np.where(
        total_mass <= FULL_CELL_MASS,
        FULL_CELL_MASS,
        np.where(total_mass < COMPRESSION_BASE + gravity, compressed, split),
    )


def band_seam(gravity: float) -> float:
    """Jump between the compression and split bands at total == 2 + gravity."""
    edge = COMPRESSION_BASE + gravity
    return (edge + gravity) / 2.0 - (FULL_CELL_MASS + edge * COMPRESSION_SLOPE)
