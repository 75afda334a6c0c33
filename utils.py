"""
utils.py - Common utility functions for fluxgrid

Provides shared, stateless helpers for coordinates and grid masks.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

Point = Tuple[int, int]


def clamp(val: float, low: float, high: float) -> float:
    """Clamp a value between low and high bounds."""
    return max(low, min(high, val))


# =============================================================================
# Grid Masks
# =============================================================================

def border_mask(width: int, height: int) -> np.ndarray:
    """Boolean (height, width) array that is True on the outer ring only."""
    mask = np.zeros((height, width), dtype=bool)
    mask[0, :] = True
    mask[-1, :] = True
    mask[:, 0] = True
    mask[:, -1] = True
    return mask


def interior_mask(width: int, height: int) -> np.ndarray:
    """Boolean (height, width) array that is True everywhere except the outer ring."""
    return ~border_mask(width, height)


def brush_footprint(width: int, height: int, center: Point, radius: float) -> np.ndarray:
    """Interior cells within Euclidean `radius` of `center`.

    Cells on the outer ring are never included, and a center outside the
    grid simply yields whatever part of the disc overlaps the interior.

    Example: radius 1 around (5, 5) -> the 5-cell plus shape.
    """
    cx, cy = center
    ys, xs = np.ogrid[0:height, 0:width]
    disc = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius * radius
    return disc & interior_mask(width, height)


def band_columns(width: int, center_x: int, half_width: int) -> Tuple[int, int]:
    """Inclusive [x0, x1] column range of a band, clipped to the interior.

    Returns an empty range (x0 > x1) when nothing remains.
    """
    x0 = max(center_x - half_width, 1)
    x1 = min(center_x + half_width, width - 2)
    return x0, x1
