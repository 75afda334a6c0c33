"""Curl-based swirl forcing applied to the tentative velocity field.

For each interior, non-wall cell holding water the discrete curl

    curl = 0.5 * (vy[right] - vy[left]) - 0.5 * (vx[down] - vx[up])

is fed back as a perpendicular push scaled by sin(y * freq) for vx and
cos(x * freq) for vy. The phase terms make spirals form differently across the
grid instead of a uniform shear. Mass is never read for anything but the
activity mask and never written.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from simulation.config import MIN_ACTIVE_MASS, SimulationConfig


def apply_vorticity(
    vx: np.ndarray,
    vy: np.ndarray,
    mass: np.ndarray,
    wall: np.ndarray,
    config: SimulationConfig,
) -> Tuple[np.ndarray, np.ndarray]:
    """Return new (vx, vy) with vorticity forcing added.

    The inputs are left untouched; every curl is computed from them, never
    from values already rewritten in this pass.
    """
    out_vx = vx.copy()
    out_vy = vy.copy()
    height, width = vx.shape
    if height < 3 or width < 3:
        return out_vx, out_vy

    inner = (slice(1, -1), slice(1, -1))
    active = ~wall[inner] & (mass[inner] > MIN_ACTIVE_MASS)

    curl = curl_field(vx, vy)[inner]

    rows = np.arange(1, height - 1, dtype=np.float64).reshape(-1, 1)
    cols = np.arange(1, width - 1, dtype=np.float64).reshape(1, -1)
    push = curl * config.vorticity_strength
    push_x = push * np.sin(rows * config.spatial_freq)
    push_y = push * np.cos(cols * config.spatial_freq)

    out_vx[inner] += np.where(active, push_x, 0.0)
    out_vy[inner] += np.where(active, push_y, 0.0)
    return out_vx, out_vy


def curl_field(vx: np.ndarray, vy: np.ndarray) -> np.ndarray:
    """Discrete curl over the interior; zero on the outer ring."""
    curl = np.zeros_like(vx)
    if vx.shape[0] < 3 or vx.shape[1] < 3:
        return curl
    curl[1:-1, 1:-1] = (
        (vy[1:-1, 2:] - vy[1:-1, :-2]) * 0.5 - (vx[2:, 1:-1] - vx[:-2, 1:-1]) * 0.5
    )
    return curl
