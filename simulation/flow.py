"""Grid-based mass flow for one tick (vectorized).

Every non-wall cell holding more than MIN_ACTIVE_MASS moves mass in two stages:

1. Down: toward the split given by stable_down_flow for the pair (cell, cell below).
2. Sideways: a share of the difference to each open left/right neighbour,
   scaled down when the two shares together exceed what is left.

All neighbour reads use the committed (pre-tick) mass. The next buffer starts
as a copy of it and only accumulates deltas, so every unit leaving a cell lands
in exactly one neighbour and the result does not depend on visiting order.
simulation/flow_reference.py performs the same rules as a row-major loop.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from simulation.config import (
    LATERAL_VELOCITY_GAIN,
    MIN_ACTIVE_MASS,
    VERTICAL_VELOCITY_GAIN,
    SimulationConfig,
)
from simulation.stability import stable_down_flow_grid


def compute_flow(
    mass: np.ndarray,
    wall: np.ndarray,
    vx: np.ndarray,
    vy: np.ndarray,
    config: SimulationConfig,
    out_mass: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Fill `out_mass` with next-tick mass and return tentative (vx, vy).

    Inputs are never modified. `out_mass` must have the same shape as `mass`
    and must not alias it.

    Args:
        mass: Committed mass, shape (height, width)
        wall: Boolean wall flags
        vx, vy: Committed velocities
        config: Grid tuning (gravity, flow_speed, velocity_damping)
        out_mass: Next mass buffer, overwritten

    Returns:
        (vx, vy) tentative velocity arrays; zero on wall and empty cells
    """
    active = ~wall & (mass > MIN_ACTIVE_MASS)

    new_vx = np.where(active, vx * config.velocity_damping, 0.0)
    new_vy = np.where(active, vy * config.velocity_damping, 0.0)

    # --- 1. Downward transfer ---
    # Row y sends to row y + 1; the bottom row has no neighbour below.
    flow_down = np.zeros_like(mass)
    upper = mass[:-1, :]
    lower = mass[1:, :]
    can_fall = active[:-1, :] & ~wall[1:, :]
    wanted = stable_down_flow_grid(upper + lower, config.gravity) - lower
    wanted = np.minimum(wanted, upper)
    flow_down[:-1, :] = np.where(can_fall & (wanted > 0), wanted, 0.0)

    new_vy += flow_down * VERTICAL_VELOCITY_GAIN
    remaining = mass - flow_down

    # --- 2. Lateral transfer ---
    spreads = active & (remaining > 0)
    rate = config.lateral_rate

    flow_left = np.zeros_like(mass)
    open_left = spreads[:, 1:] & ~wall[:, :-1]
    flow_left[:, 1:] = np.where(
        open_left, np.maximum((remaining[:, 1:] - mass[:, :-1]) * rate, 0.0), 0.0
    )

    flow_right = np.zeros_like(mass)
    open_right = spreads[:, :-1] & ~wall[:, 1:]
    flow_right[:, :-1] = np.where(
        open_right, np.maximum((remaining[:, :-1] - mass[:, 1:]) * rate, 0.0), 0.0
    )

    # Never hand out more than is left; zero totals simply mean no transfer.
    total_side = flow_left + flow_right
    over = total_side > remaining
    scale = np.divide(remaining, total_side, out=np.ones_like(mass), where=over)
    flow_left *= scale
    flow_right *= scale

    new_vx -= flow_left * LATERAL_VELOCITY_GAIN
    new_vx += flow_right * LATERAL_VELOCITY_GAIN

    # --- 3. Accumulate into the next buffer ---
    np.copyto(out_mass, mass)
    out_mass -= flow_down + flow_left + flow_right
    out_mass[1:, :] += flow_down[:-1, :]
    out_mass[:, :-1] += flow_left[:, 1:]
    out_mass[:, 1:] += flow_right[:, :-1]
    # Rescaled side flows can overshoot `remaining` by a rounding step.
    np.maximum(out_mass, 0.0, out=out_mass)

    return new_vx, new_vy
