"""Per-cell row-major flow sweep.

Same rules as simulation/flow.py written as an explicit loop over cells.
It is slow and exists as the readable statement of the transfer rules: tests
compare it against the vectorized solver, and the benchmark times both.
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
from simulation.stability import stable_down_flow


def compute_flow_sweep(
    mass: np.ndarray,
    wall: np.ndarray,
    vx: np.ndarray,
    vy: np.ndarray,
    config: SimulationConfig,
    out_mass: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Loop version of compute_flow; identical contract."""
    height, width = mass.shape
    rate = config.lateral_rate
    damping = config.velocity_damping
    new_vx = np.zeros_like(vx)
    new_vy = np.zeros_like(vy)
    np.copyto(out_mass, mass)

    for y in range(height):
        for x in range(width):
            if wall[y, x] or mass[y, x] <= MIN_ACTIVE_MASS:
                continue

            remaining = float(mass[y, x])
            cvx = float(vx[y, x]) * damping
            cvy = float(vy[y, x]) * damping

            # Down
            if y < height - 1 and not wall[y + 1, x]:
                below = float(mass[y + 1, x])
                flow = stable_down_flow(remaining + below, config.gravity) - below
                flow = min(flow, remaining)
                if flow > 0:
                    out_mass[y, x] -= flow
                    out_mass[y + 1, x] += flow
                    cvy += flow * VERTICAL_VELOCITY_GAIN
                    remaining -= flow

            if remaining <= 0:
                new_vx[y, x] = cvx
                new_vy[y, x] = cvy
                continue

            # Left / right
            flow_left = 0.0
            flow_right = 0.0
            if x > 0 and not wall[y, x - 1]:
                flow_left = max((remaining - float(mass[y, x - 1])) * rate, 0.0)
            if x < width - 1 and not wall[y, x + 1]:
                flow_right = max((remaining - float(mass[y, x + 1])) * rate, 0.0)

            total = flow_left + flow_right
            if total > remaining:
                scale = remaining / total
                flow_left *= scale
                flow_right *= scale

            if flow_left > 0:
                out_mass[y, x] -= flow_left
                out_mass[y, x - 1] += flow_left
                cvx -= flow_left * LATERAL_VELOCITY_GAIN
            if flow_right > 0:
                out_mass[y, x] -= flow_right
                out_mass[y, x + 1] += flow_right
                cvx += flow_right * LATERAL_VELOCITY_GAIN

            new_vx[y, x] = cvx
            new_vy[y, x] = cvy

    np.maximum(out_mass, 0.0, out=out_mass)
    return new_vx, new_vy
