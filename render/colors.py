# render/colors.py
"""Color calculations for grid rendering.

Turns a committed snapshot into an RGB array:
- Walls and dry cells get flat colors
- Water blends through spray -> body -> deep as mass grows
- Velocity direction tints the hue, fast cells glow
- A travelling diagonal wave adds shimmer, and surface cells get foam
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Tuple, cast

import numpy as np

from render.config import (
    BODY_MASS,
    COLOR_BG,
    COLOR_WALL,
    COLOR_WATER_BODY,
    COLOR_WATER_DEEP,
    COLOR_WATER_SPRAY,
    DEEP_MASS_SPAN,
    GLOW_SPEED,
    HUE_AMPLITUDE,
    HUE_MAX_INFLUENCE,
    HUE_MIN_SPEED,
    HUE_SPEED_GAIN,
    HUE_TICK_RATE,
    SHIMMER_MIN_MASS,
    SHIMMER_THRESHOLD,
    SPRAY_MASS,
    SURFACE_MASS,
    VISIBLE_MASS,
    Color,
)

if TYPE_CHECKING:
    from grid_state import GridSnapshot


def blend_colors(color1: Color, color2: Color, weight: float = 0.5) -> Color:
    """Blend two colors with given weight (0 = all color1, 1 = all color2)."""
    return cast(Color, tuple(int(c1 * (1 - weight) + c2 * weight) for c1, c2 in zip(color1, color2)))


def _lerp(c0: Color, c1: Color, t: np.ndarray) -> np.ndarray:
    a = np.asarray(c0, dtype=np.float64)
    b = np.asarray(c1, dtype=np.float64)
    return a + t[..., None] * (b - a)


def water_gradient(mass: np.ndarray) -> np.ndarray:
    """Base water color per cell, shape (..., 3) float."""
    spray = _lerp(COLOR_BG, COLOR_WATER_SPRAY, mass / SPRAY_MASS)
    body = _lerp(COLOR_WATER_SPRAY, COLOR_WATER_BODY, (mass - SPRAY_MASS) / (BODY_MASS - SPRAY_MASS))
    deep = _lerp(COLOR_WATER_BODY, COLOR_WATER_DEEP, np.minimum((mass - BODY_MASS) / DEEP_MASS_SPAN, 1.0))
    return np.where(
        (mass < SPRAY_MASS)[..., None],
        spray,
        np.where((mass < BODY_MASS)[..., None], body, deep),
    )


def velocity_tint(vx: np.ndarray, vy: np.ndarray, tick: int) -> np.ndarray:
    """Direction-dependent RGB offset, zero where the cell is slow."""
    speed = np.hypot(vx, vy)
    hue = np.radians(np.mod(np.degrees(np.arctan2(vy, vx)) + tick * HUE_TICK_RATE, 360.0))
    influence = np.minimum(speed * HUE_SPEED_GAIN, HUE_MAX_INFLUENCE)
    influence = np.where(speed > HUE_MIN_SPEED, influence, 0.0)
    # Three phases 120 degrees apart
    tint = np.stack(
        [np.cos(hue), np.cos(hue + 2.09), np.cos(hue + 4.19)],
        axis=-1,
    )
    return tint * (HUE_AMPLITUDE * influence)[..., None]


def mass_to_rgb(snapshot: "GridSnapshot", tick: int = 0) -> np.ndarray:
    """Render a snapshot to a (height, width, 3) uint8 array."""
    mass, vx, vy, wall = snapshot.mass, snapshot.vx, snapshot.vy, snapshot.wall
    height, width = mass.shape
    ys, xs = np.mgrid[0:height, 0:width]
    speed = np.hypot(vx, vy)

    rgb = water_gradient(mass) + velocity_tint(vx, vy, tick)

    # Shimmer: diagonal wave, stronger on fast water
    wave = np.sin(xs * 0.15 + ys * 0.1 - tick * 0.15)
    shimmer = np.where(
        (wave > SHIMMER_THRESHOLD) & (mass > SHIMMER_MIN_MASS),
        (wave - SHIMMER_THRESHOLD) * (100.0 + speed * 20.0),
        0.0,
    )
    rgb += shimmer[..., None]

    # Foam on cells whose upper neighbour is nearly dry (row 0 never counts)
    above = np.full_like(mass, np.inf)
    above[1:, :] = mass[:-1, :]
    foam = np.where(
        above < SURFACE_MASS,
        50.0 + np.sin(xs * 0.5 + tick * 0.2) * 20.0 + np.abs(vx) * 15.0,
        0.0,
    )
    rgb += foam[..., None]

    # Glow trails on fast water
    glow = np.where(speed > GLOW_SPEED, (speed - GLOW_SPEED) * 20.0, 0.0)
    rgb += glow[..., None] * np.array([1.0, 0.8, 1.2])

    out = np.empty((height, width, 3), dtype=np.uint8)
    out[...] = COLOR_BG
    water = ~wall & (mass > VISIBLE_MASS)
    out[water] = np.clip(rgb[water], 0, 255).astype(np.uint8)
    out[wall] = COLOR_WALL
    return out
