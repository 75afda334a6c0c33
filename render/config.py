# render/config.py
"""
Configuration constants for the rendering domain.
Includes window layout, colors, and the water palette tuning values.
"""
from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

# =============================================================================
# UI LAYOUT & DIMENSIONS
# =============================================================================
VIRTUAL_WIDTH = 1200
VIRTUAL_HEIGHT = 760

SIDEBAR_WIDTH = 240
LINE_HEIGHT = 20
FONT_SIZE = 18
MAP_MARGIN = 12

# =============================================================================
# COLORS
# =============================================================================
# UI Colors
COLOR_BG_DARK = (2, 6, 23)
COLOR_BG_PANEL = (15, 23, 42)
COLOR_BORDER = (30, 41, 59)
COLOR_TEXT_WHITE = (230, 230, 230)
COLOR_TEXT_GRAY = (160, 160, 160)
COLOR_TEXT_DIM = (100, 100, 100)
COLOR_TEXT_HIGHLIGHT = (125, 211, 252)
COLOR_BADGE_PAUSED = (0, 0, 0)
COLOR_BADGE_AUTOFLOW = (59, 130, 246)

# Grid colors
COLOR_WALL: Color = (100, 116, 139)          # Slate-500
COLOR_BG: Color = (15, 23, 42)               # Slate-900

# Water gradient stops
COLOR_WATER_SPRAY: Color = (6, 182, 212)     # Cyan-500, reached at mass 0.5
COLOR_WATER_BODY: Color = (37, 99, 235)      # Blue-600, reached at mass 1.0
COLOR_WATER_DEEP: Color = (30, 58, 138)      # Indigo-900, reached at mass 2.5

# =============================================================================
# WATER PALETTE TUNING
# =============================================================================
VISIBLE_MASS = 0.01          # Cells at or below this draw as background
SPRAY_MASS = 0.5
BODY_MASS = 1.0
DEEP_MASS_SPAN = 1.5         # Mass above BODY_MASS over which the deep blend runs

HUE_MIN_SPEED = 0.1          # Below this speed no direction tint
HUE_SPEED_GAIN = 0.3
HUE_MAX_INFLUENCE = 0.5
HUE_AMPLITUDE = 30.0
HUE_TICK_RATE = 1.5          # Degrees per tick the tint rotates

SHIMMER_THRESHOLD = 0.8
SHIMMER_MIN_MASS = 0.2
SURFACE_MASS = 0.05          # Cell above lighter than this marks a surface cell
GLOW_SPEED = 1.0
