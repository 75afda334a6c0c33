"""
Centralized host configuration for fluxgrid.

This file contains high-level, cross-cutting constants.
Domain-specific constants are in:
- simulation/config.py (flow tuning, emitter, SimulationConfig)
- render/config.py (colors, window layout)
"""
from __future__ import annotations

from typing import List

# =============================================================================
# TIME & SIMULATION
# =============================================================================
MAX_FPS = 60
TICK_INTERVAL = 1.0 / 60.0    # Seconds of host time per simulation step
MAX_STEPS_PER_FRAME = 4       # Catch-up cap so a slow frame cannot spiral

# =============================================================================
# BRUSHES
# =============================================================================
BRUSH_SIZES: List[int] = [1, 3, 5, 9, 15]
DEFAULT_BRUSH_SIZE_INDEX = 2  # Radius 5
WATER_BRUSH_AMOUNT = 0.5      # Mass added per stamp (one stamp per frame while held)
