"""
Configuration constants for the simulation domain.
Includes flow tuning values, emitter defaults, and the per-grid SimulationConfig.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

logger = logging.getLogger(__name__)

# =============================================================================
# FLOW TUNING
# =============================================================================
VELOCITY_DAMPING = 0.98          # Applied to carried velocity before each transfer pass
VERTICAL_VELOCITY_GAIN = 0.5     # vy gained per unit of mass moved downward
LATERAL_VELOCITY_GAIN = 0.3      # vx gained per unit of mass moved left/right
LATERAL_FLOW_FACTOR = 0.5        # flow_speed * 0.5 = fraction of mass difference moved sideways
MIN_ACTIVE_MASS = 0.001          # Cells at or below this are treated as empty
MAX_CELL_MASS = 5.0              # Soft cap applied by brushes and the emitter only

# Vertical split bands (see simulation/stability.py)
FULL_CELL_MASS = 1.0
COMPRESSION_BASE = 2.0
COMPRESSION_SLOPE = 0.1

# =============================================================================
# VORTICITY
# =============================================================================
VORTICITY_STRENGTH = 0.15
SPATIAL_FREQ = 0.1

# =============================================================================
# EMITTER
# =============================================================================
EMITTER_MASS_RATE = 0.8     # Mass added per tick to each emitter cell
EMITTER_VELOCITY = 0.5      # Downward velocity seeded into each emitter cell
EMITTER_HALF_WIDTH = 4      # Band spans centre +/- 4 -> 9 cells
EMITTER_ROW = 2             # Row index of the band (just below the top wall)

# =============================================================================
# DEFAULTS
# =============================================================================
DEFAULT_GRID_WIDTH = 200
DEFAULT_GRID_HEIGHT = 150
DEFAULT_GRAVITY = 0.8
DEFAULT_FLOW_SPEED = 0.5
FLOW_SPEED_RANGE: Tuple[float, float] = (0.1, 1.0)
FLOW_SPEED_STEP = 0.1       # Live adjustment increment in the host
MIN_GRID_DIMENSION = 3      # A border needs at least one interior row/column


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable tuning for one grid instance.

    Changing any value means building a new config and resetting the engine;
    the arrays are never resized in place.
    """
    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    gravity: float = DEFAULT_GRAVITY
    flow_speed: float = DEFAULT_FLOW_SPEED
    evaporation: float = 0.0             # Reserved mass-decay rate, currently inert
    vorticity_strength: float = VORTICITY_STRENGTH
    spatial_freq: float = SPATIAL_FREQ
    velocity_damping: float = VELOCITY_DAMPING

    @property
    def shape(self) -> Tuple[int, int]:
        """Array shape (rows, cols) for this config."""
        return self.grid_height, self.grid_width

    @property
    def lateral_rate(self) -> float:
        """Fraction of a mass difference moved to a side neighbour per tick."""
        return self.flow_speed * LATERAL_FLOW_FACTOR

    def flow_speed_in_range(self) -> bool:
        low, high = FLOW_SPEED_RANGE
        return low <= self.flow_speed <= high

    def step_flow_speed(self, direction: int) -> "SimulationConfig":
        """Copy with flow_speed moved one FLOW_SPEED_STEP, held inside FLOW_SPEED_RANGE."""
        low, high = FLOW_SPEED_RANGE
        speed = round(self.flow_speed + direction * FLOW_SPEED_STEP, 2)
        return replace(self, flow_speed=min(high, max(low, speed)))

    def with_overrides(self, **changes: Any) -> "SimulationConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """Merge a partial mapping over the defaults. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown config key %r", key)
                continue
            if key in ("grid_width", "grid_height"):
                values[key] = int(value)
            else:
                values[key] = float(value)
        return cls(**values)


def load_simulation_config(path: Path | str | None = None) -> SimulationConfig:
    """Load a SimulationConfig from a JSON file.

    A missing path or file yields the defaults. Malformed JSON propagates
    json.JSONDecodeError to the caller.
    """
    if path is None:
        return SimulationConfig()
    p = Path(path)
    if not p.exists():
        logger.warning("Config file %s not found, using defaults", p)
        return SimulationConfig()
    with open(p, "r") as f:
        data = json.load(f)
    logger.info("Loaded simulation config from %s", p)
    return SimulationConfig.from_dict(data)
