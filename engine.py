"""
fluxgrid - Grid water simulation engine

One call to FluidEngine.step() advances exactly one tick:

    IDLE -> EDITS_APPLIED -> FLOW_COMPUTED -> VORTICITY_APPLIED -> COMMITTED -> IDLE

Queued brush edits and the emitter mutate the committed arrays first, the flow
solver then writes the next mass buffer and tentative velocities, vorticity
turns those into final velocities, and the commit flips the mass buffers and
installs the velocities. Readers only ever see committed state.
"""
from __future__ import annotations

import collections
import logging
import time
from enum import Enum, auto
from typing import Deque, Dict, Optional

from brushes import BrushKind, Edit, apply_edit
from config import WATER_BRUSH_AMOUNT
from emitter import AutoEmitter
from grid_state import GridSnapshot, GridState, InvalidDimension
from simulation.config import FLOW_SPEED_RANGE, SimulationConfig
from simulation.flow import compute_flow
from simulation.vorticity import apply_vorticity

logger = logging.getLogger(__name__)


class TickPhase(Enum):
    IDLE = auto()
    EDITS_APPLIED = auto()
    FLOW_COMPUTED = auto()
    VORTICITY_APPLIED = auto()
    COMMITTED = auto()


class FluidEngine:
    """Owns one grid and its config; the single writer of grid state."""

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config if config is not None else SimulationConfig()
        self.grid = GridState(self.config.grid_width, self.config.grid_height)
        self.emitter = AutoEmitter()
        self.tick_count = 0
        self._phase = TickPhase.IDLE
        self._pending: Deque[Edit] = collections.deque()
        self._warn_flow_speed()

    @property
    def phase(self) -> TickPhase:
        return self._phase

    @property
    def auto_emit(self) -> bool:
        return self.emitter.enabled

    def reset(self, config: Optional[SimulationConfig] = None) -> None:
        """Reallocate the grid, optionally with a new config.

        Pending edits are discarded and the emitter setting is kept.

        Raises:
            InvalidDimension: if the config's grid is smaller than 3x3.
        """
        config = config if config is not None else self.config
        self.grid.reset(config.grid_width, config.grid_height)
        self.config = config
        self._pending.clear()
        self.tick_count = 0
        self._phase = TickPhase.IDLE
        self._warn_flow_speed()
        logger.info("Engine reset: %dx%d grid", self.config.grid_width, self.config.grid_height)

    def reconfigure(self, config: SimulationConfig) -> None:
        """Install a new config, keeping grid contents when the shape is unchanged.

        Tuning changes such as flow_speed take effect at the next step().
        A different grid size falls back to reset().
        """
        if config.shape != self.grid.shape:
            self.reset(config)
            return
        self.config = config
        self._warn_flow_speed()
        logger.info("Engine reconfigured: flow_speed %.2f", config.flow_speed)

    # === Edits ===

    def apply_edit(
        self,
        x: int,
        y: int,
        radius: float,
        kind: BrushKind,
        amount: float = WATER_BRUSH_AMOUNT,
    ) -> int:
        """Apply a brush stamp immediately. Returns cells covered."""
        return apply_edit(self.grid, Edit(x, y, radius, kind, amount))

    def queue_edit(self, edit: Edit) -> None:
        """Defer a brush stamp to the start of the next step()."""
        self._pending.append(edit)

    def set_auto_emit(self, enabled: bool) -> None:
        if enabled != self.emitter.enabled:
            logger.info("Auto emitter %s", "enabled" if enabled else "disabled")
        self.emitter.enabled = enabled

    # === Tick ===

    def step(self, timings: Optional[Dict[str, float]] = None) -> None:
        """Advance one tick. Runs to completion; no partial state is visible.

        Args:
            timings: If given, receives the seconds spent in each phase under
                'edits', 'flow', 'vorticity' and 'commit'.
        """
        self._check_dimensions()
        grid = self.grid
        cfg = self.config
        mark = time.perf_counter()

        # IDLE -> EDITS_APPLIED
        while self._pending:
            apply_edit(grid, self._pending.popleft())
        self.emitter.emit(grid)
        self._phase = TickPhase.EDITS_APPLIED
        mark = self._record(timings, "edits", mark)

        # EDITS_APPLIED -> FLOW_COMPUTED
        mass = grid.current_mass
        tentative_vx, tentative_vy = compute_flow(
            mass, grid.wall, grid.vx, grid.vy, cfg, grid.next_mass
        )
        self._phase = TickPhase.FLOW_COMPUTED
        mark = self._record(timings, "flow", mark)

        # FLOW_COMPUTED -> VORTICITY_APPLIED
        final_vx, final_vy = apply_vorticity(tentative_vx, tentative_vy, mass, grid.wall, cfg)
        self._phase = TickPhase.VORTICITY_APPLIED
        mark = self._record(timings, "vorticity", mark)

        # VORTICITY_APPLIED -> COMMITTED
        grid.swap_mass_buffers()
        grid.commit_velocity(final_vx, final_vy)
        self.tick_count += 1
        self._phase = TickPhase.COMMITTED
        self._record(timings, "commit", mark)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Tick %d committed, total mass %.4f", self.tick_count, grid.total_mass())
        self._phase = TickPhase.IDLE

    def run(self, ticks: int) -> None:
        for _ in range(ticks):
            self.step()

    # === Read access ===

    def snapshot(self) -> GridSnapshot:
        """Copy of the last committed tick."""
        return self.grid.snapshot(self.tick_count)

    def total_mass(self) -> float:
        return self.grid.total_mass()

    # === Internals ===

    def _check_dimensions(self) -> None:
        if self.grid.shape != self.config.shape:
            raise InvalidDimension(
                f"Grid arrays are {self.grid.width}x{self.grid.height} but config expects "
                f"{self.config.grid_width}x{self.config.grid_height}; call reset()"
            )

    @staticmethod
    def _record(timings: Optional[Dict[str, float]], phase: str, start: float) -> float:
        now = time.perf_counter()
        if timings is not None:
            timings[phase] = now - start
        return now

    def _warn_flow_speed(self) -> None:
        if not self.config.flow_speed_in_range():
            low, high = FLOW_SPEED_RANGE
            logger.warning(
                "flow_speed %.3f outside recognized range [%.1f, %.1f]",
                self.config.flow_speed, low, high,
            )
