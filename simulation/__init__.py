"""Simulation modules for fluxgrid.

- stability: vertical split rule for stacked cells
- flow: vectorized per-tick mass transfer (flow_reference: loop version)
- vorticity: curl-based swirl forcing on velocities
"""

from simulation.config import SimulationConfig, load_simulation_config
from simulation.stability import stable_down_flow, stable_down_flow_grid
from simulation.flow import compute_flow
from simulation.flow_reference import compute_flow_sweep
from simulation.vorticity import apply_vorticity, curl_field

__all__ = [
    "SimulationConfig",
    "load_simulation_config",
    "stable_down_flow",
    "stable_down_flow_grid",
    "compute_flow",
    "compute_flow_sweep",
    "apply_vorticity",
    "curl_field",
]
