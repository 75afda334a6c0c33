"""
Rendering module for the fluxgrid pygame frontend.

Provides the water palette, grid viewport, sidebar and overlays.
"""
from render.colors import (
    blend_colors,
    mass_to_rgb,
    velocity_tint,
    water_gradient,
)
from render.primitives import draw_panel, draw_section_header, draw_stat_row, draw_text
from render.map import fit_grid_rect, render_grid, screen_to_cell
from render.hud import RunStats, render_sidebar
from render.overlays import render_help_overlay, render_run_badges

__all__ = [
    # Colors
    "blend_colors",
    "mass_to_rgb",
    "velocity_tint",
    "water_gradient",
    # Primitives
    "draw_panel",
    "draw_section_header",
    "draw_stat_row",
    "draw_text",
    # Map
    "fit_grid_rect",
    "render_grid",
    "screen_to_cell",
    # Sidebar
    "RunStats",
    "render_sidebar",
    # Overlays
    "render_help_overlay",
    "render_run_badges",
]
