# render/hud.py
"""Sidebar: brush palette, brush size and run statistics."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pygame

from config import BRUSH_SIZES
from render.colors import blend_colors
from render.config import (
    COLOR_BG_PANEL,
    COLOR_TEXT_DIM,
    COLOR_TEXT_GRAY,
    COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_WHITE,
    LINE_HEIGHT,
)
from render.primitives import draw_panel, draw_section_header, draw_stat_row, draw_text

if TYPE_CHECKING:
    from brushes import BrushPalette


@dataclass
class RunStats:
    """Numbers shown in the sidebar, refreshed by the host."""
    cells: int = 0
    fps: int = 0
    tick: int = 0
    total_mass: float = 0.0
    flow_speed: float = 0.0


def render_sidebar(
    surface: pygame.Surface,
    font,
    rect: pygame.Rect,
    palette: "BrushPalette",
    stats: RunStats,
) -> None:
    """Draw the sidebar panel into `rect`."""
    draw_panel(surface, rect)
    x = rect.x + 12
    width = rect.width - 24

    y = draw_section_header(surface, font, "BRUSH", (x, rect.y + 12), width)
    selected_bg = blend_colors(COLOR_BG_PANEL, COLOR_TEXT_HIGHLIGHT, 0.25)
    for i, brush in enumerate(palette.brushes):
        if i == palette.selected_index:
            pygame.draw.rect(surface, selected_bg, (x - 4, y - 2, width + 8, LINE_HEIGHT))
            color = COLOR_TEXT_WHITE
        else:
            color = COLOR_TEXT_GRAY
        draw_text(surface, font, f"{i + 1}  {brush.icon}  {brush.name}", (x, y), color=color)
        y += LINE_HEIGHT

    y = draw_section_header(surface, font, "SIZE", (x, y + 8), width)
    sizes = "  ".join(
        f"[{size}]" if size == palette.size else str(size) for size in BRUSH_SIZES
    )
    draw_text(surface, font, sizes, (x, y), color=COLOR_TEXT_WHITE)
    y += LINE_HEIGHT

    y = draw_section_header(surface, font, "STATS", (x, y + 8), width)
    for label, value in (
        ("Cells", f"{stats.cells:,}"),
        ("FPS", str(stats.fps)),
        ("Tick", str(stats.tick)),
        ("Water", f"{stats.total_mass:.1f}"),
        ("Flow speed", f"{stats.flow_speed:.2f}"),
    ):
        y = draw_stat_row(surface, font, label, value, (x, y), width)

    draw_text(surface, font, "H: help", (x, rect.bottom - LINE_HEIGHT - 8), color=COLOR_TEXT_DIM)
