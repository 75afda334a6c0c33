# render/overlays.py
"""Overlay rendering: help screen and run-state badges."""
from __future__ import annotations

from typing import List, Tuple

import pygame

from render.primitives import draw_panel, draw_text
from render.config import (
    COLOR_BADGE_AUTOFLOW,
    COLOR_BADGE_PAUSED,
    COLOR_TEXT_GRAY,
    COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_WHITE,
)


def render_help_overlay(
    surface,
    font,
    controls: List[str],
    pos: Tuple[int, int],
    available_width: int,
    available_height: int,
) -> None:
    """Panel listing `controls` in as many columns as fit the width."""
    x, y = pos
    col_width, row_height = 180, 18
    cols = max(1, available_width // col_width)

    draw_panel(surface, (x - 4, y - 4, available_width, available_height))
    draw_text(surface, font, "CONTROLS", (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += row_height + 4

    for i, control in enumerate(controls):
        cx = x + (i % cols * col_width)
        cy = y + (i // cols * row_height)
        if cy + row_height < pos[1] + available_height:
            draw_text(surface, font, control, (cx, cy), color=COLOR_TEXT_GRAY)


def _badge(surface, font, text: str, center: Tuple[int, int], color, alpha: int) -> None:
    label = font.render(text, True, COLOR_TEXT_WHITE)
    box = label.get_rect(center=center).inflate(12, 6)
    panel = pygame.Surface(box.size, pygame.SRCALPHA)
    panel.fill((*color, alpha))
    surface.blit(panel, box.topleft)
    surface.blit(label, label.get_rect(center=center))


def render_run_badges(
    surface: pygame.Surface,
    font,
    grid_rect: pygame.Rect,
    paused: bool,
    auto_flow: bool,
) -> None:
    """PAUSED in the top-right corner, AUTO FLOW centred at the top."""
    if paused:
        _badge(surface, font, "PAUSED", (grid_rect.right - 48, grid_rect.top + 20), COLOR_BADGE_PAUSED, 128)
    if auto_flow:
        _badge(surface, font, "AUTO FLOW", (grid_rect.centerx, grid_rect.top + 20), COLOR_BADGE_AUTOFLOW, 204)
