# render/primitives.py
"""Drawing helpers shared by the sidebar and overlays."""
from __future__ import annotations

from typing import Dict, Tuple

import pygame

from render.config import (
    COLOR_BG_PANEL,
    COLOR_BORDER,
    COLOR_TEXT_GRAY,
    COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_WHITE,
    LINE_HEIGHT,
    Color,
)

# (font id, text, color) -> rendered surface
_TEXT_CACHE: Dict[Tuple[int, str, Color], pygame.Surface] = {}
_TEXT_CACHE_LIMIT = 512


def _render_cached(font, text: str, color: Color) -> pygame.Surface:
    key = (id(font), text, color)
    label = _TEXT_CACHE.get(key)
    if label is None:
        # Stats change every frame, so the cache is flushed rather than grown
        if len(_TEXT_CACHE) >= _TEXT_CACHE_LIMIT:
            _TEXT_CACHE.clear()
        label = font.render(text, True, color)
        _TEXT_CACHE[key] = label
    return label


def draw_text(surface, font, text: str, pos: Tuple[int, int], color: Color = COLOR_TEXT_WHITE) -> None:
    surface.blit(_render_cached(font, text, color), pos)


def draw_stat_row(surface, font, label: str, value: str, pos: Tuple[int, int], width: int) -> int:
    """Label on the left, value right-aligned within `width`. Returns the next y."""
    x, y = pos
    draw_text(surface, font, label, (x, y), color=COLOR_TEXT_GRAY)
    rendered = _render_cached(font, value, COLOR_TEXT_WHITE)
    surface.blit(rendered, (x + width - rendered.get_width(), y))
    return y + LINE_HEIGHT


def draw_panel(surface, rect, fill: Color = COLOR_BG_PANEL) -> None:
    """Filled rectangle with a one-pixel border."""
    pygame.draw.rect(surface, fill, rect)
    pygame.draw.rect(surface, COLOR_BORDER, rect, 1)


def draw_section_header(surface, font, text: str, pos: Tuple[int, int], width: int = 200) -> int:
    """Draw a section header with underline. Returns the y position after the header."""
    x, y = pos
    draw_text(surface, font, text, (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += LINE_HEIGHT
    pygame.draw.line(surface, COLOR_BORDER, (x, y), (x + width, y), 1)
    return y + 6
