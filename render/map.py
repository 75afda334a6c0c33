# render/map.py
"""Grid viewport rendering and pointer mapping."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

import pygame

from render.colors import mass_to_rgb
from utils import Point

if TYPE_CHECKING:
    from grid_state import GridSnapshot


def fit_grid_rect(area: pygame.Rect, width: int, height: int) -> pygame.Rect:
    """Largest rect with the grid's aspect ratio centred inside `area`."""
    scale = min(area.width / width, area.height / height)
    w, h = int(width * scale), int(height * scale)
    rect = pygame.Rect(0, 0, w, h)
    rect.center = area.center
    return rect


def render_grid(surface: pygame.Surface, snapshot: "GridSnapshot", rect: pygame.Rect, tick: int) -> None:
    """Draw the snapshot scaled into `rect` on `surface`.

    One pixel per cell is built from the RGB array, then scaled.
    """
    rgb = mass_to_rgb(snapshot, tick)
    grid_surface = pygame.image.frombuffer(rgb.tobytes(), (snapshot.width, snapshot.height), "RGB")
    scaled = pygame.transform.scale(grid_surface, rect.size)
    surface.blit(scaled, rect.topleft)


def screen_to_cell(
    pos: Tuple[int, int],
    rect: pygame.Rect,
    width: int,
    height: int,
) -> Optional[Point]:
    """Map a position on the virtual screen to a grid cell.

    Returns None when the position is outside the grid viewport.
    """
    if not rect.collidepoint(pos):
        return None
    x = int((pos[0] - rect.x) * width / rect.width)
    y = int((pos[1] - rect.y) * height / rect.height)
    return min(x, width - 1), min(y, height - 1)
