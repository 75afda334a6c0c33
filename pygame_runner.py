"""
Pygame-CE frontend for fluxgrid.

Architecture:
- Virtual screen space: fixed VIRTUAL_WIDTH x VIRTUAL_HEIGHT layout surface
- Screen space: actual window pixels (scales with resize)
- Grid space: simulation cells, drawn one pixel per cell then scaled

The engine is stepped from a fixed-timestep accumulator, so the flow behaves
the same at any display refresh rate. Rendering reads only committed
snapshots.

Controls:
- 1-4: select brush (water, wall, eraser, drain)
- [ / ]: brush size
- Left mouse: paint with the selected brush
- Space: pause, '.': single step while paused
- F: toggle auto flow
- Minus / Equals: slower / faster lateral flow, grid is kept
- R: reset grid
- H: show help
- ESC: quit
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

try:
    import pygame
except ImportError as exc:
    raise SystemExit("pygame-ce is required. Install with: pip install pygame-ce") from exc

from brushes import BrushPalette
from config import MAX_FPS, MAX_STEPS_PER_FRAME, TICK_INTERVAL
from engine import FluidEngine
from keybindings import (
    AUTO_FLOW_KEY,
    BRUSH_KEYS,
    BRUSH_LARGER_KEY,
    BRUSH_SMALLER_KEY,
    CONTROL_DESCRIPTIONS,
    FLOW_FASTER_KEY,
    FLOW_SLOWER_KEY,
    HELP_KEY,
    PAUSE_KEY,
    QUIT_KEY,
    RESET_KEY,
    STEP_KEY,
)
from logging_config import setup_logging
from render import (
    RunStats,
    fit_grid_rect,
    render_grid,
    render_help_overlay,
    render_run_badges,
    render_sidebar,
    screen_to_cell,
)
from render.config import (
    COLOR_BG_DARK,
    FONT_SIZE,
    MAP_MARGIN,
    SIDEBAR_WIDTH,
    VIRTUAL_HEIGHT,
    VIRTUAL_WIDTH,
)
from simulation.config import SimulationConfig, load_simulation_config

logger = logging.getLogger(__name__)


def screen_to_virtual(
    screen_pos: Tuple[int, int],
    screen_size: Tuple[int, int],
) -> Tuple[int, int]:
    """Transform screen coordinates to virtual screen coordinates."""
    screen_w, screen_h = screen_size
    scale = min(screen_w / VIRTUAL_WIDTH, screen_h / VIRTUAL_HEIGHT)
    scaled_w = VIRTUAL_WIDTH * scale
    scaled_h = VIRTUAL_HEIGHT * scale
    offset_x = (screen_w - scaled_w) / 2
    offset_y = (screen_h - scaled_h) / 2

    vx = int((screen_pos[0] - offset_x) / scale)
    vy = int((screen_pos[1] - offset_y) / scale)

    return vx, vy


def blit_virtual_to_screen(virtual_screen: pygame.Surface, screen: pygame.Surface) -> None:
    """Scale and blit the virtual screen to the actual display, with letterboxing."""
    screen_w, screen_h = screen.get_size()
    scale = min(screen_w / VIRTUAL_WIDTH, screen_h / VIRTUAL_HEIGHT)
    scaled_w = int(VIRTUAL_WIDTH * scale)
    scaled_h = int(VIRTUAL_HEIGHT * scale)
    offset_x = (screen_w - scaled_w) // 2
    offset_y = (screen_h - scaled_h) // 2

    screen.fill((0, 0, 0))
    scaled = pygame.transform.scale(virtual_screen, (scaled_w, scaled_h))
    screen.blit(scaled, (offset_x, offset_y))


class StepClock:
    """Fixed-timestep accumulator decoupling simulation ticks from frames."""

    def __init__(self, interval: float = TICK_INTERVAL, max_steps: int = MAX_STEPS_PER_FRAME) -> None:
        self.interval = interval
        self.max_steps = max_steps
        self.accumulated = 0.0

    def advance(self, dt: float) -> int:
        """Add frame time and return how many ticks are due this frame."""
        self.accumulated += dt
        steps = int(self.accumulated // self.interval)
        if steps > self.max_steps:
            # Drop the backlog rather than spiral on a slow machine
            logger.debug("Dropping %d overdue ticks", steps - self.max_steps)
            self.accumulated = 0.0
            return self.max_steps
        self.accumulated -= steps * self.interval
        return steps


def run(config: SimulationConfig) -> None:
    """Main loop."""
    pygame.init()

    virtual_screen = pygame.Surface((VIRTUAL_WIDTH, VIRTUAL_HEIGHT))
    screen = pygame.display.set_mode((VIRTUAL_WIDTH, VIRTUAL_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("fluxgrid")

    font = pygame.font.Font(None, FONT_SIZE)
    clock = pygame.time.Clock()

    engine = FluidEngine(config)
    palette = BrushPalette()
    step_clock = StepClock()
    stats = RunStats(cells=config.grid_width * config.grid_height, flow_speed=config.flow_speed)

    map_area = pygame.Rect(
        MAP_MARGIN, MAP_MARGIN,
        VIRTUAL_WIDTH - SIDEBAR_WIDTH - 2 * MAP_MARGIN, VIRTUAL_HEIGHT - 2 * MAP_MARGIN,
    )
    grid_rect = fit_grid_rect(map_area, config.grid_width, config.grid_height)
    sidebar_rect = pygame.Rect(VIRTUAL_WIDTH - SIDEBAR_WIDTH, 0, SIDEBAR_WIDTH, VIRTUAL_HEIGHT)

    paused = False
    show_help = False
    frame = 0

    running = True
    while running:
        dt = clock.tick(MAX_FPS) / 1000.0
        frame += 1

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                continue

            if event.type != pygame.KEYDOWN:
                continue

            if event.key == QUIT_KEY:
                running = False
            elif event.key in BRUSH_KEYS:
                palette.select_by_number(BRUSH_KEYS[event.key])
            elif event.key == BRUSH_SMALLER_KEY:
                palette.cycle_size(-1)
            elif event.key == BRUSH_LARGER_KEY:
                palette.cycle_size(1)
            elif event.key == PAUSE_KEY:
                paused = not paused
                step_clock.accumulated = 0.0
            elif event.key == STEP_KEY and paused:
                engine.step()
            elif event.key == AUTO_FLOW_KEY:
                engine.set_auto_emit(not engine.auto_emit)
            elif event.key in (FLOW_SLOWER_KEY, FLOW_FASTER_KEY):
                direction = 1 if event.key == FLOW_FASTER_KEY else -1
                engine.reconfigure(engine.config.step_flow_speed(direction))
                stats.flow_speed = engine.config.flow_speed
            elif event.key == RESET_KEY:
                engine.reset()
            elif event.key == HELP_KEY:
                show_help = not show_help

        # Brush painting: one stamp per frame while the button is held
        if pygame.mouse.get_pressed()[0]:
            virtual_pos = screen_to_virtual(pygame.mouse.get_pos(), screen.get_size())
            cell = screen_to_cell(virtual_pos, grid_rect, config.grid_width, config.grid_height)
            edit = palette.make_edit(*cell) if cell is not None else None
            if edit is not None:
                if paused:
                    engine.apply_edit(edit.x, edit.y, edit.radius, edit.kind, edit.amount)
                else:
                    engine.queue_edit(edit)

        if not paused:
            for _ in range(step_clock.advance(dt)):
                engine.step()

        snapshot = engine.snapshot()
        stats.fps = round(clock.get_fps())
        stats.tick = engine.tick_count
        stats.total_mass = snapshot.total_mass()

        virtual_screen.fill(COLOR_BG_DARK)
        render_grid(virtual_screen, snapshot, grid_rect, frame)
        render_run_badges(virtual_screen, font, grid_rect, paused, engine.auto_emit)
        render_sidebar(virtual_screen, font, sidebar_rect, palette, stats)
        if show_help:
            render_help_overlay(
                virtual_screen, font, CONTROL_DESCRIPTIONS,
                (grid_rect.x + 16, grid_rect.bottom - 120), grid_rect.width - 32, 110,
            )

        blit_virtual_to_screen(virtual_screen, screen)
        pygame.display.flip()

    pygame.quit()


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Config file values, then command-line overrides."""
    config = load_simulation_config(args.config)
    overrides = {}
    if args.width is not None:
        overrides["grid_width"] = args.width
    if args.height is not None:
        overrides["grid_height"] = args.height
    if args.flow_speed is not None:
        overrides["flow_speed"] = args.flow_speed
    return config.with_overrides(**overrides) if overrides else config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive grid water simulation")
    parser.add_argument("--config", default=None, help="JSON file with SimulationConfig fields")
    parser.add_argument("--width", type=int, default=None, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=None, help="Grid height in cells")
    parser.add_argument("--flow-speed", type=float, default=None, help="Lateral spreading rate (0.1-1.0)")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--log-file", default=None, help="Optional log file path")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO), args.log_file)
    run(build_config(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
