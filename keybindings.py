"""
keybindings.py - Centralized key mappings for fluxgrid (Pygame version)

Single source of truth for all keyboard controls.
"""
from __future__ import annotations

import pygame


def _key(name: str) -> int:
    """Get pygame key constant by name."""
    return getattr(pygame, f"K_{name}")


# Number keys for brush selection (1-4)
BRUSH_KEYS = {
    _key("1"): 1,
    _key("2"): 2,
    _key("3"): 3,
    _key("4"): 4,
}

BRUSH_SMALLER_KEY = _key("LEFTBRACKET")
BRUSH_LARGER_KEY = _key("RIGHTBRACKET")

# Simulation control
PAUSE_KEY = _key("SPACE")
AUTO_FLOW_KEY = _key("f")
RESET_KEY = _key("r")
STEP_KEY = _key("PERIOD")     # Single step while paused
FLOW_SLOWER_KEY = _key("MINUS")
FLOW_FASTER_KEY = _key("EQUALS")

# System keys
QUIT_KEY = _key("ESCAPE")
HELP_KEY = _key("h")

# Control descriptions for help display
CONTROL_DESCRIPTIONS = [
    "1-4: select brush",
    "[ / ]: brush size",
    "LClick: paint",
    "Space: pause",
    ".: step (paused)",
    "F: auto flow",
    "- / =: flow speed",
    "R: reset grid",
    "H: help",
    "Esc: quit",
]
