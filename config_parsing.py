from __future__ import annotations

from typing import Any, Dict, Tuple

from models import DisplayConfig, GameConfig
from utils import as_color, as_int, deep_get

DEFAULT_COLORS: Dict[str, Tuple[int, int, int]] = {
    "floor": (40, 40, 40),
    "grid": (60, 60, 60),
    "wall": (130, 130, 130),
    "obstacle": (100, 100, 110),
    "mine": (230, 41, 55),
    "mine_marked": (253, 249, 0),
    "person": (0, 228, 48),
    "robot_head": (0, 121, 241),
    "robot_body": (102, 191, 255),
    "robot_invincible": (255, 161, 0),
    "panel": (30, 30, 30),
    "text": (245, 245, 245),
    "accent": (102, 191, 255),
    "warning": (230, 41, 55),
    "hint": (200, 200, 200),
}


def parse_game_config(raw: Dict[str, Any]) -> GameConfig:
    """Parse gameplay settings from config data.

    Args:
        raw: Full config dict; gameplay keys live under "game".

    Returns:
        GameConfig with defaults applied.
    """
    game_raw = raw.get("game", {}) if isinstance(raw, dict) else {}
    if not isinstance(game_raw, dict):
        game_raw = {}
    return GameConfig.from_dict(game_raw)


def _parse_colors(raw: Any) -> Dict[str, Tuple[int, int, int]]:
    """Overlay configured colors on the default palette, ignoring unknown keys."""
    colors = dict(DEFAULT_COLORS)
    if not isinstance(raw, dict):
        return colors
    for key, value in raw.items():
        if key in colors:
            colors[key] = as_color(value, colors[key])
    return colors


def parse_display_config(raw: Dict[str, Any]) -> DisplayConfig:
    """Parse window/render settings used by the pygame host.

    Args:
        raw: Full config dict.

    Returns:
        DisplayConfig with defaults applied.
    """
    if not isinstance(raw, dict):
        raw = {}
    title = deep_get(raw, "window.title", "Rescue Bot")
    return DisplayConfig(
        title=str(title) if title else "Rescue Bot",
        tile_size=as_int(deep_get(raw, "window.tile_size", 24), 24, 8, 64),
        panel_width=as_int(deep_get(raw, "window.panel_width", 380), 380, 200, 800),
        fps=as_int(deep_get(raw, "window.fps", 60), 60, 10, 240),
        bg=as_color(deep_get(raw, "window.bg", [25, 25, 25]), (25, 25, 25)),
        colors=_parse_colors(deep_get(raw, "render.colors", {})),
    )
