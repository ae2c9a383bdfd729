from __future__ import annotations

from typing import Any, Dict, Tuple

from game_types import Color


def clamp_int(v: int, lo: int, hi: int) -> int:
    """Clamp an integer value into the inclusive range [lo, hi]."""
    return lo if v < lo else hi if v > hi else v


def clamp_float(v: float, lo: float, hi: float) -> float:
    """Clamp a float value into the inclusive range [lo, hi]."""
    return lo if v < lo else hi if v > hi else v


def as_int(value: Any, default: int, lo: int, hi: int) -> int:
    """Coerce a config value to an int in [lo, hi], falling back to default."""
    try:
        return clamp_int(int(value), lo, hi)
    except (TypeError, ValueError):
        return default


def as_float(value: Any, default: float, lo: float, hi: float) -> float:
    """Coerce a config value to a float in [lo, hi], falling back to default."""
    try:
        return clamp_float(float(value), lo, hi)
    except (TypeError, ValueError):
        return default


def as_color(value: Any, default: Color) -> Color:
    """Parse a [r, g, b] list into a clamped color tuple, or return default."""
    if isinstance(value, (list, tuple)) and len(value) >= 3:
        try:
            return (
                clamp_int(int(value[0]), 0, 255),
                clamp_int(int(value[1]), 0, 255),
                clamp_int(int(value[2]), 0, 255),
            )
        except (TypeError, ValueError):
            return default
    return default


def as_cell(value: Any, default: Tuple[int, int]) -> Tuple[int, int]:
    """Parse an [x, y] pair (or {"x":..,"y":..}) into a cell tuple."""
    if isinstance(value, (list, tuple)) and len(value) >= 2:
        try:
            return int(value[0]), int(value[1])
        except (TypeError, ValueError):
            return default
    if isinstance(value, dict):
        try:
            return int(value.get("x", default[0])), int(value.get("y", default[1]))
        except (TypeError, ValueError):
            return default
    return default


def deep_get(d: Dict[str, Any], path: str, default: Any) -> Any:
    """Get a nested value from a dict using a dotted path (e.g. "window.width")."""
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur
