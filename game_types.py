from __future__ import annotations

from typing import Dict, Literal, Tuple

Color = Tuple[int, int, int]

# (x, y) board coordinate, x = column, y = row.
Cell = Tuple[int, int]

Direction = Literal["up", "down", "left", "right"]

DIRECTIONS: Tuple[Direction, ...] = ("up", "down", "left", "right")

DIR_DELTA: Dict[str, Cell] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

# Neighbour expansion order for the path search: +x, -x, +y, -y.
BFS_ORDER: Tuple[Direction, ...] = ("right", "left", "down", "up")


def delta_to_direction(dx: int, dy: int) -> Direction | None:
    """Map a unit step back to its direction name (None for anything else)."""
    for name, delta in DIR_DELTA.items():
        if delta == (dx, dy):
            return name  # type: ignore[return-value]
    return None


def step(cell: Cell, direction: str) -> Cell:
    """Return the neighbouring cell one step in *direction*."""
    dx, dy = DIR_DELTA[direction]
    return (cell[0] + dx, cell[1] + dy)
