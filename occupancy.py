from __future__ import annotations

from typing import Iterable, List, Sequence

from board import CrossObstacle, interior_cells, is_obstacle, is_wall
from game_types import Cell


def is_hazard_at(hazards: Sequence[Cell], x: int, y: int) -> bool:
    """Linear membership scan; the hazard list is capped at a few dozen cells."""
    for hx, hy in hazards:
        if hx == x and hy == y:
            return True
    return False


def is_blocked(x: int, y: int, hazards: Sequence[Cell], obstacle: CrossObstacle) -> bool:
    """True if the cell is wall, obstacle or hazard."""
    if is_wall(x, y):
        return True
    if is_obstacle(obstacle, x, y):
        return True
    return is_hazard_at(hazards, x, y)


def free_interior_cells(
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
    exclude: Iterable[Cell] = (),
) -> List[Cell]:
    """Unblocked interior cells in row-major order, minus any *exclude* cells."""
    excluded = set(exclude)
    return [
        (x, y)
        for x, y in interior_cells()
        if (x, y) not in excluded and not is_blocked(x, y, hazards, obstacle)
    ]
