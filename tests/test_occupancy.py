"""Tests for occupancy queries."""

from __future__ import annotations

from board import BOARD_COLS, BOARD_ROWS, CrossObstacle, is_obstacle, is_wall
from occupancy import free_interior_cells, is_blocked, is_hazard_at

HAZARDS = [(3, 3), (10, 4), (40, 15), (1, 1)]


def test_is_hazard_at() -> None:
    assert is_hazard_at(HAZARDS, 10, 4)
    assert not is_hazard_at(HAZARDS, 4, 10)
    assert not is_hazard_at([], 3, 3)


def test_is_blocked_is_disjunction_of_wall_obstacle_hazard() -> None:
    obs = CrossObstacle.centered()
    for y in range(-1, BOARD_ROWS + 1):
        for x in range(-1, BOARD_COLS + 1):
            expected = is_wall(x, y) or is_obstacle(obs, x, y) or is_hazard_at(HAZARDS, x, y)
            assert is_blocked(x, y, HAZARDS, obs) == expected


def test_free_interior_cells_excludes_blocked_and_excluded() -> None:
    obs = CrossObstacle.centered()
    free = free_interior_cells(HAZARDS, obs, exclude=[(5, 5)])
    assert (5, 5) not in free
    assert not any(cell in free for cell in HAZARDS)
    assert not any(is_blocked(x, y, HAZARDS, obs) for x, y in free)
    interior = (BOARD_COLS - 2) * (BOARD_ROWS - 2)
    assert len(free) == interior - len(obs.cells()) - len(HAZARDS) - 1
