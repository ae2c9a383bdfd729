"""Tests for board geometry."""

from __future__ import annotations

from board import (
    BOARD_COLS,
    BOARD_ROWS,
    CrossObstacle,
    in_safe_margin,
    interior_cells,
    is_obstacle,
    is_wall,
)


class TestIsWall:
    def test_border_ring_is_wall(self) -> None:
        assert is_wall(0, 5)
        assert is_wall(BOARD_COLS - 1, 5)
        assert is_wall(5, 0)
        assert is_wall(5, BOARD_ROWS - 1)

    def test_outside_board_is_wall(self) -> None:
        assert is_wall(-1, 3)
        assert is_wall(BOARD_COLS, 3)
        assert is_wall(3, -4)
        assert is_wall(3, BOARD_ROWS + 2)

    def test_interior_corners_are_not_wall(self) -> None:
        assert not is_wall(1, 1)
        assert not is_wall(BOARD_COLS - 2, BOARD_ROWS - 2)


class TestCrossObstacle:
    def test_centered_defaults(self) -> None:
        obs = CrossObstacle.centered()
        assert (obs.center_x, obs.center_y) == (25, 10)
        assert (obs.half_width, obs.half_height) == (5, 5)

    def test_horizontal_arm(self) -> None:
        obs = CrossObstacle.centered()
        assert is_obstacle(obs, 20, 10)
        assert is_obstacle(obs, 30, 10)
        assert not is_obstacle(obs, 19, 10)
        assert not is_obstacle(obs, 31, 10)

    def test_vertical_arm(self) -> None:
        obs = CrossObstacle.centered()
        assert is_obstacle(obs, 25, 5)
        assert is_obstacle(obs, 25, 15)
        assert not is_obstacle(obs, 25, 4)
        assert not is_obstacle(obs, 25, 16)

    def test_off_arm_cells_are_free(self) -> None:
        obs = CrossObstacle.centered()
        assert not is_obstacle(obs, 24, 11)
        assert not is_obstacle(obs, 26, 9)

    def test_cells_match_predicate(self) -> None:
        obs = CrossObstacle.centered()
        cells = obs.cells()
        assert len(cells) == len(set(cells)) == 21
        expected = {
            (x, y) for y in range(BOARD_ROWS) for x in range(BOARD_COLS) if is_obstacle(obs, x, y)
        }
        assert set(cells) == expected


def test_safe_margin_excludes_cells_next_to_wall() -> None:
    assert in_safe_margin(2, 2)
    assert in_safe_margin(BOARD_COLS - 3, BOARD_ROWS - 3)
    assert not in_safe_margin(1, 5)
    assert not in_safe_margin(5, BOARD_ROWS - 2)


def test_interior_cells_are_row_major_and_wall_free() -> None:
    cells = list(interior_cells())
    assert len(cells) == (BOARD_COLS - 2) * (BOARD_ROWS - 2)
    assert cells[0] == (1, 1)
    assert cells[1] == (2, 1)
    assert not any(is_wall(x, y) for x, y in cells)
