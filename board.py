"""Static board geometry: the outer wall ring and the cross obstacle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from game_types import Cell

BOARD_COLS = 50
BOARD_ROWS = 20


@dataclass(frozen=True)
class CrossObstacle:
    """Plus-shaped blocked region: one horizontal and one vertical arm through the center."""

    center_x: int
    center_y: int
    width: int = 11
    height: int = 11

    @classmethod
    def centered(cls, width: int = 11, height: int = 11) -> "CrossObstacle":
        return cls(BOARD_COLS // 2, BOARD_ROWS // 2, width, height)

    @property
    def half_width(self) -> int:
        return self.width // 2

    @property
    def half_height(self) -> int:
        return self.height // 2

    def cells(self) -> list[Cell]:
        """Every cell covered by the cross (the center appears once)."""
        out: list[Cell] = [
            (x, self.center_y)
            for x in range(self.center_x - self.half_width, self.center_x + self.half_width + 1)
        ]
        out.extend(
            (self.center_x, y)
            for y in range(self.center_y - self.half_height, self.center_y + self.half_height + 1)
            if y != self.center_y
        )
        return out


def on_board(x: int, y: int) -> bool:
    return 0 <= x < BOARD_COLS and 0 <= y < BOARD_ROWS


def is_wall(x: int, y: int) -> bool:
    """True on the 1-cell border ring and anywhere outside the board."""
    return x <= 0 or x >= BOARD_COLS - 1 or y <= 0 or y >= BOARD_ROWS - 1


def is_obstacle(obstacle: CrossObstacle, x: int, y: int) -> bool:
    cx, cy = obstacle.center_x, obstacle.center_y
    if y == cy and cx - obstacle.half_width <= x <= cx + obstacle.half_width:
        return True
    if x == cx and cy - obstacle.half_height <= y <= cy + obstacle.half_height:
        return True
    return False


def in_safe_margin(x: int, y: int) -> bool:
    """Interior cells that are not adjacent to the wall ring."""
    return 2 <= x <= BOARD_COLS - 3 and 2 <= y <= BOARD_ROWS - 3


def interior_cells() -> Iterator[Cell]:
    """Row-major walk over every non-wall cell."""
    for y in range(1, BOARD_ROWS - 1):
        for x in range(1, BOARD_COLS - 1):
            yield (x, y)
