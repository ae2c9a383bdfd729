"""Autonomous steering for the robot.

Every tick the robot runs a fresh breadth-first search from its head to the
rescue target over the free cells of the board.  Hazards can appear between
ticks, so no path is cached.  If the target is walled off the robot falls
back to a random safe neighbour, and failing that keeps its heading.
"""

from __future__ import annotations

import logging
from collections import deque
from random import Random
from typing import List, Optional, Sequence

from board import BOARD_COLS, BOARD_ROWS, CrossObstacle, on_board
from game_types import BFS_ORDER, DIRECTIONS, DIR_DELTA, Cell, Direction, delta_to_direction, step
from occupancy import is_blocked

logger = logging.getLogger(__name__)

_NO_PARENT = -1


def _index(x: int, y: int) -> int:
    return y * BOARD_COLS + x


def bfs_next_direction(
    start: Cell,
    target: Cell,
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
) -> Optional[Direction]:
    """First step of a shortest 4-connected path from *start* to *target*.

    Returns None when the target is unreachable (or *start* is already on it).
    Blocked cells are never expanded; the start cell itself is not tested.
    """
    sx, sy = start
    tx, ty = target
    if not on_board(sx, sy) or not on_board(tx, ty) or start == target:
        return None

    # Flat arena over the whole board, indexed y * BOARD_COLS + x.
    size = BOARD_COLS * BOARD_ROWS
    visited: List[bool] = [False] * size
    parent: List[int] = [_NO_PARENT] * size

    start_idx = _index(sx, sy)
    target_idx = _index(tx, ty)
    visited[start_idx] = True
    queue: deque[Cell] = deque([start])
    found = False

    while queue:
        cx, cy = queue.popleft()
        if cx == tx and cy == ty:
            found = True
            break
        for name in BFS_ORDER:
            dx, dy = DIR_DELTA[name]
            nx, ny = cx + dx, cy + dy
            if not on_board(nx, ny):
                continue
            idx = _index(nx, ny)
            if visited[idx]:
                continue
            if is_blocked(nx, ny, hazards, obstacle):
                continue
            visited[idx] = True
            parent[idx] = _index(cx, cy)
            queue.append((nx, ny))

    if not found:
        return None

    # Walk back from the target to the cell whose parent is the start.
    cur = target_idx
    while parent[cur] != start_idx:
        cur = parent[cur]
        if cur == _NO_PARENT:
            return None

    step_x, step_y = cur % BOARD_COLS, cur // BOARD_COLS
    return delta_to_direction(step_x - sx, step_y - sy)


def fallback_direction(
    head: Cell,
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
    rng: Random,
) -> Optional[Direction]:
    """A random direction whose neighbour is unblocked, or None if boxed in."""
    order = list(DIRECTIONS)
    rng.shuffle(order)
    for name in order:
        nx, ny = step(head, name)
        if not is_blocked(nx, ny, hazards, obstacle):
            return name
    return None


def next_direction(
    head: Cell,
    target: Cell,
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
    rng: Random,
) -> Optional[Direction]:
    """Shortest-path step towards *target*, degrading to local avoidance."""
    direction = bfs_next_direction(head, target, hazards, obstacle)
    if direction is not None:
        return direction

    direction = fallback_direction(head, hazards, obstacle, rng)
    logger.debug("no path from %s to %s, fallback -> %s", head, target, direction)
    return direction
