"""Randomised entity placement: hazards, the rescue target and the respawn cell.

Hazards and targets are placed by rejection sampling over the board interior.
Sampling is capped at ``max_attempts`` draws per cell; past the cap the cell
is chosen uniformly from an explicit list of free cells instead, so
placement always terminates even on a crowded board.  Callers must still
leave room: asking for more cells than are free is a configuration error and
trips an assertion.
"""

from __future__ import annotations

import logging
from random import Random
from typing import List, Optional, Sequence

from board import BOARD_COLS, BOARD_ROWS, CrossObstacle, in_safe_margin, is_obstacle
from game_types import Cell
from occupancy import free_interior_cells, is_hazard_at

logger = logging.getLogger(__name__)

MAX_MINES = 50
DEFAULT_ATTEMPTS = 10_000


def _random_interior(rng: Random) -> Cell:
    return (rng.randint(1, BOARD_COLS - 2), rng.randint(1, BOARD_ROWS - 2))


def _sample_free_cell(
    rng: Random,
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
    exclude: Sequence[Cell],
    max_attempts: int,
) -> Cell:
    for _ in range(max_attempts):
        x, y = _random_interior(rng)
        if (x, y) in exclude:
            continue
        if is_obstacle(obstacle, x, y):
            continue
        if is_hazard_at(hazards, x, y):
            continue
        return (x, y)

    free = free_interior_cells(hazards, obstacle, exclude)
    logger.warning(
        "placement gave up sampling after %s attempts, picking from %s free cells",
        max_attempts,
        len(free),
    )
    return rng.choice(free)


def place_hazards(
    existing: Sequence[Cell],
    target_count: int,
    agent_pos: Cell,
    target_pos: Optional[Cell],
    obstacle: CrossObstacle,
    rng: Random,
    max_mines: int = MAX_MINES,
    max_attempts: int = DEFAULT_ATTEMPTS,
) -> List[Cell]:
    """Return *existing* extended with fresh hazards up to ``target_count``.

    Args:
        existing: Current hazard cells (left untouched).
        target_count: Desired total; clamped to ``max_mines``.
        agent_pos: Agent head, never covered.
        target_pos: Rescue target, never covered (None before one exists).
        obstacle: The static cross.
        rng: Random source.
        max_mines: Hard cap on the hazard count.
        max_attempts: Rejection-sampling draws per new hazard.

    Returns:
        A new list; existing hazards keep their order, new ones are appended.
    """
    target_count = min(target_count, max_mines)
    hazards = list(existing)
    needed = target_count - len(hazards)
    if needed <= 0:
        return hazards

    exclude = [agent_pos] if target_pos is None else [agent_pos, target_pos]
    assert needed <= len(free_interior_cells(hazards, obstacle, exclude)), (
        f"cannot place {needed} hazards: board is saturated"
    )

    while len(hazards) < target_count:
        cell = _sample_free_cell(rng, hazards, obstacle, exclude, max_attempts)
        hazards.append(cell)
        logger.debug("hazard placed at %s (%s/%s)", cell, len(hazards), target_count)
    return hazards


def place_target(
    agent_pos: Cell,
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
    rng: Random,
    max_attempts: int = DEFAULT_ATTEMPTS,
) -> Cell:
    """Pick a fresh rescue target that avoids the agent, hazards and obstacle."""
    exclude = [agent_pos]
    assert free_interior_cells(hazards, obstacle, exclude), "no free cell for the target"
    return _sample_free_cell(rng, hazards, obstacle, exclude, max_attempts)


def find_safe_spawn(
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
    preferred: Cell = (10, 10),
    exclude: Sequence[Cell] = (),
) -> Cell:
    """Deterministic respawn cell: the free cell closest to *preferred*.

    Scans row by row away from the wall ring and keeps the first cell with a
    strictly smaller Manhattan distance, so ties go to the smaller y, then
    the smaller x.  Cells in *exclude* (the rescue target) are skipped like hazards.
    """
    px, py = preferred
    best: Cell = (BOARD_COLS // 2, BOARD_ROWS // 2)
    best_dist: Optional[int] = None

    for y in range(BOARD_ROWS):
        for x in range(BOARD_COLS):
            if not in_safe_margin(x, y):
                continue
            if is_obstacle(obstacle, x, y) or is_hazard_at(hazards, x, y):
                continue
            if (x, y) in exclude:
                continue
            dist = abs(x - px) + abs(y - py)
            if best_dist is None or dist < best_dist:
                best_dist = dist
                best = (x, y)
    return best
